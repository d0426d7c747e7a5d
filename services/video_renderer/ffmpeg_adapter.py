"""
FFmpeg Adapter
==============
Fallback renderer used when Remotion is unavailable.

Produces a solid background in the requested background color with the
main text drawn in the centre. The Lottie animation itself is not drawn.
"""

import asyncio
import subprocess
import time
from pathlib import Path
from typing import Callable, List, Optional

from loguru import logger

from config import settings
from services.lottie.colors import hex_to_normalized_rgba, normalized_rgba_to_hex

from .base import (
    VideoRenderer,
    RenderConfig,
    RenderRequest,
    RenderResponse,
    RenderEngine,
    RenderError,
)

DEFAULT_TEXT = "Vídeo gerado!"


class FFmpegAdapter(VideoRenderer):
    """Solid-color + text renderer built on the ffmpeg CLI."""

    def __init__(self, config: RenderConfig):
        super().__init__(config)
        logger.info(f"🎞️  FFmpeg adapter initialized ({config.ffmpeg_path})")

    def get_engine_name(self) -> RenderEngine:
        return RenderEngine.FFMPEG

    @staticmethod
    def ffmpeg_color(hex_color: Optional[str]) -> str:
        """'#1e90ff' -> '0x1E90FF'. Raises InvalidColorFormat on bad input."""
        rgba = hex_to_normalized_rgba(hex_color or settings.DEFAULT_BACKGROUND_COLOR, field="background_color")
        return "0x" + normalized_rgba_to_hex(rgba)[1:]

    @staticmethod
    def _escape_filter_path(path: Path) -> str:
        return str(path).replace("\\", "\\\\").replace(":", "\\:").replace("'", "\\'")

    def build_command(self, request: RenderRequest, output_path: Path, text_path: Path) -> List[str]:
        size = f"{self.config.width}x{self.config.height}"
        background = self.ffmpeg_color(request.params.background_color)
        text_color = self.ffmpeg_color(request.params.secondary_color or "#FFFFFF")
        drawtext = (
            f"drawtext=textfile='{self._escape_filter_path(text_path)}'"
            f":fontsize=72:fontcolor={text_color}"
            ":x=(w-text_w)/2:y=(h-text_h)/2"
        )
        return [
            self.config.ffmpeg_path, "-y",
            "-f", "lavfi",
            "-i", f"color=c={background}:s={size}:r={self.config.fps}",
            "-t", str(request.duration),
            "-vf", drawtext,
            "-c:v", "libx264",
            "-pix_fmt", "yuv420p",
            str(output_path),
        ]

    async def render(
        self,
        request: RenderRequest,
        on_progress: Optional[Callable[[float], None]] = None
    ) -> RenderResponse:
        start_time = time.time()
        self.validate_request(request)
        self.config.ensure_dirs()

        output_path = self.output_path_for(request)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        text_path = Path(self.config.temp_dir) / f"text-{request.job_id}.txt"
        text_path.write_text(request.params.text or DEFAULT_TEXT, encoding="utf-8")

        try:
            cmd = self.build_command(request, output_path, text_path)
            logger.info(f"🎬 FFmpeg render {request.job_id}: {request.duration}s")

            if on_progress:
                on_progress(0.2)

            result = await asyncio.to_thread(
                subprocess.run, cmd,
                capture_output=True, text=True, timeout=self.config.timeout_seconds,
            )
        except FileNotFoundError as e:
            raise RenderError("ffmpeg not installed") from e
        except subprocess.TimeoutExpired as e:
            raise RenderError(f"FFmpeg render timed out after {self.config.timeout_seconds}s") from e
        finally:
            text_path.unlink(missing_ok=True)

        if result.returncode != 0:
            logger.error(f"FFmpeg failed: {result.stderr[-500:]}")
            raise RenderError(f"FFmpeg render failed: {result.stderr[-500:]}")

        if not output_path.exists():
            raise RenderError(f"FFmpeg finished but {output_path} was not created")

        if on_progress:
            on_progress(1.0)

        render_time = time.time() - start_time
        logger.info(f"✅ FFmpeg render complete: {output_path} ({render_time:.2f}s)")

        return RenderResponse(
            job_id=request.job_id,
            video_path=str(output_path),
            duration_seconds=request.duration,
            file_size_bytes=output_path.stat().st_size,
            render_time_seconds=render_time,
            engine_used=RenderEngine.FFMPEG,
            metadata={"fallback": True},
        )
