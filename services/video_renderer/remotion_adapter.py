"""
Remotion Adapter
================
Adapter for the Remotion video rendering engine (default).

The colorized Lottie document is written to a props file and handed to
the `VideoComposition` through `npx remotion render`.
"""

import asyncio
import json
import logging
import os
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .base import (
    VideoRenderer,
    RenderConfig,
    RenderRequest,
    RenderResponse,
    RenderEngine,
    RenderError,
)

logger = logging.getLogger(__name__)


class RemotionAdapter(VideoRenderer):
    """
    Remotion rendering adapter.

    Remotion renders React components in headless Chromium, so every
    writable location it uses is redirected through the child process
    environment built from RenderConfig.
    """

    def __init__(self, config: RenderConfig):
        super().__init__(config)
        self.project_dir = Path(config.project_dir)
        logger.info(f"[Remotion] Initialized with project dir: {self.project_dir}")

    def get_engine_name(self) -> RenderEngine:
        return RenderEngine.REMOTION

    def validate_request(self, request: RenderRequest) -> None:
        super().validate_request(request)
        if not self.project_dir.exists():
            raise RenderError(f"Remotion project directory not found: {self.project_dir}")

    def build_props(self, request: RenderRequest) -> Dict:
        """Props passed to the composition: params plus the colorized animation."""
        props = request.params.to_composition_props()
        props["duracao"] = request.duration
        props["animationData"] = request.document
        return props

    def build_command(self, request: RenderRequest, output_path: Path, props_path: Path) -> List[str]:
        last_frame = self.frame_count(request.duration) - 1
        return [
            "npx", "remotion", "render",
            self.config.entry_point,
            self.config.composition,
            str(output_path),
            f"--props={props_path}",
            f"--frames=0-{last_frame}",
            "--overwrite",
        ]

    def build_env(self) -> Dict[str, str]:
        """Environment for the render process; the parent env is left untouched."""
        env = dict(os.environ)
        env.update({
            "REMOTION_CACHE_DIR": str(self.config.cache_dir),
            "REMOTION_BROWSER_CACHE_DIR": str(self.config.cache_dir),
            "REMOTION_OUTPUT_DIR": str(self.config.output_dir),
            "REMOTION_TEMP_DIR": str(self.config.temp_dir),
            "TMPDIR": str(self.config.temp_dir),
        })
        return env

    async def render(
        self,
        request: RenderRequest,
        on_progress: Optional[Callable[[float], None]] = None
    ) -> RenderResponse:
        """Render video using the Remotion CLI."""
        start_time = time.time()

        logger.info(f"[Remotion] Starting render: {request.job_id}")
        logger.info(f"  Composition: {self.config.composition}")
        logger.info(f"  Duration: {request.duration}s")

        self.validate_request(request)
        self.config.ensure_dirs()

        if on_progress:
            on_progress(0.1)

        output_path = self.output_path_for(request)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        props_path = Path(self.config.temp_dir) / f"props-{request.job_id}.json"
        with open(props_path, "w", encoding="utf-8") as f:
            json.dump(self.build_props(request), f)

        cmd = self.build_command(request, output_path, props_path)
        logger.info(f"[Remotion] Running: {' '.join(cmd)}")

        if on_progress:
            on_progress(0.3)

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=str(self.project_dir),
                env=self.build_env(),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            try:
                stdout, stderr = await asyncio.wait_for(
                    process.communicate(), timeout=self.config.timeout_seconds
                )
            except asyncio.TimeoutError:
                process.kill()
                await process.wait()
                raise RenderError(f"Remotion render timed out after {self.config.timeout_seconds}s")
        except FileNotFoundError as e:
            raise RenderError(f"npx not installed: {e}") from e
        finally:
            props_path.unlink(missing_ok=True)

        if process.returncode != 0:
            error_msg = stderr.decode(errors="replace") if stderr else "Unknown error"
            logger.error(f"[Remotion] Render failed: {error_msg}")
            raise RenderError(f"Remotion render failed: {error_msg}")

        if not output_path.exists():
            raise RenderError(f"Remotion finished but {output_path} was not created")

        if on_progress:
            on_progress(1.0)

        render_time = time.time() - start_time
        logger.info(f"[Remotion] Render complete: {output_path} ({render_time:.2f}s)")

        return RenderResponse(
            job_id=request.job_id,
            video_path=str(output_path),
            duration_seconds=request.duration,
            file_size_bytes=output_path.stat().st_size,
            render_time_seconds=render_time,
            engine_used=RenderEngine.REMOTION,
            metadata={
                "composition": self.config.composition,
                "frames": self.frame_count(request.duration),
                "layers_count": len(request.document.get("layers", [])),
            }
        )
