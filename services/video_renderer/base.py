"""
Video Renderer Base Classes
===========================
Abstract base class and shared types for video rendering adapters.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from services.lottie.models import ColorParameters


class RenderEngine(str, Enum):
    """Supported rendering engines."""
    REMOTION = "remotion"
    FFMPEG = "ffmpeg"


class RenderError(RuntimeError):
    """Raised when an engine fails to produce a video."""


@dataclass
class RenderConfig:
    """
    Filesystem and output settings handed to a renderer.

    Every writable path the engine needs is listed here; adapters pass
    them to the child process instead of touching global state.
    """
    output_dir: Path
    temp_dir: Path
    cache_dir: Path
    project_dir: Path
    entry_point: str = "src/index.ts"
    composition: str = "VideoComposition"
    fps: int = 24
    width: int = 1080
    height: int = 1920
    timeout_seconds: int = 600
    ffmpeg_path: str = "ffmpeg"

    def ensure_dirs(self) -> None:
        for directory in (self.output_dir, self.temp_dir, self.cache_dir):
            Path(directory).mkdir(parents=True, exist_ok=True)


@dataclass
class RenderRequest:
    """Request for video rendering."""
    job_id: str
    document: Dict[str, Any]  # Colorized Lottie document
    params: ColorParameters
    duration: float  # Seconds
    output_path: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RenderResponse:
    """Response from video rendering."""
    job_id: str
    video_path: str
    duration_seconds: float
    file_size_bytes: int
    render_time_seconds: float
    engine_used: RenderEngine
    metadata: Optional[Dict[str, Any]] = None


class VideoRenderer(ABC):
    """
    Abstract base class for video rendering adapters.

    Each adapter (Remotion, FFmpeg) implements this interface.
    """

    def __init__(self, config: RenderConfig):
        self.config = config

    @abstractmethod
    def get_engine_name(self) -> RenderEngine:
        """Return the rendering engine name."""
        pass

    @abstractmethod
    async def render(
        self,
        request: RenderRequest,
        on_progress: Optional[Callable[[float], None]] = None
    ) -> RenderResponse:
        """
        Render a video from the request.

        Args:
            request: Rendering request with the colorized document
            on_progress: Optional callback for progress updates (progress: float)

        Returns:
            RenderResponse with video path and metadata

        Raises:
            RenderError: If rendering fails
        """
        pass

    def validate_request(self, request: RenderRequest) -> None:
        """
        Check that the request can be rendered.

        Raises:
            RenderError: If the request is not renderable
        """
        if request.duration <= 0:
            raise RenderError(f"Invalid duration: {request.duration}")
        if not isinstance(request.document, dict):
            raise RenderError("Render request has no document")

    def frame_count(self, duration: float) -> int:
        """Number of frames for `duration` seconds at the configured fps."""
        return max(1, int(round(duration * self.config.fps)))

    def output_path_for(self, request: RenderRequest) -> Path:
        if request.output_path:
            return Path(request.output_path)
        return Path(self.config.output_dir) / f"{request.job_id}.mp4"
