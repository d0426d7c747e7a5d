"""
Video Renderer Service
======================
Turns a colorized Lottie document into an MP4 with the adapter pattern.

Adapters:
- Remotion: renders the Lottie animation through the VideoComposition
- FFmpeg: solid background + text fallback
"""

from .base import (
    VideoRenderer,
    RenderConfig,
    RenderRequest,
    RenderResponse,
    RenderEngine,
    RenderError,
)
from .remotion_adapter import RemotionAdapter
from .ffmpeg_adapter import FFmpegAdapter
from .factory import VideoRendererFactory

__all__ = [
    "VideoRenderer",
    "RenderConfig",
    "RenderRequest",
    "RenderResponse",
    "RenderEngine",
    "RenderError",
    "RemotionAdapter",
    "FFmpegAdapter",
    "VideoRendererFactory",
]
