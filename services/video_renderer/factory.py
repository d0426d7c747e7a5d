"""
Video Renderer Factory
======================
Factory for creating video renderer adapters.

Defaults to Remotion, falls back to FFmpeg if configured.
"""

import logging
import os
from typing import Optional, Union

from config import settings

from .base import VideoRenderer, RenderConfig, RenderEngine
from .ffmpeg_adapter import FFmpegAdapter
from .remotion_adapter import RemotionAdapter

logger = logging.getLogger(__name__)


class VideoRendererFactory:
    """
    Factory for creating video renderer instances.

    Default: Remotion (renders the colorized Lottie animation)
    Fallback: FFmpeg (solid background + text)
    """

    @staticmethod
    def create(
        engine: Optional[Union[RenderEngine, str]] = None,
        config: Optional[RenderConfig] = None
    ) -> VideoRenderer:
        """
        Create a video renderer instance.

        Args:
            engine: Render engine to use (default: settings.VIDEO_RENDERER_ENGINE)
            config: Render configuration (default: built from settings)

        Returns:
            VideoRenderer instance
        """
        if config is None:
            config = settings.build_render_config()

        if engine is None:
            engine = settings.VIDEO_RENDERER_ENGINE

        # Check environment variable override
        env_engine = os.getenv("VIDEO_RENDERER_ENGINE", "").lower()
        if env_engine:
            engine = env_engine
            logger.info(f"[Factory] Using {env_engine} (env override)")

        try:
            engine = RenderEngine(engine)
        except ValueError:
            raise ValueError(f"Unknown render engine: {engine}")

        if engine == RenderEngine.REMOTION:
            logger.info("[Factory] Creating Remotion adapter (default)")
            return RemotionAdapter(config)
        logger.info("[Factory] Creating FFmpeg adapter (fallback)")
        return FFmpegAdapter(config)

    @staticmethod
    def create_default(config: Optional[RenderConfig] = None) -> VideoRenderer:
        """Create default renderer (Remotion, unless overridden by env)."""
        return VideoRendererFactory.create(config=config)
