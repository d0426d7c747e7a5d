"""
Lottie Video service configuration.
"""
import os
from pathlib import Path

# Service settings
SERVICE_NAME = "lottie-video"
SERVICE_VERSION = "1.0.0"
SERVICE_PORT = int(os.getenv("PORT", 3001))

# Paths
BASE_DIR = Path(__file__).parent.parent
TEMPLATE_DIR = Path(os.getenv("TEMPLATE_DIR", str(BASE_DIR / "templates")))
DEFAULT_TEMPLATE = os.getenv("DEFAULT_TEMPLATE", "default.json")
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", "/tmp/lottie-video/output"))
TEMP_DIR = Path(os.getenv("TEMP_DIR", "/tmp/lottie-video/tmp"))
CACHE_DIR = Path(os.getenv("CACHE_DIR", "/tmp/lottie-video/cache"))

# Remotion
REMOTION_PROJECT_DIR = Path(os.getenv("REMOTION_PROJECT_DIR", str(BASE_DIR / "remotion")))
REMOTION_ENTRY = os.getenv("REMOTION_ENTRY", "src/index.ts")
REMOTION_COMPOSITION = os.getenv("REMOTION_COMPOSITION", "VideoComposition")
VIDEO_RENDERER_ENGINE = os.getenv("VIDEO_RENDERER_ENGINE", "remotion")

# Output video
VIDEO_FPS = int(os.getenv("VIDEO_FPS", 24))
VIDEO_WIDTH = int(os.getenv("VIDEO_WIDTH", 1080))
VIDEO_HEIGHT = int(os.getenv("VIDEO_HEIGHT", 1920))
DEFAULT_DURATION_SECONDS = 6
MAX_DURATION_SECONDS = 60

# Rendering
RENDER_TIMEOUT_SECONDS = int(os.getenv("RENDER_TIMEOUT_SECONDS", 600))
RENDER_MAX_WORKERS = int(os.getenv("RENDER_MAX_WORKERS", 2))
MAX_STORED_JOBS = int(os.getenv("MAX_STORED_JOBS", 500))

# FFmpeg settings
FFMPEG_PATH = os.getenv("FFMPEG_PATH", "ffmpeg")

# Default colors used by the FFmpeg fallback and the example payload
DEFAULT_PRIMARY_COLOR = "#FF6B6B"
DEFAULT_SECONDARY_COLOR = "#4ECDC4"
DEFAULT_BACKGROUND_COLOR = "#1E90FF"


def build_render_config():
    """Build the RenderConfig handed to render adapters."""
    from services.video_renderer.base import RenderConfig

    return RenderConfig(
        output_dir=OUTPUT_DIR,
        temp_dir=TEMP_DIR,
        cache_dir=CACHE_DIR,
        project_dir=REMOTION_PROJECT_DIR,
        entry_point=REMOTION_ENTRY,
        composition=REMOTION_COMPOSITION,
        fps=VIDEO_FPS,
        width=VIDEO_WIDTH,
        height=VIDEO_HEIGHT,
        timeout_seconds=RENDER_TIMEOUT_SECONDS,
        ffmpeg_path=FFMPEG_PATH,
    )
