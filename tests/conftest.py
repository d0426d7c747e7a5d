"""
Shared fixtures for lottie-video tests.
"""
from pathlib import Path
from typing import Callable, List, Optional

import pytest

from services.video_renderer import (
    RenderConfig,
    RenderEngine,
    RenderError,
    RenderRequest,
    RenderResponse,
    VideoRenderer,
)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


class FakeRenderer(VideoRenderer):
    """Writes a placeholder file instead of calling an external engine."""

    def __init__(self, config: RenderConfig, fail: bool = False):
        super().__init__(config)
        self.fail = fail
        self.requests: List[RenderRequest] = []
        self.progress: List[float] = []

    def get_engine_name(self) -> RenderEngine:
        return RenderEngine.REMOTION

    async def render(
        self,
        request: RenderRequest,
        on_progress: Optional[Callable[[float], None]] = None
    ) -> RenderResponse:
        self.requests.append(request)
        if on_progress:
            on_progress(0.5)
            self.progress.append(0.5)
        if self.fail:
            raise RenderError("engine exploded")

        output_path = self.output_path_for(request)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(b"\x00\x00\x00\x20ftypisom")
        return RenderResponse(
            job_id=request.job_id,
            video_path=str(output_path),
            duration_seconds=request.duration,
            file_size_bytes=output_path.stat().st_size,
            render_time_seconds=0.01,
            engine_used=RenderEngine.REMOTION,
        )


@pytest.fixture
def render_config(tmp_path):
    return RenderConfig(
        output_dir=tmp_path / "output",
        temp_dir=tmp_path / "tmp",
        cache_dir=tmp_path / "cache",
        project_dir=tmp_path / "remotion",
    )


@pytest.fixture
def fake_renderer(render_config):
    return FakeRenderer(render_config)


@pytest.fixture
def template_dir():
    return TEMPLATE_DIR


@pytest.fixture
def lottie_document():
    """Small template: one shape layer with a group of fill/stroke/gradient/rect items."""
    return {
        "v": "5.7.4",
        "fr": 24,
        "ip": 0,
        "op": 48,
        "w": 1080,
        "h": 1920,
        "nm": "fixture",
        "layers": [
            {
                "nm": "Shapes",
                "ty": 4,
                "shapes": [
                    {
                        "ty": "gr",
                        "nm": "Group 1",
                        "it": [
                            {"ty": "rc", "nm": "Rect", "s": {"a": 0, "k": [100, 100]}},
                            {"ty": "fl", "nm": "Fill", "c": {"a": 0, "k": [0, 0, 0, 1], "ix": 4}},
                            {"ty": "st", "nm": "Stroke", "c": {"a": 0, "k": [0, 0, 0, 1], "ix": 3}, "w": {"a": 0, "k": 4}},
                            {
                                "ty": "gf",
                                "nm": "Gradient",
                                "g": {"p": 3, "k": {"a": 0, "k": [0, 0, 0, 0, 0.5, 0.5, 0.5, 0.5, 1, 1, 1, 1], "ix": 9}},
                            },
                            {"ty": "tr", "nm": "Transform"},
                        ],
                    },
                    {"ty": "mm", "nm": "Merge Paths"},
                ],
            },
            {"nm": "Null", "ty": 3},
            {"nm": "Image", "ty": 2, "refId": "image_0"},
        ],
    }



@pytest.fixture
def failing_renderer(render_config):
    return FakeRenderer(render_config, fail=True)
