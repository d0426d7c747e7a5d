"""
Video Jobs
==========
Queues video renders and tracks their status for polling clients.

Flow:
    payload -> ColorParameters -> template -> colorize() -> render (background thread)

Colorizing happens before the job is queued, so bad colors and broken
templates fail the submit call instead of a background job.
"""

import asyncio
import threading
import uuid
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger
from pydantic import ValidationError

from config import settings
from services.lottie import ColorParameters, TemplateLoader, colorize
from services.video_renderer import RenderRequest, VideoRenderer


class JobStatus:
    PENDING = "pending"
    RENDERING = "rendering"
    COMPLETED = "completed"
    FAILED = "failed"


class JobValidationError(ValueError):
    """Raised when a generate-video payload is incomplete or out of range."""


@dataclass
class VideoJob:
    """Status of one video render."""
    job_id: str
    status: str = JobStatus.PENDING
    progress: float = 0.0  # 0.0-1.0
    params: Dict[str, Any] = field(default_factory=dict)
    template: Optional[str] = None
    duration: float = 0.0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    video_path: Optional[str] = None
    file_size_bytes: Optional[int] = None
    engine: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_finished(self) -> bool:
        return self.status in (JobStatus.COMPLETED, JobStatus.FAILED)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_id": self.job_id,
            "status": self.status,
            "progress": round(self.progress, 3),
            "params": self.params,
            "template": self.template,
            "duration": self.duration,
            "created_at": self.created_at.isoformat(),
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "video_path": self.video_path,
            "file_size_bytes": self.file_size_bytes,
            "engine": self.engine,
            "error": self.error,
        }


class VideoJobService:
    """
    In-memory job store plus a bounded render pool.

    The store keeps at most `max_jobs` entries. Once full, each submit evicts
    the oldest finished jobs; pending and rendering jobs are always kept.

    Usage:
        service = VideoJobService(TemplateLoader("templates"), renderer)
        job = service.submit({"texto_principal": "Hi", "cor_primaria": "#FF6B6B"})
        service.get(job.job_id).status
    """

    # field -> request key reported when missing
    REQUIRED_FIELDS = {"text": "texto_principal"}

    def __init__(
        self,
        loader: TemplateLoader,
        renderer: VideoRenderer,
        template_name: str = settings.DEFAULT_TEMPLATE,
        max_workers: int = settings.RENDER_MAX_WORKERS,
        executor: Optional[Executor] = None,
        max_jobs: int = settings.MAX_STORED_JOBS,
    ):
        self.loader = loader
        self.renderer = renderer
        self.template_name = template_name
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="render")
        self.max_jobs = max_jobs
        self._jobs: Dict[str, VideoJob] = {}
        self._lock = threading.Lock()

    def validate_payload(self, payload: Mapping[str, Any]) -> ColorParameters:
        """
        Parse a generate-video payload.

        Raises:
            JobValidationError: Missing text, bad types or duration out of range
        """
        if not isinstance(payload, Mapping):
            raise JobValidationError("Request body must be a JSON object")

        try:
            params = ColorParameters.model_validate(dict(payload))
        except ValidationError as e:
            raise JobValidationError(f"Invalid parameters: {e.errors(include_url=False)}") from e

        missing = [key for name, key in self.REQUIRED_FIELDS.items() if getattr(params, name) is None]
        if missing:
            raise JobValidationError(f"Missing required fields: {', '.join(missing)}")

        if params.duration is not None and not 0 < params.duration <= settings.MAX_DURATION_SECONDS:
            raise JobValidationError(
                f"duration must be between 0 and {settings.MAX_DURATION_SECONDS} seconds"
            )
        return params

    def submit(self, payload: Mapping[str, Any], template_name: Optional[str] = None) -> VideoJob:
        """
        Validate, colorize and queue a render.

        Raises:
            JobValidationError, InvalidColorFormat, MalformedTemplate, TemplateNotFound
        """
        params = self.validate_payload(payload)
        template_name = template_name or self.template_name
        document = colorize(self.loader.load(template_name), params)
        duration = params.duration or settings.DEFAULT_DURATION_SECONDS

        job = VideoJob(
            job_id=str(uuid.uuid4()),
            params=params.model_dump(exclude_none=True),
            template=template_name,
            duration=duration,
        )
        with self._lock:
            self._jobs[job.job_id] = job
            self._evict_finished()

        request = RenderRequest(job_id=job.job_id, document=document, params=params, duration=duration)
        logger.info(f"🎬 Queued video job {job.job_id} ({template_name}, {duration}s)")
        self._executor.submit(self._run, request)
        return self.get(job.job_id)

    def get(self, job_id: str) -> Optional[VideoJob]:
        """Snapshot of a job, or None if unknown."""
        with self._lock:
            job = self._jobs.get(job_id)
            return replace(job) if job else None

    def list_jobs(self) -> List[VideoJob]:
        """All jobs, newest first."""
        with self._lock:
            return [replace(job) for job in reversed(self._jobs.values())]

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _evict_finished(self) -> None:
        """Drop the oldest finished jobs beyond max_jobs. Caller holds the lock."""
        overflow = len(self._jobs) - self.max_jobs
        if overflow <= 0:
            return
        stale = [job_id for job_id, job in self._jobs.items() if job.is_finished][:overflow]
        for job_id in stale:
            del self._jobs[job_id]
        if stale:
            logger.debug(f"Evicted {len(stale)} finished video jobs")

    def _update(self, job_id: str, **changes: Any) -> None:
        with self._lock:
            job = self._jobs[job_id]
            for key, value in changes.items():
                setattr(job, key, value)

    def _run(self, request: RenderRequest) -> None:
        job_id = request.job_id
        self._update(
            job_id,
            status=JobStatus.RENDERING,
            started_at=datetime.now(timezone.utc),
            engine=self.renderer.get_engine_name().value,
        )

        def on_progress(progress: float) -> None:
            self._update(job_id, progress=progress)

        try:
            response = asyncio.run(self.renderer.render(request, on_progress=on_progress))
        except Exception as e:
            logger.exception(f"❌ Video job {job_id} failed: {e}")
            self._update(
                job_id,
                status=JobStatus.FAILED,
                error=str(e),
                completed_at=datetime.now(timezone.utc),
            )
            return

        self._update(
            job_id,
            status=JobStatus.COMPLETED,
            progress=1.0,
            video_path=response.video_path,
            file_size_bytes=response.file_size_bytes,
            completed_at=datetime.now(timezone.utc),
        )
        logger.info(f"✅ Video job {job_id} completed in {response.render_time_seconds:.2f}s")
