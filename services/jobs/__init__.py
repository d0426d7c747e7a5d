"""
Video Job Service
=================
Background rendering and status tracking for generate-video requests.
"""

from .video_jobs import VideoJob, VideoJobService, JobStatus, JobValidationError

__all__ = [
    "VideoJob",
    "VideoJobService",
    "JobStatus",
    "JobValidationError",
]
