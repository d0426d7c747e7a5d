"""
Lottie Video Service - Recolors Lottie templates and renders them to MP4.
Port: 3001
"""
from datetime import datetime, timezone
from pathlib import Path

from flask import Flask, jsonify, request, send_file
from loguru import logger

from config import settings
from services.jobs import JobStatus, JobValidationError, VideoJobService
from services.lottie import (
    ColorParameters,
    InvalidColorFormat,
    MalformedTemplate,
    TemplateLoader,
    TemplateNotFound,
    colorize,
)
from services.video_renderer import VideoRendererFactory

app = Flask(__name__)

SERVICE_NAME = settings.SERVICE_NAME
SERVICE_VERSION = settings.SERVICE_VERSION
SERVICE_PORT = settings.SERVICE_PORT

TEMPLATE_LOADER = TemplateLoader(settings.TEMPLATE_DIR)
JOB_SERVICE = VideoJobService(TEMPLATE_LOADER, VideoRendererFactory.create_default())


def _error(message, status_code):
    return jsonify({"status": "error", "error": message}), status_code


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat()
    })


@app.route("/api/colorize", methods=["POST"])
def colorize_template():
    """Return the recolored template document without rendering it."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error("JSON body required", 400)
    template_name = data.get("template", settings.DEFAULT_TEMPLATE)
    params = data.get("params", {})
    if not isinstance(params, dict):
        return _error("params must be a JSON object", 400)

    try:
        document = colorize(TEMPLATE_LOADER.load(template_name), params)
    except TemplateNotFound as e:
        return _error(str(e), 404)
    except InvalidColorFormat as e:
        return _error(str(e), 400)
    except MalformedTemplate as e:
        logger.error(f"Template {template_name} is broken: {e}")
        return _error(str(e), 500)

    return jsonify({
        "status": "success",
        "template": template_name,
        "document": document
    })


@app.route("/api/generate-video", methods=["POST"])
def generate_video():
    """Queue a video render. Poll /api/job-status/<job_id> for progress."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error("JSON body required", 400)

    try:
        job = JOB_SERVICE.submit(data, template_name=data.get("template"))
    except (JobValidationError, InvalidColorFormat) as e:
        return _error(str(e), 400)
    except TemplateNotFound as e:
        return _error(str(e), 404)
    except MalformedTemplate as e:
        logger.error(f"Template configuration error: {e}")
        return _error(str(e), 500)

    return jsonify({
        "status": "success",
        "job_id": job.job_id,
        "job_status": job.status,
        "status_url": f"/api/job-status/{job.job_id}",
        "download_url": f"/api/download-video/{job.job_id}",
        "message": "Video render started"
    }), 202


@app.route("/api/job-status/<job_id>", methods=["GET"])
def job_status(job_id):
    """Status of a render job."""
    job = JOB_SERVICE.get(job_id)
    if job is None:
        return _error("Job not found", 404)
    return jsonify({"status": "success", "job": job.to_dict()})


@app.route("/api/download-video/<job_id>", methods=["GET"])
def download_video(job_id):
    """Download the MP4 of a completed job."""
    job = JOB_SERVICE.get(job_id)
    if job is None:
        return _error("Job not found", 404)
    if job.status != JobStatus.COMPLETED or not job.video_path:
        return _error(f"Video not ready (status: {job.status})", 409)

    video_path = Path(job.video_path)
    if not video_path.exists():
        return _error("Video file no longer available", 410)

    return send_file(
        video_path,
        mimetype="video/mp4",
        as_attachment=True,
        download_name=f"video-{job_id}.mp4"
    )


@app.route("/api/jobs", methods=["GET"])
def list_jobs():
    """List all render jobs, newest first."""
    jobs = JOB_SERVICE.list_jobs()
    return jsonify({
        "status": "success",
        "count": len(jobs),
        "jobs": [job.to_dict() for job in jobs]
    })


@app.route("/api/video-info", methods=["GET"])
def video_info():
    """Describe the default template and the accepted payload."""
    try:
        info = TEMPLATE_LOADER.describe(settings.DEFAULT_TEMPLATE)
    except (TemplateNotFound, MalformedTemplate) as e:
        return _error(str(e), 500)

    return jsonify({
        "status": "success",
        "template": info.to_dict(),
        "output": {
            "resolution": f"{settings.VIDEO_WIDTH}x{settings.VIDEO_HEIGHT}",
            "fps": settings.VIDEO_FPS,
            "default_duration": settings.DEFAULT_DURATION_SECONDS,
            "max_duration": settings.MAX_DURATION_SECONDS
        },
        "example": ColorParameters.model_config["json_schema_extra"]["example"]
    })


if __name__ == "__main__":
    logger.info(f"🚀 {SERVICE_NAME} starting on port {SERVICE_PORT}")
    app.run(host="0.0.0.0", port=SERVICE_PORT, debug=True)
