"""
Tests for the video job service.
"""
from concurrent.futures import Executor, Future
from pathlib import Path

import pytest

from services.jobs import JobStatus, JobValidationError, VideoJobService
from services.lottie import InvalidColorFormat, TemplateLoader, TemplateNotFound


class InlineExecutor(Executor):
    """Runs each render on the calling thread."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        future.set_result(fn(*args, **kwargs))
        return future


@pytest.fixture
def service(template_dir, fake_renderer):
    service = VideoJobService(TemplateLoader(template_dir), fake_renderer, template_name="default.json", max_workers=1)
    yield service
    service.shutdown()


class TestValidation:

    def test_text_is_required(self, service):
        with pytest.raises(JobValidationError, match="texto_principal"):
            service.submit({"cor_primaria": "#FF6B6B"})

    @pytest.mark.parametrize("duration", [0, -1, 61])
    def test_duration_out_of_range(self, service, duration):
        with pytest.raises(JobValidationError):
            service.submit({"texto_principal": "Hi", "duracao": duration})

    def test_duration_wrong_type(self, service):
        with pytest.raises(JobValidationError):
            service.submit({"texto_principal": "Hi", "duracao": "six"})

    def test_body_must_be_object(self, service):
        with pytest.raises(JobValidationError):
            service.submit(["texto_principal"])

    def test_bad_color_fails_before_queueing(self, service, fake_renderer):
        with pytest.raises(InvalidColorFormat):
            service.submit({"texto_principal": "Hi", "cor_primaria": "red"})
        assert service.list_jobs() == []
        assert fake_renderer.requests == []

    def test_unknown_template(self, service):
        with pytest.raises(TemplateNotFound):
            service.submit({"texto_principal": "Hi"}, template_name="missing.json")


class TestLifecycle:

    def test_job_completes(self, service, fake_renderer):
        job = service.submit({"texto_principal": "Hi", "cor_primaria": "#FF6B6B", "duracao": 4})
        assert job.status in (JobStatus.PENDING, JobStatus.RENDERING, JobStatus.COMPLETED)

        service.shutdown(wait=True)
        done = service.get(job.job_id)

        assert done.status == JobStatus.COMPLETED
        assert done.progress == 1.0
        assert done.duration == 4
        assert done.engine == "remotion"
        assert Path(done.video_path).exists()
        assert done.file_size_bytes > 0
        assert done.started_at is not None
        assert done.completed_at is not None

    def test_renderer_gets_colorized_document(self, service, fake_renderer):
        service.submit({"texto_principal": "Hi", "cor_primaria": "#00FF00"})
        service.shutdown(wait=True)

        request = fake_renderer.requests[0]
        badge = request.document["layers"][0]["shapes"][0]["it"]
        fill = next(item for item in badge if item["ty"] == "fl")
        assert fill["c"]["k"] == [0.0, 1.0, 0.0, 1.0]
        assert request.params.text == "Hi"

    def test_default_duration(self, service, fake_renderer):
        job = service.submit({"texto_principal": "Hi"})
        service.shutdown(wait=True)
        assert service.get(job.job_id).duration == 6
        assert fake_renderer.requests[0].duration == 6

    def test_failure_is_recorded(self, template_dir, failing_renderer):
        service = VideoJobService(TemplateLoader(template_dir), failing_renderer)
        job = service.submit({"texto_principal": "Hi"})
        service.shutdown(wait=True)

        failed = service.get(job.job_id)
        assert failed.status == JobStatus.FAILED
        assert "engine exploded" in failed.error
        assert failed.is_finished

    def test_get_returns_snapshot(self, service):
        job = service.submit({"texto_principal": "Hi"})
        job.status = "tampered"
        assert service.get(job.job_id).status != "tampered"

    def test_unknown_job(self, service):
        assert service.get("does-not-exist") is None

    def test_list_newest_first(self, service):
        first = service.submit({"texto_principal": "one"})
        second = service.submit({"texto_principal": "two"})
        service.shutdown(wait=True)

        jobs = service.list_jobs()
        assert [job.job_id for job in jobs] == [second.job_id, first.job_id]

    def test_to_dict(self, service):
        job = service.submit({"texto_principal": "Hi", "cor_fundo": "#1E90FF"})
        service.shutdown(wait=True)
        data = service.get(job.job_id).to_dict()
        assert data["status"] == "completed"
        assert data["params"] == {"text": "Hi", "background_color": "#1E90FF"}
        assert data["template"] == "default.json"
        assert data["created_at"].endswith("+00:00")


class TestRetention:

    def test_oldest_finished_jobs_are_evicted(self, template_dir, fake_renderer):
        service = VideoJobService(
            TemplateLoader(template_dir), fake_renderer, executor=InlineExecutor(), max_jobs=2
        )
        jobs = [service.submit({"texto_principal": f"job {n}"}) for n in range(3)]

        assert service.get(jobs[0].job_id) is None
        assert [job.job_id for job in service.list_jobs()] == [jobs[2].job_id, jobs[1].job_id]

    def test_unfinished_jobs_are_kept(self, template_dir, fake_renderer):
        class HeldExecutor(Executor):
            def submit(self, fn, *args, **kwargs):
                return Future()

        service = VideoJobService(
            TemplateLoader(template_dir), fake_renderer, executor=HeldExecutor(), max_jobs=1
        )
        jobs = [service.submit({"texto_principal": f"job {n}"}) for n in range(3)]

        assert len(service.list_jobs()) == 3
        assert all(service.get(job.job_id).status == JobStatus.PENDING for job in jobs)
