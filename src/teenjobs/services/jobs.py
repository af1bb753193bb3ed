"""Job posting, browsing, bookmarking and images."""

from __future__ import annotations

from typing import Any, Sequence

from ..backend import (
    JOB_APPLICATIONS,
    JOB_IMAGES,
    JOB_IMAGES_BUCKET,
    JOBS,
    SAVED_JOBS,
    Backend,
    eq,
    in_,
)
from ..core.filtering import JobFilterEngine
from ..core.lifecycle import ensure_job_transition
from ..core.validation import validate_profile
from ..errors import InvalidTransitionError, ProfileIncompleteError
from ..schemas import (
    ApplicationStatus,
    Job,
    JobDraft,
    JobFilters,
    JobImage,
    JobStatus,
    JobWithStatus,
    Role,
    SavedJob,
)
from .base import BackendService, image_storage_path


class JobsService(BackendService):
    """Employer postings and the employee's view of open jobs."""

    def __init__(self, backend: Backend, *, engine: JobFilterEngine | None = None) -> None:
        super().__init__(backend)
        self._engine = engine or JobFilterEngine()

    # employer side

    def create_job(self, draft: JobDraft) -> Job:
        employer = self._require_role(Role.EMPLOYER)
        check = validate_profile(Role.EMPLOYER, employer)
        if not check.is_valid:
            raise ProfileIncompleteError(check)

        row = draft.model_dump(mode="json")
        row.update(employer_id=employer.id, status=JobStatus.OPEN.value)
        job = Job.model_validate(self._backend.insert(JOBS, row))
        self._logger.info("jobs.create", job_id=job.id, employer_id=employer.id, tags=job.tags)
        return job

    def employer_jobs(self) -> list[Job]:
        employer = self._require_role(Role.EMPLOYER)
        rows = self._backend.select(JOBS, eq("employer_id", employer.id), order_by="created_at", descending=True)
        return [Job.model_validate(row) for row in rows]

    def update_job_status(self, job_id: str, status: JobStatus) -> Job:
        employer = self._require_role(Role.EMPLOYER)
        job = self._get_job(job_id)
        self._ensure_owner(job, employer)
        target = JobStatus(status)
        ensure_job_transition(job.status, target)

        rows = self._backend.update(
            JOBS, {"status": target.value}, eq("id", job.id), eq("status", job.status.value)
        )
        if not rows:
            raise InvalidTransitionError("job", self._get_job(job.id).status.value, target.value)
        self._logger.info("jobs.status", job_id=job.id, previous=job.status.value, status=target.value)
        return Job.model_validate(rows[0])

    def close_job(self, job_id: str) -> Job:
        return self.update_job_status(job_id, JobStatus.CLOSED)

    def add_job_image(self, job_id: str, filename: str, data: bytes, content_type: str = "image/jpeg") -> JobImage:
        employer = self._require_role(Role.EMPLOYER)
        job = self._get_job(job_id)
        self._ensure_owner(job, employer)
        path = image_storage_path(job.id, filename, content_type, len(data))

        self._backend.upload(JOB_IMAGES_BUCKET, path, data, content_type)
        row = self._backend.insert(
            JOB_IMAGES,
            {
                "job_id": job.id,
                "image_url": self._backend.public_url(JOB_IMAGES_BUCKET, path),
                "storage_path": path,
            },
        )
        self._logger.info("jobs.image_added", job_id=job.id, path=path)
        return JobImage.model_validate(row)

    def job_images(self, job_id: str) -> list[JobImage]:
        rows = self._backend.select(JOB_IMAGES, eq("job_id", job_id), order_by="created_at")
        return [JobImage.model_validate(row) for row in rows]

    # shared

    def available_jobs(self) -> list[Job]:
        rows = self._backend.select(JOBS, eq("status", JobStatus.OPEN.value), order_by="created_at", descending=True)
        return [Job.model_validate(row) for row in rows]

    def get_job(self, job_id: str) -> Job:
        return self._get_job(job_id)

    # employee side

    def browse(self, filters: JobFilters | None = None) -> list[JobWithStatus]:
        """Open jobs annotated with the viewer's saved/applied state, then filtered."""
        jobs = self.available_jobs()
        user = self._backend.current_user()
        if user is None:
            annotated = [JobWithStatus.model_validate(job.model_dump()) for job in jobs]
        else:
            annotated = self._annotate(jobs, user.id)
        return self._engine.filter(annotated, filters)

    def save_job(self, job_id: str) -> SavedJob:
        employee = self._require_role(Role.EMPLOYEE)
        existing = self._backend.select(SAVED_JOBS, eq("job_id", job_id), eq("employee_id", employee.id))
        if existing:
            return SavedJob.model_validate(existing[0])
        self._get_job(job_id)
        row = self._backend.insert(SAVED_JOBS, {"job_id": job_id, "employee_id": employee.id})
        self._logger.info("jobs.saved", job_id=job_id, employee_id=employee.id)
        return SavedJob.model_validate(row)

    def unsave_job(self, job_id: str) -> bool:
        employee = self._require_role(Role.EMPLOYEE)
        removed = self._backend.delete(SAVED_JOBS, eq("job_id", job_id), eq("employee_id", employee.id))
        if removed:
            self._logger.info("jobs.unsaved", job_id=job_id, employee_id=employee.id)
        return bool(removed)

    def toggle_saved(self, job_id: str) -> bool:
        """Flip the bookmark and return whether the job is now saved."""
        employee = self._require_role(Role.EMPLOYEE)
        if self._backend.select(SAVED_JOBS, eq("job_id", job_id), eq("employee_id", employee.id)):
            self.unsave_job(job_id)
            return False
        self.save_job(job_id)
        return True

    def saved_jobs(self) -> list[JobWithStatus]:
        employee = self._require_role(Role.EMPLOYEE)
        saved = self._backend.select(
            SAVED_JOBS, eq("employee_id", employee.id), order_by="created_at", descending=True
        )
        jobs = self._jobs_by_id([row["job_id"] for row in saved])
        ordered = [jobs[row["job_id"]] for row in saved if row["job_id"] in jobs]
        return self._annotate(ordered, employee.id)

    def applied_jobs(self) -> list[JobWithStatus]:
        employee = self._require_role(Role.EMPLOYEE)
        applications = self._backend.select(
            JOB_APPLICATIONS, eq("employee_id", employee.id), order_by="created_at", descending=True
        )
        jobs = self._jobs_by_id([row["job_id"] for row in applications])
        seen: set[str] = set()
        ordered: list[Job] = []
        for row in applications:
            job = jobs.get(row["job_id"])
            if job is not None and job.id not in seen:
                seen.add(job.id)
                ordered.append(job)
        return self._annotate(ordered, employee.id)

    def _jobs_by_id(self, job_ids: Sequence[str]) -> dict[str, Job]:
        if not job_ids:
            return {}
        rows = self._backend.select(JOBS, in_("id", list(dict.fromkeys(job_ids))))
        return {row["id"]: Job.model_validate(row) for row in rows}

    def _annotate(self, jobs: Sequence[Job], employee_id: str) -> list[JobWithStatus]:
        saved_ids = {row["job_id"] for row in self._backend.select(SAVED_JOBS, eq("employee_id", employee_id))}
        results: dict[str, str] = {}
        for row in self._backend.select(
            JOB_APPLICATIONS, eq("employee_id", employee_id), order_by="created_at"
        ):
            results[row["job_id"]] = row["status"]

        annotated: list[JobWithStatus] = []
        for job in jobs:
            payload: dict[str, Any] = job.model_dump()
            is_saved = job.id in saved_ids
            result = results.get(job.id)
            payload.update(
                is_saved=is_saved,
                application_result=ApplicationStatus(result) if result else None,
                application_status="applied" if result else ("saved" if is_saved else None),
            )
            annotated.append(JobWithStatus.model_validate(payload))
        return annotated
