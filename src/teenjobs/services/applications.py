"""Application lifecycle: apply, accept, reject and complete."""

from __future__ import annotations

from typing import Iterable

from ..backend import JOB_APPLICATIONS, JOBS, USER_PROFILES, Backend, eq, in_, neq
from ..core.lifecycle import ensure_application_transition, ensure_job_transition
from ..core.validation import validate_profile
from ..errors import (
    AuthorizationError,
    BackendError,
    DuplicateApplicationError,
    InvalidTransitionError,
    ProfileIncompleteError,
    ValidationError,
)
from ..schemas import (
    ApplicationDetails,
    ApplicationStatus,
    Job,
    JobApplication,
    JobStatus,
    Role,
    UserProfile,
)
from .base import BackendService


class ApplicationService(BackendService):
    """Moves applications and their parent jobs through the hiring workflow.

    Every status write is conditional on the status read just before it, so a
    concurrent change surfaces as :class:`InvalidTransitionError` instead of
    silently overwriting. ``accept`` compensates its earlier writes when a
    later one fails.
    """

    def __init__(self, backend: Backend, *, reject_competing_on_accept: bool = True) -> None:
        super().__init__(backend)
        self._reject_competing = reject_competing_on_accept

    def apply(self, job_id: str, message: str | None = None) -> JobApplication:
        employee = self._require_role(Role.EMPLOYEE)
        check = validate_profile(Role.EMPLOYEE, employee)
        if not check.is_valid:
            raise ProfileIncompleteError(check)

        job = self._get_job(job_id)
        if job.status != JobStatus.OPEN:
            raise ValidationError("This job is no longer accepting applications")

        existing = self._backend.select(JOB_APPLICATIONS, eq("job_id", job.id), eq("employee_id", employee.id))
        if existing:
            raise DuplicateApplicationError("You have already applied for this job")

        row = self._backend.insert(
            JOB_APPLICATIONS,
            {
                "job_id": job.id,
                "employee_id": employee.id,
                "status": ApplicationStatus.PENDING.value,
                "message": (message or "").strip() or None,
            },
        )
        application = JobApplication.model_validate(row)
        self._logger.info("applications.apply", application_id=application.id, job_id=job.id)
        return application

    def accept(self, application_id: str) -> JobApplication:
        employer = self._require_role(Role.EMPLOYER)
        application = self._get_application(application_id)
        job = self._get_job(application.job_id)
        self._ensure_owner(job, employer)

        if application.status == ApplicationStatus.ACCEPTED and job.status in (JobStatus.OPEN, JobStatus.IN_PROGRESS):
            self._logger.info("applications.accept_resumed", application_id=application.id, job_id=job.id)
            if job.status == JobStatus.OPEN:
                self._set_job_status(job, JobStatus.IN_PROGRESS)
            if self._reject_competing:
                self._reject_competitors(job.id, application.id)
            return application

        ensure_application_transition(application.status, ApplicationStatus.ACCEPTED)
        ensure_job_transition(job.status, JobStatus.IN_PROGRESS)
        # one accepted application per job
        if self._backend.select(JOB_APPLICATIONS, eq("job_id", job.id), eq("status", ApplicationStatus.ACCEPTED.value)):
            raise InvalidTransitionError("job", "has an accepted application", ApplicationStatus.ACCEPTED.value)

        accepted = self._set_application_status(application, ApplicationStatus.ACCEPTED)
        job_moved = False
        try:
            self._set_job_status(job, JobStatus.IN_PROGRESS)
            job_moved = True
            if self._reject_competing:
                self._reject_competitors(job.id, application.id)
        except (BackendError, InvalidTransitionError) as exc:
            self._rollback_accept(application, job, job_moved, exc)
            raise

        self._logger.info("applications.accept", application_id=application.id, job_id=job.id)
        return accepted

    def reject(self, application_id: str) -> JobApplication:
        employer = self._require_role(Role.EMPLOYER)
        application = self._get_application(application_id)
        self._ensure_owner(self._get_job(application.job_id), employer)

        ensure_application_transition(application.status, ApplicationStatus.REJECTED)
        rejected = self._set_application_status(application, ApplicationStatus.REJECTED)
        self._logger.info("applications.reject", application_id=application.id, job_id=application.job_id)
        return rejected

    def complete(self, job_id: str) -> Job:
        """Mark an in-progress job done; only the hired employee may do this."""
        employee = self._require_role(Role.EMPLOYEE)
        job = self._get_job(job_id)
        hired = self._backend.select(
            JOB_APPLICATIONS,
            eq("job_id", job.id),
            eq("employee_id", employee.id),
            eq("status", ApplicationStatus.ACCEPTED.value),
        )
        if not hired:
            raise AuthorizationError("Only the employee hired for this job can complete it")

        ensure_job_transition(job.status, JobStatus.COMPLETED)
        completed = self._set_job_status(job, JobStatus.COMPLETED)
        self._logger.info("applications.complete", job_id=job.id, employee_id=employee.id)
        return completed

    def employer_applications(self, include_accepted: bool = False) -> list[ApplicationDetails]:
        employer = self._require_role(Role.EMPLOYER)
        jobs = {
            row["id"]: Job.model_validate(row)
            for row in self._backend.select(JOBS, eq("employer_id", employer.id))
        }
        if not jobs:
            return []

        applications = [
            JobApplication.model_validate(row)
            for row in self._backend.select(
                JOB_APPLICATIONS, in_("job_id", list(jobs)), order_by="created_at", descending=True
            )
        ]
        if not include_accepted:
            applications = [app for app in applications if app.status != ApplicationStatus.ACCEPTED]

        profiles = self._profiles_by_id(app.employee_id for app in applications)
        return [
            ApplicationDetails(application=app, job=jobs[app.job_id], employee=profiles.get(app.employee_id))
            for app in applications
            if app.job_id in jobs
        ]

    def my_applications(self) -> list[ApplicationDetails]:
        employee = self._require_role(Role.EMPLOYEE)
        applications = [
            JobApplication.model_validate(row)
            for row in self._backend.select(
                JOB_APPLICATIONS, eq("employee_id", employee.id), order_by="created_at", descending=True
            )
        ]
        if not applications:
            return []
        jobs = {
            row["id"]: Job.model_validate(row)
            for row in self._backend.select(JOBS, in_("id", list({app.job_id for app in applications})))
        }
        return [
            ApplicationDetails(application=app, job=jobs[app.job_id], employee=employee)
            for app in applications
            if app.job_id in jobs
        ]

    def _set_application_status(self, application: JobApplication, target: ApplicationStatus) -> JobApplication:
        rows = self._backend.update(
            JOB_APPLICATIONS,
            {"status": target.value},
            eq("id", application.id),
            eq("status", application.status.value),
        )
        if not rows:
            current = self._get_application(application.id).status
            raise InvalidTransitionError("application", current.value, target.value)
        return JobApplication.model_validate(rows[0])

    def _set_job_status(self, job: Job, target: JobStatus) -> Job:
        rows = self._backend.update(JOBS, {"status": target.value}, eq("id", job.id), eq("status", job.status.value))
        if not rows:
            current = self._get_job(job.id).status
            raise InvalidTransitionError("job", current.value, target.value)
        return Job.model_validate(rows[0])

    def _reject_competitors(self, job_id: str, accepted_id: str) -> int:
        rows = self._backend.update(
            JOB_APPLICATIONS,
            {"status": ApplicationStatus.REJECTED.value},
            eq("job_id", job_id),
            eq("status", ApplicationStatus.PENDING.value),
            neq("id", accepted_id),
        )
        if rows:
            self._logger.info("applications.competitors_rejected", job_id=job_id, count=len(rows))
        return len(rows)

    def _rollback_accept(
        self, application: JobApplication, job: Job, job_moved: bool, cause: Exception
    ) -> None:
        self._logger.warning(
            "applications.accept_failed",
            application_id=application.id,
            job_id=job.id,
            error=str(cause),
        )
        try:
            if job_moved:
                self._backend.update(
                    JOBS,
                    {"status": job.status.value},
                    eq("id", job.id),
                    eq("status", JobStatus.IN_PROGRESS.value),
                )
            self._backend.update(
                JOB_APPLICATIONS,
                {"status": application.status.value},
                eq("id", application.id),
                eq("status", ApplicationStatus.ACCEPTED.value),
            )
        except BackendError as exc:
            self._logger.error(
                "applications.rollback_failed",
                application_id=application.id,
                job_id=job.id,
                error=str(exc),
            )
            if isinstance(cause, BackendError):
                cause.partial = True
            return
        self._logger.info("applications.rolled_back", application_id=application.id, job_id=job.id)

    def _profiles_by_id(self, user_ids: Iterable[str]) -> dict[str, UserProfile]:
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return {}
        return {
            row["id"]: UserProfile.model_validate(row)
            for row in self._backend.select(USER_PROFILES, in_("id", ids))
        }


def group_by_job_title(details: Iterable[ApplicationDetails]) -> dict[str, list[ApplicationDetails]]:
    """Bucket applications under their job's title, keeping first-seen order."""
    grouped: dict[str, list[ApplicationDetails]] = {}
    for item in details:
        grouped.setdefault(item.job.title, []).append(item)
    return grouped
