"""Shared lookups for backend-facing services."""

from __future__ import annotations

import pendulum
import structlog

from ..backend import JOB_APPLICATIONS, JOBS, USER_PROFILES, AuthUser, Backend, eq
from ..errors import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..schemas import Job, JobApplication, Role, UserProfile

MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class BackendService:
    """Base class holding the explicit backend handle."""

    def __init__(self, backend: Backend) -> None:
        self._backend = backend
        self._logger = structlog.get_logger(type(self).__module__)

    @property
    def backend(self) -> Backend:
        return self._backend

    def _require_user(self) -> AuthUser:
        user = self._backend.current_user()
        if user is None:
            raise AuthenticationError()
        return user

    def _get_profile(self, user_id: str) -> UserProfile | None:
        rows = self._backend.select(USER_PROFILES, eq("id", user_id))
        return UserProfile.model_validate(rows[0]) if rows else None

    def _require_role(self, role: Role) -> UserProfile:
        user = self._require_user()
        profile = self._get_profile(user.id)
        if profile is None:
            raise AuthenticationError("No profile found for the signed-in user")
        if profile.role != role:
            raise AuthorizationError(
                f"This action requires a {role.value} account; signed in as {profile.role.value}"
            )
        return profile

    def _get_job(self, job_id: str) -> Job:
        rows = self._backend.select(JOBS, eq("id", job_id))
        if not rows:
            raise NotFoundError(f"Job {job_id} not found")
        return Job.model_validate(rows[0])

    def _get_application(self, application_id: str) -> JobApplication:
        rows = self._backend.select(JOB_APPLICATIONS, eq("id", application_id))
        if not rows:
            raise NotFoundError(f"Application {application_id} not found")
        return JobApplication.model_validate(rows[0])

    @staticmethod
    def _ensure_owner(job: Job, profile: UserProfile) -> None:
        if job.employer_id != profile.id:
            raise AuthorizationError("Only the employer who posted this job can manage it")


def image_storage_path(prefix: str, filename: str, content_type: str, size: int) -> str:
    """Validate an uploaded image and build its ``{prefix}/{timestamp}.{ext}`` path."""
    if not content_type.startswith("image/"):
        raise ValidationError("Please select an image file")
    if size > MAX_UPLOAD_BYTES:
        raise ValidationError("File size must be less than 5MB")
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else content_type.split("/", 1)[1]
    return f"{prefix}/{int(pendulum.now().timestamp() * 1000)}.{extension}"
