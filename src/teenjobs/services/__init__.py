"""Backend-facing services."""

from __future__ import annotations

from .access import AccessDecision, RoleGuard
from .applications import ApplicationService, group_by_job_title
from .base import MAX_UPLOAD_BYTES, BackendService, image_storage_path
from .jobs import JobsService
from .profiles import ProfileService

__all__ = [
    "MAX_UPLOAD_BYTES",
    "AccessDecision",
    "ApplicationService",
    "BackendService",
    "JobsService",
    "ProfileService",
    "RoleGuard",
    "group_by_job_title",
    "image_storage_path",
]
