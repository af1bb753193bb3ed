"""Backend collaborators: hosted tables, storage and auth."""

from __future__ import annotations

from .base import (
    AVATARS_BUCKET,
    JOB_APPLICATIONS,
    JOB_IMAGES,
    JOB_IMAGES_BUCKET,
    JOBS,
    SAVED_JOBS,
    USER_PROFILES,
    AuthUser,
    Backend,
    Condition,
    eq,
    in_,
    neq,
)
from .memory import InMemoryBackend
from .rest import RestBackend

__all__ = [
    "AVATARS_BUCKET",
    "JOB_APPLICATIONS",
    "JOB_IMAGES",
    "JOB_IMAGES_BUCKET",
    "JOBS",
    "SAVED_JOBS",
    "USER_PROFILES",
    "AuthUser",
    "Backend",
    "Condition",
    "InMemoryBackend",
    "RestBackend",
    "eq",
    "in_",
    "neq",
]
