"""Pydantic schema definitions for marketplace rows and transient values."""

from __future__ import annotations

from .filters import DateRange, JobFilters, UserLocation
from .job import (
    MAX_JOB_TAGS,
    ApplicationDetails,
    ApplicationStatus,
    Job,
    JobApplication,
    JobDraft,
    JobImage,
    JobStatus,
    JobWithStatus,
    SavedJob,
)
from .profile import ProfileUpdate, Role, UserProfile

__all__ = [
    "MAX_JOB_TAGS",
    "ApplicationDetails",
    "ApplicationStatus",
    "DateRange",
    "Job",
    "JobApplication",
    "JobDraft",
    "JobFilters",
    "JobImage",
    "JobStatus",
    "JobWithStatus",
    "ProfileUpdate",
    "Role",
    "SavedJob",
    "UserLocation",
    "UserProfile",
]
