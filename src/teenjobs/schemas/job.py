from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .profile import UserProfile

MAX_JOB_TAGS = 8


class JobStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CLOSED = "closed"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Job(BaseModel):
    """Row of the ``jobs`` table.

    ``pay``, ``duration`` and ``available_dates`` are display strings entered by
    employers; the filter engine re-parses them on read.
    """

    id: str
    title: str
    description: str = ""
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    pay: str = ""
    duration: str | None = None
    available_dates: str | None = None
    tags: list[str] = Field(default_factory=list)
    status: JobStatus = JobStatus.OPEN
    employer_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def coordinates(self) -> tuple[float, float] | None:
        """``(longitude, latitude)`` when both are known."""
        if self.latitude is None or self.longitude is None:
            return None
        return (self.longitude, self.latitude)


class JobDraft(BaseModel):
    """Employer input for a new job posting."""

    title: str
    description: str
    pay: str
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    duration: str | None = None
    available_dates: str | None = None
    tags: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("title", "description", "pay")
    @classmethod
    def _required_text(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    @field_validator("tags")
    @classmethod
    def _limit_tags(cls, value: list[str]) -> list[str]:
        unique: list[str] = []
        for tag in value:
            tag = tag.strip()
            if tag and tag not in unique:
                unique.append(tag)
        if len(unique) > MAX_JOB_TAGS:
            raise ValueError(f"at most {MAX_JOB_TAGS} tags are allowed")
        return unique


class JobApplication(BaseModel):
    """Row of the ``job_applications`` table."""

    id: str
    job_id: str
    employee_id: str
    status: ApplicationStatus = ApplicationStatus.PENDING
    message: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(extra="ignore")


class SavedJob(BaseModel):
    id: str
    job_id: str
    employee_id: str
    created_at: datetime | None = None

    model_config = ConfigDict(extra="ignore")


class JobImage(BaseModel):
    id: str
    job_id: str
    image_url: str
    storage_path: str
    created_at: datetime | None = None

    model_config = ConfigDict(extra="ignore")


class JobWithStatus(Job):
    """Job annotated with the viewing employee's saved/applied state."""

    application_status: Literal["applied", "saved"] | None = None
    application_result: ApplicationStatus | None = None
    is_saved: bool = False


class ApplicationDetails(BaseModel):
    """Application joined with its job and applicant for employer review."""

    application: JobApplication
    job: Job
    employee: UserProfile | None = None
