"""Core marketplace rules: filtering, lifecycle and validation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..schemas import Job, JobFilters

# NOTE: keep imports explicit for export clarity.
from .filtering import FilterOutcome, JobFilterEngine, default_criteria, describe_filters
from .geo import haversine_km
from .lifecycle import (
    can_transition_application,
    can_transition_job,
    ensure_application_transition,
    ensure_job_transition,
)
from .validation import (
    ProfileValidationResult,
    age_tier,
    calculate_age,
    validate_employee_age,
    validate_profile,
)


@runtime_checkable
class Criterion(Protocol):
    """Filter criterion contract."""

    name: str

    def is_active(self, filters: JobFilters) -> bool:
        """Return True when the filters request this criterion."""

    def matches(self, job: Job, filters: JobFilters) -> bool:
        """Return True when the job satisfies this criterion."""


__all__ = [
    "Criterion",
    "FilterOutcome",
    "JobFilterEngine",
    "ProfileValidationResult",
    "age_tier",
    "calculate_age",
    "can_transition_application",
    "can_transition_job",
    "default_criteria",
    "describe_filters",
    "ensure_application_transition",
    "ensure_job_transition",
    "haversine_km",
    "validate_employee_age",
    "validate_profile",
]
