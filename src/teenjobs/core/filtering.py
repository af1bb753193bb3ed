"""Job filter engine orchestration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence, TypeVar

import structlog

from ..schemas import Job, JobFilters
from .criteria import (
    DateRangeCriterion,
    DurationCriterion,
    GeoRadiusCriterion,
    LocationTextCriterion,
    PayRangeCriterion,
    TagCriterion,
)
from .parsing.dates import format_date
from .parsing.payment import format_amount

JobT = TypeVar("JobT", bound=Job)


@dataclass(slots=True)
class FilterOutcome:
    """Per-criterion verdict for a single job."""

    job_id: str
    passed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def included(self) -> bool:
        return not self.failed


def default_criteria() -> list[Any]:
    return [
        DateRangeCriterion(),
        PayRangeCriterion(),
        DurationCriterion(),
        LocationTextCriterion(),
        GeoRadiusCriterion(),
        TagCriterion(),
    ]


class JobFilterEngine:
    """Applies every active criterion to a job list.

    Criteria combine with logical AND; filtering keeps the input order and never
    deduplicates.
    """

    def __init__(self, criteria: Iterable[Any] | None = None) -> None:
        self._criteria = list(criteria) if criteria is not None else default_criteria()
        self._logger = structlog.get_logger(__name__)

    @property
    def criteria(self) -> list[Any]:
        return list(self._criteria)

    def active_criteria(self, filters: JobFilters) -> list[Any]:
        return [criterion for criterion in self._criteria if criterion.is_active(filters)]

    def filter(self, jobs: Sequence[JobT], filters: JobFilters | None) -> list[JobT]:
        if filters is None:
            return list(jobs)
        active = self.active_criteria(filters)
        if not active:
            return list(jobs)
        matched = [
            job for job in jobs if all(criterion.matches(job, filters) for criterion in active)
        ]
        self._logger.debug(
            "filter.applied",
            criteria=[criterion.name for criterion in active],
            total=len(jobs),
            matched=len(matched),
        )
        return matched

    def explain(self, job: Job, filters: JobFilters) -> FilterOutcome:
        outcome = FilterOutcome(job_id=job.id)
        for criterion in self._criteria:
            if not criterion.is_active(filters):
                outcome.skipped.append(criterion.name)
            elif criterion.matches(job, filters):
                outcome.passed.append(criterion.name)
            else:
                outcome.failed.append(criterion.name)
        return outcome


def describe_filters(filters: JobFilters) -> str:
    """Human-readable summary of the active filters."""
    parts: list[str] = []

    if filters.date_range is not None:
        start = filters.date_range.start
        end = filters.date_range.resolved_end
        if end != start:
            parts.append(f"dates: {format_date(start)} - {format_date(end)}")
        else:
            parts.append(f"date: {format_date(start)}")

    if filters.min_pay is not None and filters.max_pay is not None:
        parts.append(f"pay: ${format_amount(filters.min_pay)} - ${format_amount(filters.max_pay)}")
    elif filters.min_pay is not None:
        parts.append(f"pay: ${format_amount(filters.min_pay)}+")
    elif filters.max_pay is not None:
        parts.append(f"pay: up to ${format_amount(filters.max_pay)}")

    if filters.duration:
        parts.append(f"duration: {filters.duration}")

    if filters.location:
        parts.append(f"location: {filters.location}")

    if filters.user_location is not None and filters.max_distance_km is not None:
        parts.append(f"within {format_amount(filters.max_distance_km)} km of {filters.user_location.name}")

    if filters.tags:
        parts.append(f"tags: {', '.join(filters.tags)}")

    return f"Filtered by {', '.join(parts)}" if parts else ""
