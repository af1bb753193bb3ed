"""Availability date overlap criterion."""

from __future__ import annotations

from ...schemas import Job, JobFilters
from ..parsing.dates import DateInterval, parse_available_dates


class DateRangeCriterion:
    """Keep jobs whose availability overlaps the requested range."""

    name = "date_range"

    def is_active(self, filters: JobFilters) -> bool:
        return filters.date_range is not None

    def matches(self, job: Job, filters: JobFilters) -> bool:
        date_range = filters.date_range
        if date_range is None:
            return True
        job_dates = parse_available_dates(job.available_dates)
        if job_dates is None:
            return False
        requested = DateInterval(
            start=date_range.start,
            end=date_range.resolved_end,
        )
        return job_dates.overlaps(requested)
