"""Duration equality criterion."""

from __future__ import annotations

from ...schemas import Job, JobFilters
from ..parsing.duration import normalize_duration


class DurationCriterion:
    name = "duration"

    def is_active(self, filters: JobFilters) -> bool:
        return bool(filters.duration and filters.duration.strip())

    def matches(self, job: Job, filters: JobFilters) -> bool:
        if not self.is_active(filters):
            return True
        if not job.duration:
            return False
        return normalize_duration(job.duration) == normalize_duration(filters.duration)
