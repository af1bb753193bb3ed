"""Tag intersection criterion."""

from __future__ import annotations

from ...schemas import Job, JobFilters


class TagCriterion:
    """Keep jobs carrying any of the selected tags."""

    name = "tags"

    def is_active(self, filters: JobFilters) -> bool:
        return bool(filters.tags)

    def matches(self, job: Job, filters: JobFilters) -> bool:
        return not set(job.tags).isdisjoint(filters.tags or ())
