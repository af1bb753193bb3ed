"""Free-text location criterion."""

from __future__ import annotations

import re

from ...schemas import Job, JobFilters

_TOKEN_SPLIT = re.compile(r"[\s,]+")


def location_tokens(text: str) -> list[str]:
    return [token for token in _TOKEN_SPLIT.split(text.lower()) if token]


class LocationTextCriterion:
    """Every filter token must appear somewhere in the job location."""

    name = "location"

    def is_active(self, filters: JobFilters) -> bool:
        return filters.location is not None and bool(location_tokens(filters.location))

    def matches(self, job: Job, filters: JobFilters) -> bool:
        if filters.location is None:
            return True
        if not job.location:
            return False
        haystack = job.location.lower()
        return all(token in haystack for token in location_tokens(filters.location))
