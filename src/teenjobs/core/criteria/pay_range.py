"""Pay bounds criterion."""

from __future__ import annotations

from ...schemas import Job, JobFilters
from ..parsing.payment import pay_amount


class PayRangeCriterion:
    """Keep jobs whose parsed pay lies within ``[min_pay, max_pay]``.

    Unparseable pay never compares as zero; the job is excluded instead.
    """

    name = "pay_range"

    def is_active(self, filters: JobFilters) -> bool:
        return filters.min_pay is not None or filters.max_pay is not None

    def matches(self, job: Job, filters: JobFilters) -> bool:
        amount = pay_amount(job.pay)
        if amount is None:
            return False
        if filters.min_pay is not None and amount < filters.min_pay:
            return False
        if filters.max_pay is not None and amount > filters.max_pay:
            return False
        return True
