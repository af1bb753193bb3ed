from __future__ import annotations

import pytest

from teenjobs.core import (
    can_transition_application,
    can_transition_job,
    ensure_application_transition,
    ensure_job_transition,
)
from teenjobs.errors import InvalidTransitionError
from teenjobs.schemas import ApplicationStatus, JobStatus


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (JobStatus.OPEN, JobStatus.IN_PROGRESS),
        (JobStatus.OPEN, JobStatus.CLOSED),
        (JobStatus.IN_PROGRESS, JobStatus.COMPLETED),
    ],
)
def test_allowed_job_transitions(current: JobStatus, target: JobStatus) -> None:
    assert can_transition_job(current, target)
    ensure_job_transition(current, target)


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (JobStatus.IN_PROGRESS, JobStatus.OPEN),
        (JobStatus.COMPLETED, JobStatus.IN_PROGRESS),
        (JobStatus.CLOSED, JobStatus.OPEN),
        (JobStatus.OPEN, JobStatus.COMPLETED),
    ],
)
def test_job_transitions_never_move_backwards(current: JobStatus, target: JobStatus) -> None:
    assert not can_transition_job(current, target)
    with pytest.raises(InvalidTransitionError) as excinfo:
        ensure_job_transition(current, target)
    assert excinfo.value.entity == "job"
    assert excinfo.value.current == current.value


def test_application_decisions_are_terminal() -> None:
    assert can_transition_application(ApplicationStatus.PENDING, ApplicationStatus.ACCEPTED)
    assert can_transition_application(ApplicationStatus.PENDING, ApplicationStatus.REJECTED)
    for terminal in (ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED):
        for target in ApplicationStatus:
            assert not can_transition_application(terminal, target)

    with pytest.raises(InvalidTransitionError):
        ensure_application_transition(ApplicationStatus.REJECTED, ApplicationStatus.ACCEPTED)
