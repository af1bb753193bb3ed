from __future__ import annotations

from typing import Any, Callable

import pytest

from teenjobs.backend import JOB_APPLICATIONS, JOBS, USER_PROFILES, InMemoryBackend, eq
from teenjobs.errors import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    DuplicateApplicationError,
    InvalidTransitionError,
    ProfileIncompleteError,
    ValidationError,
)
from teenjobs.schemas import ApplicationStatus, JobStatus, Role
from teenjobs.services import ApplicationService, group_by_job_title


class FlakyBackend(InMemoryBackend):
    """In-memory backend whose updates can be made to fail on demand."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_on: Callable[[str, dict[str, Any]], bool] | None = None

    def update(self, table, values, *conditions):
        if self.fail_on is not None and self.fail_on(table, values):
            raise BackendError("connection reset by peer", status=503)
        return super().update(table, values, *conditions)


def seed_profile(backend: InMemoryBackend, user_id: str, role: Role, **overrides: Any) -> None:
    row = {
        "id": user_id,
        "email": f"{user_id}@example.com",
        "role": role.value,
        "full_name": user_id.title(),
        "birth_date": "2008-01-01",
        "phone": "050-0000000",
    }
    row.update(overrides)
    backend.insert(USER_PROFILES, row)


def seed_job(
    backend: InMemoryBackend,
    job_id: str = "job-1",
    *,
    employer_id: str = "employer-1",
    status: str = "open",
    title: str = "Dog walking",
) -> None:
    backend.insert(
        JOBS,
        {"id": job_id, "title": title, "employer_id": employer_id, "status": status, "pay": "$15/hour"},
    )


def seed_application(
    backend: InMemoryBackend,
    app_id: str,
    *,
    job_id: str = "job-1",
    employee_id: str,
    status: str = "pending",
    created_at: str = "2024-01-01T00:00:00+00:00",
) -> None:
    backend.insert(
        JOB_APPLICATIONS,
        {"id": app_id, "job_id": job_id, "employee_id": employee_id, "status": status, "created_at": created_at},
    )


def status_of(backend: InMemoryBackend, table: str, row_id: str) -> str:
    return backend.select(table, eq("id", row_id))[0]["status"]


@pytest.fixture
def backend() -> FlakyBackend:
    backend = FlakyBackend()
    seed_profile(backend, "employer-1", Role.EMPLOYER)
    seed_profile(backend, "employer-2", Role.EMPLOYER)
    seed_profile(backend, "alice", Role.EMPLOYEE)
    seed_profile(backend, "bob", Role.EMPLOYEE)
    seed_job(backend)
    return backend


@pytest.fixture
def hiring(backend: FlakyBackend) -> FlakyBackend:
    seed_application(backend, "app-1", employee_id="alice")
    seed_application(backend, "app-2", employee_id="bob", created_at="2024-01-02T00:00:00+00:00")
    backend.sign_in("employer-1")
    return backend


def test_apply_creates_pending_application(backend: FlakyBackend) -> None:
    backend.sign_in("alice")
    service = ApplicationService(backend)

    application = service.apply("job-1", message="  I love dogs  ")

    assert application.status is ApplicationStatus.PENDING
    assert application.employee_id == "alice"
    assert application.message == "I love dogs"


def test_apply_twice_is_rejected(backend: FlakyBackend) -> None:
    backend.sign_in("alice")
    service = ApplicationService(backend)
    service.apply("job-1")

    with pytest.raises(DuplicateApplicationError):
        service.apply("job-1")
    assert len(backend.select(JOB_APPLICATIONS)) == 1


def test_apply_requires_signed_in_employee(backend: FlakyBackend) -> None:
    service = ApplicationService(backend)
    with pytest.raises(AuthenticationError, match="User not authenticated"):
        service.apply("job-1")

    backend.sign_in("employer-2")
    with pytest.raises(AuthorizationError):
        service.apply("job-1")


def test_apply_with_incomplete_profile_reports_missing_fields(backend: FlakyBackend) -> None:
    seed_profile(backend, "carol", Role.EMPLOYEE, phone="  ")
    backend.sign_in("carol")

    with pytest.raises(ProfileIncompleteError) as excinfo:
        ApplicationService(backend).apply("job-1")

    assert excinfo.value.missing_fields == ["phone number"]


def test_apply_to_closed_job_fails(backend: FlakyBackend) -> None:
    seed_job(backend, "job-closed", status="closed")
    backend.sign_in("alice")

    with pytest.raises(ValidationError, match="no longer accepting"):
        ApplicationService(backend).apply("job-closed")


def test_accept_rejects_competitors_and_starts_job(hiring: FlakyBackend) -> None:
    accepted = ApplicationService(hiring).accept("app-1")

    assert accepted.status is ApplicationStatus.ACCEPTED
    assert status_of(hiring, JOB_APPLICATIONS, "app-1") == "accepted"
    assert status_of(hiring, JOB_APPLICATIONS, "app-2") == "rejected"
    assert status_of(hiring, JOBS, "job-1") == "in_progress"


def test_accept_can_leave_competitors_pending(hiring: FlakyBackend) -> None:
    ApplicationService(hiring, reject_competing_on_accept=False).accept("app-1")

    assert status_of(hiring, JOB_APPLICATIONS, "app-2") == "pending"
    assert status_of(hiring, JOBS, "job-1") == "in_progress"


def test_accept_leaves_other_jobs_untouched(hiring: FlakyBackend) -> None:
    seed_job(hiring, "job-2")
    seed_application(hiring, "app-3", job_id="job-2", employee_id="bob")

    ApplicationService(hiring).accept("app-1")

    assert status_of(hiring, JOB_APPLICATIONS, "app-3") == "pending"
    assert status_of(hiring, JOBS, "job-2") == "open"


def test_only_owner_may_accept(hiring: FlakyBackend) -> None:
    hiring.sign_in("employer-2")
    with pytest.raises(AuthorizationError):
        ApplicationService(hiring).accept("app-1")
    assert status_of(hiring, JOB_APPLICATIONS, "app-1") == "pending"


def test_second_accept_on_same_job_is_invalid(hiring: FlakyBackend) -> None:
    service = ApplicationService(hiring)
    service.accept("app-1")

    with pytest.raises(InvalidTransitionError):
        service.accept("app-2")


def test_failed_competitor_rejection_is_compensated(hiring: FlakyBackend) -> None:
    hiring.fail_on = lambda table, values: table == JOB_APPLICATIONS and values["status"] == "rejected"
    service = ApplicationService(hiring)

    with pytest.raises(BackendError) as excinfo:
        service.accept("app-1")

    assert excinfo.value.partial is False
    assert status_of(hiring, JOB_APPLICATIONS, "app-1") == "pending"
    assert status_of(hiring, JOB_APPLICATIONS, "app-2") == "pending"
    assert status_of(hiring, JOBS, "job-1") == "open"

    hiring.fail_on = None
    service.accept("app-1")
    assert status_of(hiring, JOB_APPLICATIONS, "app-2") == "rejected"


def test_failed_job_write_reverts_application(hiring: FlakyBackend) -> None:
    hiring.fail_on = lambda table, values: table == JOBS
    with pytest.raises(BackendError):
        ApplicationService(hiring).accept("app-1")

    assert status_of(hiring, JOB_APPLICATIONS, "app-1") == "pending"
    assert status_of(hiring, JOBS, "job-1") == "open"


def test_failed_rollback_marks_partial_and_retry_finishes(hiring: FlakyBackend) -> None:
    hiring.fail_on = lambda table, values: values["status"] in {"rejected", "open"}
    service = ApplicationService(hiring)

    with pytest.raises(BackendError) as excinfo:
        service.accept("app-1")

    assert excinfo.value.partial is True
    assert status_of(hiring, JOB_APPLICATIONS, "app-1") == "accepted"
    assert status_of(hiring, JOBS, "job-1") == "in_progress"
    assert status_of(hiring, JOB_APPLICATIONS, "app-2") == "pending"

    hiring.fail_on = None
    resumed = service.accept("app-1")

    assert resumed.status is ApplicationStatus.ACCEPTED
    assert status_of(hiring, JOB_APPLICATIONS, "app-2") == "rejected"


def test_failed_job_write_and_revert_can_be_resumed(hiring: FlakyBackend) -> None:
    hiring.fail_on = lambda table, values: table == JOBS or values["status"] == "pending"
    service = ApplicationService(hiring)

    with pytest.raises(BackendError) as excinfo:
        service.accept("app-1")

    assert excinfo.value.partial is True
    assert status_of(hiring, JOB_APPLICATIONS, "app-1") == "accepted"
    assert status_of(hiring, JOBS, "job-1") == "open"
    assert status_of(hiring, JOB_APPLICATIONS, "app-2") == "pending"

    hiring.fail_on = None
    with pytest.raises(InvalidTransitionError):
        service.accept("app-2")
    assert status_of(hiring, JOB_APPLICATIONS, "app-2") == "pending"

    resumed = service.accept("app-1")

    assert resumed.status is ApplicationStatus.ACCEPTED
    assert status_of(hiring, JOBS, "job-1") == "in_progress"
    assert status_of(hiring, JOB_APPLICATIONS, "app-2") == "rejected"


def test_reject_has_no_job_side_effects(hiring: FlakyBackend) -> None:
    service = ApplicationService(hiring)

    rejected = service.reject("app-2")

    assert rejected.status is ApplicationStatus.REJECTED
    assert status_of(hiring, JOBS, "job-1") == "open"
    assert status_of(hiring, JOB_APPLICATIONS, "app-1") == "pending"
    with pytest.raises(InvalidTransitionError):
        service.reject("app-2")


def test_complete_requires_hired_employee(hiring: FlakyBackend) -> None:
    service = ApplicationService(hiring)
    service.accept("app-1")

    hiring.sign_in("bob")
    with pytest.raises(AuthorizationError):
        service.complete("job-1")

    hiring.sign_in("alice")
    job = service.complete("job-1")
    assert job.status is JobStatus.COMPLETED
    with pytest.raises(InvalidTransitionError):
        service.complete("job-1")


def test_employer_applications_hide_accepted_by_default(hiring: FlakyBackend) -> None:
    seed_job(hiring, "job-2", title="Tutoring")
    seed_application(hiring, "app-3", job_id="job-2", employee_id="alice", created_at="2024-01-03T00:00:00+00:00")
    service = ApplicationService(hiring)
    service.accept("app-1")

    pending_view = service.employer_applications()
    full_view = service.employer_applications(include_accepted=True)

    assert [item.application.id for item in pending_view] == ["app-3", "app-2"]
    assert [item.application.id for item in full_view] == ["app-3", "app-2", "app-1"]
    assert pending_view[1].employee is not None
    assert pending_view[1].employee.full_name == "Bob"

    grouped = group_by_job_title(full_view)
    assert list(grouped) == ["Tutoring", "Dog walking"]
    assert [item.application.id for item in grouped["Dog walking"]] == ["app-2", "app-1"]


def test_employer_without_jobs_sees_nothing(hiring: FlakyBackend) -> None:
    hiring.sign_in("employer-2")
    assert ApplicationService(hiring).employer_applications() == []


def test_my_applications_joins_jobs(hiring: FlakyBackend) -> None:
    hiring.sign_in("alice")
    details = ApplicationService(hiring).my_applications()

    assert [item.application.id for item in details] == ["app-1"]
    assert details[0].job.title == "Dog walking"
