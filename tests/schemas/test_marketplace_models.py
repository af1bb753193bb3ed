from __future__ import annotations

import pytest
from pydantic import ValidationError

from teenjobs.schemas import (
    MAX_JOB_TAGS,
    Job,
    JobDraft,
    JobFilters,
    JobStatus,
    ProfileUpdate,
    Role,
    UserLocation,
    UserProfile,
)


def test_job_draft_strips_and_requires_core_text() -> None:
    draft = JobDraft(title="  Babysitting ", description=" Two kids ", pay=" $15/hour ")
    assert draft.title == "Babysitting"
    assert draft.pay == "$15/hour"

    with pytest.raises(ValidationError):
        JobDraft(title="   ", description="x", pay="$10")


def test_job_draft_deduplicates_and_limits_tags() -> None:
    draft = JobDraft(title="Yard", description="Mow", pay="$30", tags=["garden", " garden", "outdoor", ""])
    assert draft.tags == ["garden", "outdoor"]

    with pytest.raises(ValidationError):
        JobDraft(
            title="Yard",
            description="Mow",
            pay="$30",
            tags=[f"tag-{idx}" for idx in range(MAX_JOB_TAGS + 1)],
        )


def test_job_defaults_and_coordinates() -> None:
    job = Job.model_validate(
        {"id": "j1", "title": "Tutor", "employer_id": "e1", "tags": None, "latitude": 32.1, "longitude": 34.8}
    )
    assert job.status is JobStatus.OPEN
    assert job.tags == []
    assert job.coordinates == (34.8, 32.1)
    assert Job(id="j2", title="x", employer_id="e1").coordinates is None


def test_job_filters_validate_bounds() -> None:
    with pytest.raises(ValidationError, match="Maximum payment cannot be smaller than minimum payment"):
        JobFilters(min_pay=20, max_pay=10)
    with pytest.raises(ValidationError):
        JobFilters(max_distance_km=-1)
    filters = JobFilters(min_pay=10, max_pay=10, user_location=UserLocation(name="Haifa", coordinates=(34.99, 32.79)))
    assert filters.user_location.coordinates == (34.99, 32.79)


def test_profile_ignores_unknown_columns_and_exposes_dashboard() -> None:
    profile = UserProfile.model_validate({"id": "u1", "role": "employer", "legacy_column": 1})
    assert profile.role is Role.EMPLOYER
    assert profile.dashboard_path == "/employer"


def test_profile_update_forbids_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        ProfileUpdate.model_validate({"email": "new@example.com"})
