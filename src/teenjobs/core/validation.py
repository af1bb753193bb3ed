"""Profile completeness and age rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

import pendulum

from ..schemas import Role, UserProfile
from .parsing.dates import parse_date

REQUIRED_PROFILE_FIELDS: tuple[tuple[str, str], ...] = (
    ("birth_date", "birth date"),
    ("phone", "phone number"),
)

MINIMUM_EMPLOYEE_AGE = 14

_ACTIONS: dict[Role, str] = {
    Role.EMPLOYER: "posting a job",
    Role.EMPLOYEE: "applying for jobs",
}


@dataclass(slots=True)
class ProfileValidationResult:
    is_valid: bool
    missing_fields: list[str] = field(default_factory=list)
    message: str = ""


@dataclass(slots=True)
class AgeValidationResult:
    is_valid: bool
    age: int | None
    message: str


@dataclass(frozen=True, slots=True)
class AgeTier:
    tier: str
    age: int


def validate_profile(role: Role, profile: UserProfile | None) -> ProfileValidationResult:
    """Check the fields both roles need before posting or applying."""
    if profile is None:
        return ProfileValidationResult(
            is_valid=False,
            missing_fields=["profile"],
            message="Profile not found. Please complete your profile first.",
        )

    missing = [
        label
        for attribute, label in REQUIRED_PROFILE_FIELDS
        if not (getattr(profile, attribute) or "").strip()
    ]
    if missing:
        return ProfileValidationResult(
            is_valid=False,
            missing_fields=missing,
            message=(
                f"Please complete your profile before {_ACTIONS[Role(role)]}. "
                f"Missing: {', '.join(missing)}."
            ),
        )
    return ProfileValidationResult(is_valid=True, message="Profile is complete!")


def calculate_age(birth_date: str | None, *, today: date | None = None) -> int | None:
    born = parse_date(birth_date)
    if born is None:
        return None
    today = today or pendulum.today().date()
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return age


def age_tier(birth_date: str | None, *, today: date | None = None) -> AgeTier | None:
    """Junior at 14, Youth at 15-16, Senior at 17-18; ``None`` outside 14-18."""
    age = calculate_age(birth_date, today=today)
    if age is None:
        return None
    if age == 14:
        return AgeTier("Junior", age)
    if 15 <= age <= 16:
        return AgeTier("Youth", age)
    if 17 <= age <= 18:
        return AgeTier("Senior", age)
    return None


def validate_employee_age(birth_date: str | None, *, today: date | None = None) -> AgeValidationResult:
    age = calculate_age(birth_date, today=today)
    if age is None:
        return AgeValidationResult(
            is_valid=False,
            age=None,
            message="Please enter your birth date to verify you meet the minimum age requirement.",
        )
    if age < MINIMUM_EMPLOYEE_AGE:
        return AgeValidationResult(
            is_valid=False,
            age=age,
            message=(
                f"You must be at least {MINIMUM_EMPLOYEE_AGE} years old to create an employee "
                "profile and apply for jobs."
            ),
        )
    return AgeValidationResult(is_valid=True, age=age, message="Age requirement met.")
