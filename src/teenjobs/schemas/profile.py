from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Marketplace role chosen at signup."""

    EMPLOYER = "employer"
    EMPLOYEE = "employee"


class UserProfile(BaseModel):
    """Row of the ``user_profiles`` table."""

    id: str
    email: str = ""
    role: Role
    full_name: str | None = None
    birth_date: str | None = None
    phone: str | None = None
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    bio: str | None = None
    avatar_url: str | None = None
    # employee
    availability: str | None = None
    # employer
    company_name: str | None = None
    company_website: str | None = None
    company_description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(extra="ignore")

    @property
    def dashboard_path(self) -> str:
        return f"/{self.role.value}"


class ProfileUpdate(BaseModel):
    """Editable profile fields; unset fields are left untouched."""

    full_name: str | None = None
    birth_date: str | None = None
    phone: str | None = None
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    bio: str | None = None
    availability: str | None = None
    company_name: str | None = None
    company_website: str | None = None
    company_description: str | None = None
    role: Role | None = Field(default=None, description="Rejected when it differs from the stored role.")

    model_config = ConfigDict(extra="forbid")
