"""Backend contract and query conditions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Protocol, Sequence, runtime_checkable

ConditionOp = Literal["eq", "neq", "in"]

USER_PROFILES = "user_profiles"
JOBS = "jobs"
JOB_APPLICATIONS = "job_applications"
SAVED_JOBS = "saved_jobs"
JOB_IMAGES = "job_images"

AVATARS_BUCKET = "avatars"
JOB_IMAGES_BUCKET = "job-images"


@dataclass(frozen=True, slots=True)
class Condition:
    """Single column predicate understood by every backend."""

    column: str
    op: ConditionOp
    value: Any

    def matches(self, row: dict[str, Any]) -> bool:
        actual = row.get(self.column)
        if self.op == "eq":
            return actual == self.value
        if self.op == "neq":
            return actual != self.value
        return actual in tuple(self.value)


def eq(column: str, value: Any) -> Condition:
    return Condition(column, "eq", value)


def neq(column: str, value: Any) -> Condition:
    return Condition(column, "neq", value)


def in_(column: str, values: Sequence[Any]) -> Condition:
    return Condition(column, "in", tuple(values))


@dataclass(frozen=True, slots=True)
class AuthUser:
    """Identity of the signed-in user."""

    id: str
    email: str = ""


@runtime_checkable
class Backend(Protocol):
    """Hosted backend contract: tables, object storage and session identity.

    Implementations raise :class:`teenjobs.errors.BackendError` for network or
    database failures. Rows are plain dictionaries keyed by column name.
    """

    def select(
        self,
        table: str,
        *conditions: Condition,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """Return rows matching every condition."""

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert a row and return it as stored."""

    def update(self, table: str, values: dict[str, Any], *conditions: Condition) -> list[dict[str, Any]]:
        """Update matching rows and return them."""

    def delete(self, table: str, *conditions: Condition) -> list[dict[str, Any]]:
        """Delete matching rows and return them."""

    def current_user(self) -> AuthUser | None:
        """Return the session's user, or None when signed out."""

    def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        """Store an object and return its path."""

    def public_url(self, bucket: str, path: str) -> str:
        """Public URL of a stored object."""

    def remove(self, bucket: str, paths: Sequence[str]) -> None:
        """Delete stored objects."""
