"""Exception taxonomy shared by services and backends."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .core.validation import ProfileValidationResult


class MarketplaceError(Exception):
    """Base class for all marketplace failures."""


class AuthenticationError(MarketplaceError):
    """No signed-in user for an operation that requires one."""

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class AuthorizationError(MarketplaceError):
    """Signed-in user lacks the role or ownership the operation needs."""


class ValidationError(MarketplaceError):
    """Malformed input supplied by the caller."""


class ProfileIncompleteError(ValidationError):
    """Required profile fields are missing."""

    def __init__(self, result: "ProfileValidationResult"):
        super().__init__(result.message)
        self.result = result

    @property
    def missing_fields(self) -> list[str]:
        return list(self.result.missing_fields)


class NotFoundError(MarketplaceError):
    """Referenced row does not exist."""


class InvalidTransitionError(MarketplaceError):
    """A job or application status change is not allowed."""

    def __init__(self, entity: str, current: str, target: str):
        super().__init__(f"Cannot move {entity} from {current!r} to {target!r}")
        self.entity = entity
        self.current = current
        self.target = target


class DuplicateApplicationError(MarketplaceError):
    """The employee already applied to the job."""


class BackendError(MarketplaceError):
    """Network or database failure reported by the backend collaborator."""

    def __init__(self, message: str, *, status: int | None = None, partial: bool = False):
        super().__init__(message)
        self.status = status
        self.partial = partial


__all__ = [
    "MarketplaceError",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "ProfileIncompleteError",
    "NotFoundError",
    "InvalidTransitionError",
    "DuplicateApplicationError",
    "BackendError",
]
