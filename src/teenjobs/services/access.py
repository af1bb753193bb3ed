"""Role-based access decisions for the guest, employee and employer sections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ..errors import BackendError
from ..schemas import Role
from .base import BackendService

AccessStatus = Literal["authorized", "unauthenticated", "wrong_role"]

SIGN_IN_PATH = "/auth/signin"


@dataclass(frozen=True, slots=True)
class AccessDecision:
    status: AccessStatus
    role: Role | None = None
    redirect_to: str | None = None

    @property
    def allowed(self) -> bool:
        return self.status == "authorized"

    @property
    def dashboard(self) -> str | None:
        """The visitor's own section, offered on the wrong-role interstitial."""
        return f"/{self.role.value}" if self.role else None


class RoleGuard(BackendService):
    """Decide whether the current session may enter a role's section."""

    def __init__(self, backend, *, sign_in_path: str = SIGN_IN_PATH) -> None:
        super().__init__(backend)
        self._sign_in_path = sign_in_path

    def check(self, required_role: Role) -> AccessDecision:
        try:
            user = self._backend.current_user()
            profile = self._get_profile(user.id) if user else None
        except BackendError as exc:
            self._logger.error("access.check_failed", error=str(exc))
            return AccessDecision("unauthenticated", redirect_to=self._sign_in_path)

        if profile is None:
            return AccessDecision("unauthenticated", redirect_to=self._sign_in_path)
        if profile.role != Role(required_role):
            self._logger.info("access.wrong_role", user_id=profile.id, required=Role(required_role).value)
            return AccessDecision("wrong_role", role=profile.role)
        return AccessDecision("authorized", role=profile.role)
