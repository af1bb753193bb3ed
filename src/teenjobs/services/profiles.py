"""Profile reads, edits and avatar uploads."""

from __future__ import annotations

from typing import Any

from ..backend import AVATARS_BUCKET, USER_PROFILES, eq
from ..core.validation import ProfileValidationResult, validate_employee_age, validate_profile
from ..errors import AuthenticationError, BackendError, NotFoundError, ValidationError
from ..schemas import ProfileUpdate, Role, UserProfile
from .base import BackendService, image_storage_path


class ProfileService(BackendService):
    """Operations on the signed-in user's ``user_profiles`` row."""

    def current_profile(self) -> UserProfile | None:
        user = self._require_user()
        return self._get_profile(user.id)

    def get_profile(self, user_id: str) -> UserProfile | None:
        return self._get_profile(user_id)

    def update_profile(self, changes: ProfileUpdate) -> UserProfile:
        profile = self._current_or_raise()
        values: dict[str, Any] = changes.model_dump(mode="json", exclude_unset=True)

        requested_role = values.pop("role", None)
        if requested_role is not None and requested_role != profile.role.value:
            raise ValidationError("Account role cannot be changed after signup")

        for key, value in list(values.items()):
            if isinstance(value, str):
                values[key] = value.strip() or None

        if profile.role == Role.EMPLOYEE and values.get("birth_date"):
            age_check = validate_employee_age(values["birth_date"])
            if not age_check.is_valid:
                raise ValidationError(age_check.message)

        if not values:
            return profile

        rows = self._backend.update(USER_PROFILES, values, eq("id", profile.id))
        if not rows:
            raise NotFoundError(f"Profile {profile.id} not found")
        self._logger.info("profiles.update", user_id=profile.id, fields=sorted(values))
        return UserProfile.model_validate(rows[0])

    def validate_for(self, role: Role) -> ProfileValidationResult:
        """Completeness check gating job posting (employer) or applying (employee)."""
        user = self._require_user()
        return validate_profile(role, self._get_profile(user.id))

    def upload_avatar(self, filename: str, data: bytes, content_type: str) -> str:
        profile = self._current_or_raise()
        path = image_storage_path(profile.id, filename, content_type, len(data))

        self._backend.upload(AVATARS_BUCKET, path, data, content_type)
        public_url = self._backend.public_url(AVATARS_BUCKET, path)

        if profile.avatar_url:
            old_path = "/".join(profile.avatar_url.split("/")[-2:])
            try:
                self._backend.remove(AVATARS_BUCKET, [old_path])
            except BackendError as exc:
                self._logger.warning("profiles.avatar_cleanup_failed", path=old_path, error=str(exc))

        self._backend.update(USER_PROFILES, {"avatar_url": public_url}, eq("id", profile.id))
        self._logger.info("profiles.avatar_uploaded", user_id=profile.id, path=path)
        return public_url

    def _current_or_raise(self) -> UserProfile:
        profile = self.current_profile()
        if profile is None:
            raise AuthenticationError("No profile found for the signed-in user")
        return profile
