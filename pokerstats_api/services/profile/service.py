"""Profile service applying accepted profile and password changes."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, cast

from supabase import AuthApiError, Client

from pokerstats_api.dependencies.auth import AuthContext
from pokerstats_api.dependencies.cache import ProfileCache
from pokerstats_api.dependencies.supabase import (
    get_anonymous_supabase_client,
    get_authenticated_supabase_client,
)
from pokerstats_api.schemas.profile import (
    PasswordChangeRequest,
    ProfileResponse,
    ProfileUpdateRequest,
)

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = "id, name, avatar_url, updated_at"


class ProfileNotFoundError(Exception):
    """No profile row exists for the user."""


class InvalidPasswordError(Exception):
    """The supplied current password could not be verified."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProfileService:
    """Service for reading and updating the caller's profile.

    Reads go through the profile cache. Writes go to the Supabase `profiles`
    table with the caller's JWT so RLS applies, and are stamped with
    `updated_at` when auditing is enabled.
    """

    def __init__(
        self,
        cache: ProfileCache,
        auditing_enabled: bool = True,
        client_factory: Callable[[str], Client] = get_authenticated_supabase_client,
        anon_client_factory: Callable[[], Client] = get_anonymous_supabase_client,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._cache = cache
        self._auditing_enabled = auditing_enabled
        self._client_factory = client_factory
        self._anon_client_factory = anon_client_factory
        self._clock = clock

    def _audit(self, values: dict[str, Any]) -> dict[str, Any]:
        if self._auditing_enabled:
            values["updated_at"] = self._clock().isoformat()
        return values

    def _to_response(self, user: AuthContext, row: dict[str, Any]) -> ProfileResponse:
        return ProfileResponse(
            id=row["id"],
            email=user.email,
            name=row.get("name"),
            avatar_url=row.get("avatar_url"),
            updated_at=row.get("updated_at"),
        )

    async def get_profile(self, user: AuthContext) -> ProfileResponse:
        cached = await self._cache.get(user.user_id)
        if cached is not None:
            return cached

        supabase = self._client_factory(user.access_token)
        response = (
            supabase.table("profiles").select(PROFILE_COLUMNS).eq("id", user.user_id).execute()
        )
        if not response.data:
            logger.warning("Profile not found for user: %s", user.user_id)
            raise ProfileNotFoundError("User not found")

        profile = self._to_response(user, cast(dict[str, Any], response.data[0]))
        await self._cache.put(profile)
        return profile

    async def update_profile(
        self, user: AuthContext, request: ProfileUpdateRequest
    ) -> ProfileResponse:
        """Write the accepted name and avatar URL to the caller's profile.

        Raises:
            ProfileNotFoundError: If the caller has no profile row.
        """
        values = self._audit({"name": request.name, "avatar_url": request.avatar_url})

        supabase = self._client_factory(user.access_token)
        response = supabase.table("profiles").update(values).eq("id", user.user_id).execute()

        if not response.data:
            logger.warning("Profile update failed - profile not found for user: %s", user.user_id)
            raise ProfileNotFoundError("User not found")

        profile = self._to_response(user, cast(dict[str, Any], response.data[0]))
        await self._cache.put(profile)
        logger.info("Profile updated for user: %s", user.user_id)
        return profile

    async def change_password(self, user: AuthContext, request: PasswordChangeRequest) -> None:
        """Verify the current password and replace it with the new one.

        The current password is checked by signing in on a fresh anonymous
        client; the password update is then made with that client's session.

        Raises:
            InvalidPasswordError: If the account has no email or the current
                password is wrong.
        """
        if not user.email:
            logger.warning("Password change refused - no email on token for user: %s", user.user_id)
            raise InvalidPasswordError("Password change requires an email account")

        client = self._anon_client_factory()
        try:
            client.auth.sign_in_with_password(
                {"email": user.email, "password": request.current_password}
            )
        except AuthApiError as e:
            logger.warning(
                "Password change refused - current password rejected for user %s: %s",
                user.user_id,
                e,
            )
            raise InvalidPasswordError("Current password is incorrect") from e

        client.auth.update_user({"password": request.new_password})

        if self._auditing_enabled:
            supabase = self._client_factory(user.access_token)
            supabase.table("profiles").update(self._audit({})).eq("id", user.user_id).execute()

        await self._cache.evict(user.user_id)
        logger.info("Password changed for user: %s", user.user_id)


_profile_service: ProfileService | None = None


def init_profile_service(cache: ProfileCache, auditing_enabled: bool) -> ProfileService:
    """Create the global ProfileService.

    Must be called during app startup (lifespan).
    """
    global _profile_service
    _profile_service = ProfileService(cache=cache, auditing_enabled=auditing_enabled)
    logger.info("Profile service initialized (auditing=%s)", auditing_enabled)
    return _profile_service


def get_profile_service() -> ProfileService:
    """Get the global ProfileService.

    Raises:
        RuntimeError: If the service was not initialized.
    """
    if _profile_service is None:
        raise RuntimeError("Profile service not initialized. Call init_profile_service first.")
    return _profile_service
