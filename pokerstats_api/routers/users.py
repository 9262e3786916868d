"""REST endpoints for the authenticated user's profile."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from pokerstats_api.dependencies.auth import CurrentUser
from pokerstats_api.errors import RequestViolationsError
from pokerstats_api.schemas.profile import (
    MessageResponse,
    PasswordChangePayload,
    ProfileResponse,
    ProfileUpdatePayload,
)
from pokerstats_api.services.profile import ProfileService, get_profile_service
from pokerstats_api.services.validation import (
    validate_password_change,
    validate_profile_update,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]


@router.get("/me", response_model=ProfileResponse)
async def get_profile(current_user: CurrentUser, profile_service: ProfileServiceDep):
    """Get the current authenticated user's profile.

    Raises:
        ProfileNotFoundError: If the user has no profile (404).
    """
    logger.info("GET /users/me - user: %s", current_user.user_id)
    return await profile_service.get_profile(current_user)


@router.put("/me", response_model=ProfileResponse)
async def update_profile(
    current_user: CurrentUser,
    profile_service: ProfileServiceDep,
    payload: ProfileUpdatePayload,
):
    """Update the current user's name and avatar URL.

    Raises:
        RequestViolationsError: If the name or avatar URL is invalid (400).
        ProfileNotFoundError: If the user has no profile (404).
    """
    logger.info("PUT /users/me - user: %s", current_user.user_id)

    result = validate_profile_update(payload.name, payload.avatar_url)
    if not result.is_valid:
        raise RequestViolationsError(result)

    return await profile_service.update_profile(current_user, result.value)


@router.patch("/me/password", response_model=MessageResponse)
async def change_password(
    current_user: CurrentUser,
    profile_service: ProfileServiceDep,
    payload: PasswordChangePayload,
):
    """Change the current user's password after verifying the current one.

    Raises:
        RequestViolationsError: If either password field is invalid (400).
        InvalidPasswordError: If the current password is incorrect (400).
    """
    logger.info("PATCH /users/me/password - user: %s", current_user.user_id)

    result = validate_password_change(payload.current_password, payload.new_password)
    if not result.is_valid:
        raise RequestViolationsError(result)

    await profile_service.change_password(current_user, result.value)
    return MessageResponse(message="Password changed successfully")
