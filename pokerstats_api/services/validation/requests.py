"""Validation of profile-update and password-change requests.

Each validator is a pure function of its inputs. Every rule is checked and
every violated rule is reported, except that a blank new password reports
only "New password is required", since blank text is always too short.
Accepted values carry the inputs verbatim, without trimming.
"""

import logging

from pokerstats_api.schemas.profile import (
    MAX_AVATAR_URL_LENGTH,
    MAX_NAME_LENGTH,
    MIN_PASSWORD_LENGTH,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    is_blank,
)

from .result import ValidationResult, Violation

logger = logging.getLogger(__name__)

NAME_REQUIRED = "Name is required"
NAME_TOO_LONG = f"Name cannot exceed {MAX_NAME_LENGTH} characters"
AVATAR_URL_TOO_LONG = f"Avatar URL cannot exceed {MAX_AVATAR_URL_LENGTH} characters"
CURRENT_PASSWORD_REQUIRED = "Current password is required"
NEW_PASSWORD_REQUIRED = "New password is required"
PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"


def validate_profile_update(
    name: str | None,
    avatar_url: str | None = None,
) -> ValidationResult[ProfileUpdateRequest]:
    """Validate the fields of a profile update.

    Args:
        name: Display name. Required, at most 255 characters.
        avatar_url: Optional avatar URL, at most 500 characters when present.

    Returns:
        ValidationResult with the accepted ProfileUpdateRequest, or the
        violations for `name` and `avatarUrl` in that order.
    """
    violations: list[Violation] = []

    if is_blank(name):
        violations.append(Violation("name", NAME_REQUIRED))
    if name is not None and len(name) > MAX_NAME_LENGTH:
        violations.append(Violation("name", NAME_TOO_LONG))

    if avatar_url is not None and len(avatar_url) > MAX_AVATAR_URL_LENGTH:
        violations.append(Violation("avatarUrl", AVATAR_URL_TOO_LONG))

    if violations:
        logger.warning(
            "Profile update rejected: fields=%s",
            [violation.field for violation in violations],
        )
        return ValidationResult.failure(violations)

    logger.debug("Profile update validated")
    return ValidationResult.ok(ProfileUpdateRequest(name=name, avatar_url=avatar_url))


def validate_password_change(
    current_password: str | None,
    new_password: str | None,
) -> ValidationResult[PasswordChangeRequest]:
    """Validate the fields of a password change.

    Password values are never logged.
    """
    violations: list[Violation] = []

    if is_blank(current_password):
        violations.append(Violation("currentPassword", CURRENT_PASSWORD_REQUIRED))

    if is_blank(new_password):
        violations.append(Violation("newPassword", NEW_PASSWORD_REQUIRED))
    elif len(new_password) < MIN_PASSWORD_LENGTH:
        violations.append(Violation("newPassword", PASSWORD_TOO_SHORT))

    if violations:
        logger.warning(
            "Password change rejected: fields=%s",
            [violation.field for violation in violations],
        )
        return ValidationResult.failure(violations)

    logger.debug("Password change validated")
    return ValidationResult.ok(
        PasswordChangeRequest(current_password=current_password, new_password=new_password)
    )
