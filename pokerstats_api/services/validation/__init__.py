"""Request validation - pure functions over raw request fields.

Usage:
    from pokerstats_api.services.validation import validate_profile_update

    result = validate_profile_update(payload.name, payload.avatar_url)

    if result.is_valid:
        request = result.value  # ProfileUpdateRequest
    else:
        errors = result.errors_by_field()  # {"name": "Name is required"}
"""

from .requests import (
    AVATAR_URL_TOO_LONG,
    CURRENT_PASSWORD_REQUIRED,
    NAME_REQUIRED,
    NAME_TOO_LONG,
    NEW_PASSWORD_REQUIRED,
    PASSWORD_TOO_SHORT,
    validate_password_change,
    validate_profile_update,
)
from .result import ValidationResult, Violation

__all__ = [
    # Validators
    "validate_profile_update",
    "validate_password_change",
    # Result types
    "ValidationResult",
    "Violation",
    # Messages
    "NAME_REQUIRED",
    "NAME_TOO_LONG",
    "AVATAR_URL_TOO_LONG",
    "CURRENT_PASSWORD_REQUIRED",
    "NEW_PASSWORD_REQUIRED",
    "PASSWORD_TOO_SHORT",
]
