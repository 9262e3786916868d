from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MAX_NAME_LENGTH = 255
MAX_AVATAR_URL_LENGTH = 500
MIN_PASSWORD_LENGTH = 8


def is_blank(value: str | None) -> bool:
    """True for None, the empty string, or whitespace-only text."""
    return value is None or not value.strip()


def _require_non_blank(value: str) -> str:
    if is_blank(value):
        raise ValueError("must not be blank")
    return value


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Raw request bodies, as bound by FastAPI before validation

class ProfileUpdatePayload(CamelModel):
    name: str | None = None
    avatar_url: str | None = None


class PasswordChangePayload(CamelModel):
    current_password: str | None = None
    new_password: str | None = None


# Accepted requests, only produced by services.validation


class ProfileUpdateRequest(CamelModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    avatar_url: str | None = Field(None, max_length=MAX_AVATAR_URL_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _require_non_blank(v)


class PasswordChangeRequest(CamelModel):
    model_config = ConfigDict(frozen=True)

    current_password: str = Field(..., repr=False)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, repr=False)

    @field_validator("current_password", "new_password")
    @classmethod
    def validate_passwords(cls, v: str) -> str:
        return _require_non_blank(v)


# Responses


class ProfileResponse(CamelModel):
    id: str
    email: str | None = None
    name: str | None = None
    avatar_url: str | None = None
    updated_at: datetime | None = None


class MessageResponse(BaseModel):
    message: str


class ValidationErrorResponse(BaseModel):
    message: str
    errors: dict[str, str]
