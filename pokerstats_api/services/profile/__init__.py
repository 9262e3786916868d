from .service import (
    InvalidPasswordError,
    ProfileNotFoundError,
    ProfileService,
    get_profile_service,
    init_profile_service,
)

__all__ = [
    "ProfileService",
    "ProfileNotFoundError",
    "InvalidPasswordError",
    "init_profile_service",
    "get_profile_service",
]
