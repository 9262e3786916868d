import logging
import sys
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Supabase
    SUPABASE_URL: str
    SUPABASE_API_KEY: str

    # App config
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    DEBUG: bool = False

    # Profile cache (Upstash Redis)
    CACHE_ENABLED: bool = True
    PROFILE_CACHE_TTL_SECONDS: int = 300
    UPSTASH_REDIS_REST_URL: str | None = None
    UPSTASH_REDIS_REST_TOKEN: str | None = None

    # Write auditing
    AUDITING_ENABLED: bool = True

    @field_validator("UPSTASH_REDIS_REST_URL")
    @classmethod
    def validate_redis_url(cls, v: str | None) -> str | None:
        if v is not None and not v.startswith("https://"):
            raise ValueError("UPSTASH_REDIS_REST_URL must be a valid HTTPS URL")
        return v

    @field_validator("PROFILE_CACHE_TTL_SECONDS")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("PROFILE_CACHE_TTL_SECONDS must be positive")
        return v

    @model_validator(mode="after")
    def validate_cache_credentials(self) -> "Settings":
        if not self.CACHE_ENABLED:
            return self
        if not self.UPSTASH_REDIS_REST_URL:
            raise ValueError("UPSTASH_REDIS_REST_URL is required when CACHE_ENABLED is true")
        if not self.UPSTASH_REDIS_REST_TOKEN or not self.UPSTASH_REDIS_REST_TOKEN.strip():
            raise ValueError("UPSTASH_REDIS_REST_TOKEN cannot be empty when CACHE_ENABLED is true")
        return self

    @property
    def supabase_jwks_url(self) -> str:
        return f"{self.SUPABASE_URL}/auth/v1/.well-known/jwks.json"


def configure_logging(debug: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if debug else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    configure_logging(settings.DEBUG)
    logger.info("Settings loaded successfully")
    logger.debug("Supabase URL: %s", settings.SUPABASE_URL)
    logger.debug(
        "Profile cache enabled: %s (ttl=%ds), auditing enabled: %s",
        settings.CACHE_ENABLED,
        settings.PROFILE_CACHE_TTL_SECONDS,
        settings.AUDITING_ENABLED,
    )
    return settings
