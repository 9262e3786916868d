"""Shared fixtures for profile API tests."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Settings are read when the app module is imported
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_API_KEY", "test-anon-key")
os.environ.setdefault("CACHE_ENABLED", "false")

from fastapi.testclient import TestClient  # noqa: E402

from pokerstats_api.dependencies.auth import AuthContext, jwt_bearer  # noqa: E402
from pokerstats_api.dependencies.cache import ProfileCache  # noqa: E402
from pokerstats_api.main import app  # noqa: E402
from pokerstats_api.services.profile import ProfileService, get_profile_service  # noqa: E402

USER_ID = "00000000-0000-0000-0000-000000000001"
USER_EMAIL = "alice@example.com"
ACCESS_TOKEN = "test-access-token"


@pytest.fixture
def auth_context() -> AuthContext:
    """Authenticated caller with an email account."""
    return AuthContext(user_id=USER_ID, email=USER_EMAIL, access_token=ACCESS_TOKEN)


@pytest.fixture
def profile_service_mock() -> MagicMock:
    """ProfileService stand-in; async methods are AsyncMocks."""
    return MagicMock(spec=ProfileService)


@pytest.fixture
def client(auth_context: AuthContext, profile_service_mock: MagicMock):
    """Test client with authentication and the profile service overridden."""
    app.dependency_overrides[jwt_bearer] = lambda: auth_context
    app.dependency_overrides[get_profile_service] = lambda: profile_service_mock
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def redis_mock() -> AsyncMock:
    redis = AsyncMock()
    redis.get.return_value = None
    return redis


@pytest.fixture
def profile_cache(redis_mock: AsyncMock) -> ProfileCache:
    return ProfileCache(redis_mock, ttl_seconds=60)


def make_supabase_mock(rows: list[dict] | None = None) -> MagicMock:
    """Supabase client whose select/update chains return `rows`."""
    supabase = MagicMock()
    response = MagicMock(data=rows or [])
    table = supabase.table.return_value
    table.select.return_value.eq.return_value.execute.return_value = response
    table.update.return_value.eq.return_value.execute.return_value = response
    return supabase
