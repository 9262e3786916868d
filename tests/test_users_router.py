"""Tests for the /api/v1/users endpoints."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from pokerstats_api.main import app
from pokerstats_api.schemas.profile import (
    PasswordChangeRequest,
    ProfileResponse,
    ProfileUpdateRequest,
)
from pokerstats_api.services.profile import InvalidPasswordError, ProfileNotFoundError

from conftest import USER_EMAIL, USER_ID


def make_profile(**overrides) -> ProfileResponse:
    values = {
        "id": USER_ID,
        "email": USER_EMAIL,
        "name": "Alice",
        "avatar_url": None,
        "updated_at": datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    }
    values.update(overrides)
    return ProfileResponse(**values)


class TestGetProfile:
    def test_returns_profile_in_camel_case(self, client: TestClient, profile_service_mock):
        profile_service_mock.get_profile.return_value = make_profile(avatar_url="https://x.io/a.png")

        response = client.get("/api/v1/users/me")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == USER_ID
        assert body["avatarUrl"] == "https://x.io/a.png"
        assert "updatedAt" in body

    def test_missing_profile_is_404(self, client: TestClient, profile_service_mock):
        profile_service_mock.get_profile.side_effect = ProfileNotFoundError("User not found")

        response = client.get("/api/v1/users/me")

        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}


class TestUpdateProfile:
    def test_valid_update_passes_accepted_request(
        self, client: TestClient, profile_service_mock: MagicMock, auth_context
    ):
        profile_service_mock.update_profile.return_value = make_profile(name="Bob")

        response = client.put(
            "/api/v1/users/me", json={"name": "Bob", "avatarUrl": "https://x.io/b.png"}
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Bob"
        profile_service_mock.update_profile.assert_awaited_once_with(
            auth_context,
            ProfileUpdateRequest(name="Bob", avatar_url="https://x.io/b.png"),
        )

    def test_blank_name_is_rejected_with_field_errors(
        self, client: TestClient, profile_service_mock: MagicMock
    ):
        response = client.put("/api/v1/users/me", json={"name": "   ", "avatarUrl": "u" * 501})

        assert response.status_code == 400
        assert response.json() == {
            "message": "Validation failed",
            "errors": {
                "name": "Name is required",
                "avatarUrl": "Avatar URL cannot exceed 500 characters",
            },
        }
        profile_service_mock.update_profile.assert_not_called()

    def test_absent_name_is_rejected(self, client: TestClient):
        response = client.put("/api/v1/users/me", json={})

        assert response.status_code == 400
        assert response.json()["errors"] == {"name": "Name is required"}

    def test_wrong_json_type_uses_same_envelope(self, client: TestClient):
        response = client.put("/api/v1/users/me", json={"name": 42})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert "name" in body["errors"]

    def test_missing_profile_is_404(self, client: TestClient, profile_service_mock: MagicMock):
        profile_service_mock.update_profile.side_effect = ProfileNotFoundError("User not found")

        response = client.put("/api/v1/users/me", json={"name": "Alice"})

        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}

    def test_blank_and_long_name_shows_required_message(self, client: TestClient):
        response = client.put("/api/v1/users/me", json={"name": " " * 300})

        assert response.status_code == 400
        assert response.json()["errors"] == {"name": "Name is required"}


class TestChangePassword:
    def test_valid_change(self, client: TestClient, profile_service_mock: MagicMock, auth_context):
        response = client.patch(
            "/api/v1/users/me/password",
            json={"currentPassword": "oldpass1", "newPassword": "longenough1"},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Password changed successfully"}
        profile_service_mock.change_password.assert_awaited_once_with(
            auth_context,
            PasswordChangeRequest(current_password="oldpass1", new_password="longenough1"),
        )

    def test_short_password_is_rejected(self, client: TestClient, profile_service_mock: MagicMock):
        response = client.patch(
            "/api/v1/users/me/password",
            json={"currentPassword": "oldpass1", "newPassword": "short"},
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "newPassword": "Password must be at least 8 characters"
        }
        profile_service_mock.change_password.assert_not_called()

    def test_wrong_current_password_is_400(
        self, client: TestClient, profile_service_mock: MagicMock
    ):
        profile_service_mock.change_password.side_effect = InvalidPasswordError(
            "Current password is incorrect"
        )

        response = client.patch(
            "/api/v1/users/me/password",
            json={"currentPassword": "wrongpass", "newPassword": "longenough1"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Current password is incorrect"}


class TestErrorHandling:
    def test_unexpected_error_is_hidden(self, client: TestClient, profile_service_mock: MagicMock):
        profile_service_mock.get_profile.side_effect = RuntimeError("database exploded")
        unsafe_client = TestClient(app, raise_server_exceptions=False)

        response = unsafe_client.get("/api/v1/users/me")

        assert response.status_code == 500
        assert response.json() == {"message": "An unexpected error occurred"}

    def test_missing_token_is_401(self):
        response = TestClient(app).get("/api/v1/users/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"


class TestHealth:
    def test_health(self):
        response = TestClient(app).get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
