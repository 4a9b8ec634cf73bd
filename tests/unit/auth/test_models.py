"""
Unit tests for the AuthUser model.
"""

from studdybuddy.auth import AuthUser


class TestAuthUser:
    """Test AuthUser parsing and storage format."""

    def test_parses_api_field_names(self):
        user = AuthUser.model_validate({
            "id": 7,
            "name": "Ada",
            "email": "ada@example.com",
            "accessToken": "abc123",
            "refreshToken": "refresh1",
        })

        assert user.access_token == "abc123"
        assert user.refresh_token == "refresh1"

    def test_keeps_unknown_fields(self):
        user = AuthUser.model_validate({"id": 7, "accessToken": "a", "projects": [1, 2]})

        assert user.to_storage()["projects"] == [1, 2]

    def test_to_storage_uses_api_names_and_drops_empty(self):
        user = AuthUser(id=7, access_token="abc123")

        assert user.to_storage() == {"id": 7, "accessToken": "abc123"}
