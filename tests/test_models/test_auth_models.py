"""Tests for OAuth token models."""

import pytest
from pydantic import ValidationError

from wallflower.models.auth import AccessToken, OauthToken


class TestOauthToken:
    """Tests for checkToken response unwrapping."""

    def test_unwraps_content_fields(self) -> None:
        """Nested _content values should be flattened."""
        data = {
            "oauth": {
                "token": {"_content": "72157626318069415-087bfc7b5816092c"},
                "perms": {"_content": "read"},
                "user": {
                    "nsid": "21207597@N07",
                    "username": "jamalfanaian",
                    "fullname": "Jamal Fanaian",
                },
            },
            "stat": "ok",
        }

        token = OauthToken.from_api_response(data)

        assert token.token == "72157626318069415-087bfc7b5816092c"
        assert token.perms == "read"
        assert token.user.nsid == "21207597@N07"
        assert token.user.username == "jamalfanaian"

    def test_missing_user_is_rejected(self) -> None:
        """A response without a user cannot be flattened."""
        data = {"oauth": {"token": {"_content": "t"}, "perms": {"_content": "read"}}}

        with pytest.raises(ValidationError):
            OauthToken.from_api_response(data)


class TestAccessToken:
    """Tests for AccessToken serialization."""

    def test_json_round_trip(self) -> None:
        """Serialized tokens should deserialize to an equal token."""
        token = AccessToken(token="t", secret="s", user_nsid="1@N07")

        assert AccessToken.model_validate_json(token.model_dump_json()) == token
