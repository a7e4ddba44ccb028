"""OAuth token models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RequestToken(BaseModel):
    """OAuth request token (first step of OAuth flow)."""

    token: str = Field(description="Request token value")
    secret: str = Field(description="Request token secret")
    callback_confirmed: bool = Field(default=False)


class AccessToken(BaseModel):
    """OAuth access token (final step of OAuth flow).

    Only ``token`` and ``secret`` are needed to sign calls; the identity
    fields are filled in when Flickr returns them with the token.
    """

    token: str = Field(description="Access token value")
    secret: str = Field(default="", description="Access token secret")
    user_nsid: str | None = Field(default=None)
    username: str | None = Field(default=None)
    fullname: str | None = Field(default=None)


class TokenUser(BaseModel):
    """User the access token belongs to."""

    nsid: str
    username: str | None = None
    fullname: str | None = None


class OauthToken(BaseModel):
    """Flattened result of flickr.auth.oauth.checkToken."""

    token: str
    perms: str
    user: TokenUser

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> OauthToken:
        """Unwrap Flickr's ``{"_content": ...}`` wrappers."""
        oauth = data.get("oauth", {})
        return cls(
            token=oauth.get("token", {}).get("_content"),
            perms=oauth.get("perms", {}).get("_content"),
            user=oauth.get("user"),
        )
