"""OAuth 1.0a authentication for the Flickr API."""

from __future__ import annotations

import logging
import secrets
import time
from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING, TypeAlias
from urllib.parse import parse_qs

import httpx

from wallflower.auth.signing import build_url, sign, signature_base_string
from wallflower.exceptions import FlickrAuthError, FlickrTokenError, FlickrTransportError
from wallflower.models.auth import AccessToken, RequestToken

if TYPE_CHECKING:
    from wallflower.config import FlickrConfig

logger = logging.getLogger(__name__)

# Receives the authorization URL, returns the code Flickr shows after approval.
VerifierPrompt: TypeAlias = Callable[[str], str]


class AuthState(StrEnum):
    """Progress through the three-legged OAuth flow."""

    UNAUTHENTICATED = "unauthenticated"
    REQUEST_TOKEN_OBTAINED = "request_token_obtained"
    USER_AUTHORIZED = "user_authorized"
    ACCESS_TOKEN_OBTAINED = "access_token_obtained"


class FlickrAuth:
    """OAuth 1.0a authentication handler for the Flickr API.

    Implements the full OAuth 1.0a flow:
    1. Get request token
    2. User authorization (out-of-band, via a verifier prompt)
    3. Exchange verifier for access token

    Once an access token is set, ``sign_request`` produces the signed
    parameter set for any REST call.
    """

    def __init__(
        self,
        config: FlickrConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self._http_client = http_client
        self._access_token: AccessToken | None = None
        self._request_token: RequestToken | None = None
        self._verifier: str | None = None
        self.state = AuthState.UNAUTHENTICATED

    def set_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        """Set the shared HTTP client for connection pooling."""
        self._http_client = http_client

    @property
    def is_authenticated(self) -> bool:
        """Check if we have an access token."""
        return self._access_token is not None

    @property
    def access_token(self) -> AccessToken | None:
        """Get current access token if authenticated."""
        return self._access_token

    def set_access_token(self, token: AccessToken) -> None:
        """Set access token (e.g., loaded from storage)."""
        self._access_token = token
        self._request_token = None
        self._verifier = None
        self.state = AuthState.ACCESS_TOKEN_OBTAINED

    async def get_request_token(self) -> RequestToken:
        """Step 1: Get a request token to start OAuth flow."""
        oauth_params = self._build_oauth_params()
        oauth_params["oauth_callback"] = "oob"  # Out-of-band for desktop apps

        data = await self._fetch_token_response(
            self.config.request_token_url,
            oauth_params,
            token_secret="",
            stage="request_token",
        )
        token, token_secret = self._extract_token(data, stage="request_token")

        self._request_token = RequestToken(
            token=token,
            secret=token_secret,
            callback_confirmed=data.get("oauth_callback_confirmed") == "true",
        )
        self._verifier = None
        self.state = AuthState.REQUEST_TOKEN_OBTAINED
        return self._request_token

    def authorization_url(self, request_token: RequestToken | None = None) -> str:
        """URL the user visits to approve access. Never fetched by the client."""
        request_token = request_token or self._request_token
        if request_token is None:
            raise FlickrAuthError(
                "No request token available. Call get_request_token first.",
                stage="authorize",
            )
        return build_url(
            self.config.authorize_url,
            {"oauth_token": request_token.token, "perms": self.config.perms},
        )

    def authorize(self, prompt: VerifierPrompt) -> str:
        """Step 2: Show the authorization URL and block until a code is entered."""
        if self.state is not AuthState.REQUEST_TOKEN_OBTAINED:
            raise FlickrAuthError(
                f"Cannot authorize from state {self.state}",
                stage="authorize",
            )

        verifier = (prompt(self.authorization_url()) or "").strip()
        if not verifier:
            raise FlickrAuthError("No verification code supplied", stage="authorize")

        self._verifier = verifier
        self.state = AuthState.USER_AUTHORIZED
        return verifier

    async def get_access_token(self, verifier: str | None = None) -> AccessToken:
        """Step 3: Exchange verifier code for access token.

        Args:
            verifier: The verification code shown to user after authorization.
                Defaults to the code collected by ``authorize``.

        Returns:
            AccessToken for API access
        """
        verifier = verifier or self._verifier
        if self._request_token is None:
            raise FlickrAuthError(
                "No request token available. Call get_request_token first.",
                stage="access_token",
            )
        if not verifier:
            raise FlickrAuthError("No verification code supplied", stage="access_token")

        oauth_params = self._build_oauth_params()
        oauth_params["oauth_token"] = self._request_token.token
        oauth_params["oauth_verifier"] = verifier

        data = await self._fetch_token_response(
            self.config.access_token_url,
            oauth_params,
            token_secret=self._request_token.secret,
            stage="access_token",
        )
        token, token_secret = self._extract_token(data, stage="access_token")

        self.set_access_token(
            AccessToken(
                token=token,
                secret=token_secret,
                user_nsid=data.get("user_nsid"),
                username=data.get("username"),
                fullname=data.get("fullname"),
            )
        )
        return self._access_token

    async def authenticate(self, prompt: VerifierPrompt) -> AccessToken:
        """Run the whole flow from request token to access token."""
        await self.get_request_token()
        self.authorize(prompt)
        return await self.get_access_token()

    def sign_request(
        self,
        method: str,
        url: str,
        params: dict[str, str] | None = None,
    ) -> dict[str, str]:
        """Sign a request with the access token.

        Args:
            method: HTTP method
            url: Request URL without query string
            params: Request parameters, signed together with the OAuth ones

        Returns:
            All parameters, including ``oauth_signature``
        """
        if not self._access_token:
            raise FlickrTokenError("Not authenticated. Complete OAuth flow first.")

        all_params = self._build_oauth_params()
        all_params["oauth_token"] = self._access_token.token
        if params:
            all_params.update(params)

        all_params["oauth_signature"] = sign(
            signature_base_string(method, url, all_params),
            self.config.consumer_secret,
            self._access_token.secret,
        )
        return all_params

    def _build_oauth_params(self) -> dict[str, str]:
        """Build base OAuth parameters."""
        return {
            "oauth_consumer_key": self.config.consumer_key,
            "oauth_nonce": secrets.token_hex(16),
            "oauth_signature_method": "HMAC-SHA1",
            "oauth_timestamp": str(int(time.time())),
            "oauth_version": "1.0",
        }

    async def _fetch_token_response(
        self,
        url: str,
        oauth_params: dict[str, str],
        *,
        token_secret: str,
        stage: str,
    ) -> dict[str, str]:
        """Sign and GET an OAuth endpoint, parse its form-encoded body."""
        oauth_params["oauth_signature"] = sign(
            signature_base_string("GET", url, oauth_params),
            self.config.consumer_secret,
            token_secret,
        )
        request_url = build_url(url, oauth_params)
        logger.debug("OAuth %s: GET %s", stage, url)

        try:
            if self._http_client is not None:
                response = await self._http_client.get(request_url)
            else:
                async with httpx.AsyncClient(timeout=30.0) as client:
                    response = await client.get(request_url)
        except httpx.HTTPError as e:
            raise FlickrTransportError(f"OAuth {stage} request failed: {e}", url=url) from e

        if response.status_code != 200:
            raise FlickrAuthError(
                f"OAuth {stage} failed: {response.status_code} {response.text}",
                stage=stage,
            )

        return {k: v[0] for k, v in parse_qs(response.text).items()}

    @staticmethod
    def _extract_token(data: dict[str, str], *, stage: str) -> tuple[str, str]:
        token = data.get("oauth_token", "")
        token_secret = data.get("oauth_token_secret", "")
        if not token or not token_secret:
            raise FlickrAuthError(f"Invalid {stage} response", stage=stage)
        return token, token_secret
