"""Main Flickr client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from wallflower.api.auth import AuthAPI
from wallflower.api.photos import PhotosAPI
from wallflower.auth import FlickrAuth, TokenStore
from wallflower.config import FlickrConfig
from wallflower.models.auth import AccessToken

if TYPE_CHECKING:
    from types import TracebackType

    from wallflower.auth import VerifierPrompt
    from wallflower.models.auth import OauthToken

logger = logging.getLogger(__name__)


class FlickrClient:
    """Flickr API client.

    Holds the consumer credentials and access token; the only object that
    signs authenticated calls.

    Usage (context manager - recommended for connection pooling):
        async with FlickrClient(config) as client:
            await client.load_or_authenticate(prompt)
            info = await client.check_token()
            photos = await client.photos.photos(info.user.nsid)

    Usage (external HTTP client - shared across integrations):
        http_client = httpx.AsyncClient(timeout=30.0)
        client = FlickrClient(config, http_client=http_client)
        # Client uses shared pool, doesn't close it
    """

    def __init__(
        self,
        config: FlickrConfig,
        *,
        token_store: TokenStore | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Flickr configuration with consumer credentials
            token_store: Optional token storage (uses default if not provided)
            http_client: Optional httpx.AsyncClient for connection pooling.
                        If provided, the client will use this pool and NOT close it.
        """
        self.config = config
        self.token_store = token_store or TokenStore()
        self.auth = FlickrAuth(config, http_client)

        # HTTP client management
        self._http_client = http_client
        self._owns_http_client = http_client is None  # We manage lifecycle if not provided

        # Initialize API modules
        self.tokens = AuthAPI(config, self.auth, http_client)
        self.photos = PhotosAPI(config, self.auth, http_client)

    @property
    def http_client(self) -> httpx.AsyncClient | None:
        """Pool shared by every call this client makes, if one is open."""
        return self._http_client

    def _set_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        """Update HTTP client on auth and all API modules."""
        self._http_client = http_client
        self.auth.set_http_client(http_client)
        self.tokens.set_http_client(http_client)
        self.photos.set_http_client(http_client)

    async def open(self) -> None:
        """Open connection pool for HTTP requests."""
        if self._http_client is None and self._owns_http_client:
            self._set_http_client(httpx.AsyncClient(timeout=30.0, follow_redirects=True))

    async def close(self) -> None:
        """Close connection pool.

        Only closes the pool if this client owns it (not external).
        """
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._set_http_client(None)

    async def __aenter__(self) -> FlickrClient:
        """Async context manager entry - opens connection pool."""
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit - closes connection pool."""
        await self.close()

    @property
    def is_authenticated(self) -> bool:
        """Check if the client holds an access token."""
        return self.auth.is_authenticated

    def load_token(self) -> bool:
        """Load saved access token.

        Returns:
            True if token was loaded, False if no token saved
        """
        token = self.token_store.load()
        if token:
            self.auth.set_access_token(token)
            return True
        return False

    def save_token(self) -> None:
        """Save current access token."""
        if self.auth.access_token:
            self.token_store.save(self.auth.access_token)

    def clear_token(self) -> None:
        """Clear saved access token."""
        self.token_store.clear()

    def set_access_token(self, token: str, secret: str) -> None:
        """Set access token directly."""
        self.auth.set_access_token(AccessToken(token=token, secret=secret))

    async def load_or_authenticate(self, prompt: VerifierPrompt) -> AccessToken:
        """Use the stored token, or run the OAuth flow and store the result."""
        if self.load_token():
            logger.debug("Using stored access token")
        else:
            logger.info("No stored access token, starting OAuth flow")
            await self.auth.authenticate(prompt)
            self.save_token()
        return self.auth.access_token

    async def check_token(self) -> OauthToken:
        """Verify the access token, returning its owner and permissions."""
        return await self.tokens.check_token()
