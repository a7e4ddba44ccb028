"""Typed exceptions for the Flickr client and photo mirror."""

from typing import Any


class WallflowerError(Exception):
    """Base exception for all wallflower errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class FlickrAuthError(WallflowerError):
    """Authentication or authorization error."""

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        self.stage = stage  # e.g., "request_token", "authorize", "access_token"
        super().__init__(message)


class FlickrTokenError(FlickrAuthError):
    """Signing attempted without a usable access token."""

    def __init__(self, message: str) -> None:
        super().__init__(message, stage="token_validation")


class FlickrTransportError(WallflowerError):
    """Network failure or HTTP error status while talking to Flickr."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        self.status_code = status_code  # None when no response was received
        self.url = url
        super().__init__(message)


class FlickrAPIError(WallflowerError):
    """Flickr answered with ``"stat": "fail"``."""

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        response_body: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.response_body = response_body
        super().__init__(message)

    @property
    def is_invalid_token(self) -> bool:
        """Flickr error 98: the OAuth token was rejected."""
        return self.code == 98


class FlickrDecodeError(WallflowerError):
    """Response body could not be decoded into the expected shape."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class PhotoStoreError(WallflowerError):
    """Local photo storage error."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


class PhotoEncodingError(PhotoStoreError):
    """Percent-decoded URL path is not valid UTF-8."""
