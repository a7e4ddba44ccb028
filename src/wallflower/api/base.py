"""Base API client with common functionality."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from wallflower.auth.signing import build_url
from wallflower.exceptions import FlickrAPIError, FlickrDecodeError, FlickrTransportError
from wallflower.models.photos import Stat

if TYPE_CHECKING:
    from wallflower.auth import FlickrAuth
    from wallflower.config import FlickrConfig

logger = logging.getLogger(__name__)


class BaseAPI:
    """Base class for Flickr REST API groups.

    Provides the signed GET every REST method goes through, plus
    error handling and JSON decoding.
    """

    def __init__(
        self,
        config: FlickrConfig,
        auth: FlickrAuth,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self.auth = auth
        self._http_client = http_client

    def set_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        """Set the shared HTTP client for connection pooling."""
        self._http_client = http_client

    async def _call(
        self,
        method: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Call a Flickr REST method with a signed GET.

        Args:
            method: Flickr method name (e.g., "flickr.people.getPhotos")
            params: Method-specific parameters

        Returns:
            Decoded JSON body with ``stat`` == "ok"

        Raises:
            FlickrTransportError: On network failure or HTTP error status
            FlickrDecodeError: If the body is not a JSON object
            FlickrAPIError: If Flickr answered ``"stat": "fail"``
        """
        url = self.config.rest_url

        query_params = {
            "api_key": self.config.consumer_key,
            "format": "json",
            "nojsoncallback": "1",
            "method": method,
        }
        if params:
            query_params.update({k: str(v) for k, v in params.items() if v is not None})

        signed = self.auth.sign_request("GET", url, query_params)
        request_url = build_url(url, signed)

        logger.debug("Request: GET %s method=%s", url, method)
        logger.debug("Params: %s", params)

        try:
            if self._http_client is not None:
                # Use shared connection pool
                response = await self._http_client.get(request_url)
            else:
                # Fallback: create per-request client (no pooling)
                async with httpx.AsyncClient(timeout=30.0) as client:
                    response = await client.get(request_url)
        except httpx.HTTPError as e:
            raise FlickrTransportError(f"Request to {method} failed: {e}", url=url) from e

        return self._handle_response(response, method)

    def _handle_response(self, response: httpx.Response, method: str) -> dict[str, Any]:
        """Handle API response, raising appropriate errors."""
        if response.status_code >= 400:
            raise FlickrTransportError(
                f"HTTP error calling {method}: {response.status_code}",
                status_code=response.status_code,
                url=self.config.rest_url,
            )

        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FlickrDecodeError(f"Response to {method} is not valid JSON: {e}") from e

        if not isinstance(body, dict):
            raise FlickrDecodeError(f"Response to {method} is not a JSON object")

        stat = str(body.get("stat", "")).lower()
        if stat == Stat.FAIL:
            raise FlickrAPIError(
                body.get("message", f"{method} failed"),
                code=body.get("code"),
                response_body=body,
            )
        if stat != Stat.OK:
            raise FlickrDecodeError(
                f"Unexpected stat {body.get('stat')!r} from {method}",
                field="stat",
            )

        return body
