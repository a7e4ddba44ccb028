"""flickr.auth.* REST methods."""

from pydantic import ValidationError

from wallflower.api.base import BaseAPI
from wallflower.exceptions import FlickrDecodeError
from wallflower.models.auth import OauthToken


class AuthAPI(BaseAPI):
    """Flickr OAuth token inspection."""

    async def check_token(self) -> OauthToken:
        """Verify the access token and report who it belongs to."""
        data = await self._call("flickr.auth.oauth.checkToken")
        try:
            return OauthToken.from_api_response(data)
        except (ValidationError, AttributeError) as e:
            raise FlickrDecodeError(f"Malformed checkToken response: {e}", field="oauth") from e
