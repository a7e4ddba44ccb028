"""flickr.people.getPhotos listing."""

from typing import Any

from pydantic import ValidationError

from wallflower.api.base import BaseAPI
from wallflower.exceptions import FlickrDecodeError
from wallflower.models.photos import Photo, PhotosPage


class PhotosAPI(BaseAPI):
    """Flickr photo listings."""

    async def photos_page(
        self,
        user_id: str,
        params: dict[str, Any] | None = None,
        *,
        size: str = "k",
    ) -> PhotosPage:
        """Get one page of a user's photos.

        Args:
            user_id: NSID of the photo owner ("me" for the token's user)
            params: Filters and pagination (page, per_page, extras, ...)
            size: Size suffix requested through ``extras=url_<size>``

        Returns:
            PhotosPage with normalized photos and pagination info

        Raises:
            FlickrDecodeError: If any record fails to normalize
        """
        data = await self._call("flickr.people.getPhotos", {**(params or {}), "user_id": user_id})
        try:
            return PhotosPage.from_api_response(data, size)
        except (ValidationError, AttributeError, TypeError) as e:
            raise FlickrDecodeError(f"Malformed photo listing: {e}", field="photos") from e

    async def photos(
        self,
        user_id: str,
        params: dict[str, Any] | None = None,
        *,
        size: str = "k",
    ) -> list[Photo]:
        """Get a user's photos. All or nothing: one bad record fails the call."""
        page = await self.photos_page(user_id, params, size=size)
        return page.photos
