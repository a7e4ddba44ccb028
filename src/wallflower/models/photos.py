"""Photo listing models."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, HttpUrl


class Stat(StrEnum):
    """Top-level status of every Flickr REST response."""

    OK = "ok"
    FAIL = "fail"


def _coerce_dimension(value: Any) -> int:
    """Flickr sends sizes either as JSON integers or as digit strings."""
    if isinstance(value, bool):
        msg = f"invalid dimension: {value!r}"
        raise ValueError(msg)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    msg = f"invalid dimension: {value!r}"
    raise ValueError(msg)


Dimension = Annotated[int, BeforeValidator(_coerce_dimension), Field(ge=0, le=2**32 - 1)]


class Photo(BaseModel):
    """Normalized photo record."""

    id: str | None = None
    title: str = ""
    public: bool
    url: HttpUrl
    height: Dimension
    width: Dimension
    secret: str | None = None

    @classmethod
    def from_api_record(cls, record: dict[str, Any], size: str = "k") -> Photo:
        """Build from a raw listing entry requested with ``extras=url_<size>``."""
        return cls(
            id=record.get("id"),
            title=record.get("title", ""),
            public=record.get("ispublic", 0),
            url=record.get(f"url_{size}"),
            height=record.get(f"height_{size}"),
            width=record.get(f"width_{size}"),
            secret=record.get("secret"),
        )


class PhotosPage(BaseModel):
    """One page of a photo listing."""

    page: Dimension
    pages: Dimension
    perpage: Dimension
    total: Dimension
    photos: list[Photo] = Field(default_factory=list)

    @property
    def has_more(self) -> bool:
        return self.page < self.pages

    @classmethod
    def from_api_response(cls, data: dict[str, Any], size: str = "k") -> PhotosPage:
        """Parse a flickr.people.getPhotos ``photos`` payload.

        Any record that fails to normalize fails the whole page.
        """
        listing = data.get("photos", {})
        return cls(
            page=listing.get("page", 1),
            pages=listing.get("pages", 0),
            perpage=listing.get("perpage", 0),
            total=listing.get("total", 0),
            photos=[Photo.from_api_record(r, size) for r in listing.get("photo", [])],
        )
