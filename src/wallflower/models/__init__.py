"""Pydantic models for Flickr API payloads."""

from wallflower.models.auth import AccessToken, OauthToken, RequestToken, TokenUser
from wallflower.models.photos import Dimension, Photo, PhotosPage, Stat

__all__ = [
    # Auth
    "AccessToken",
    "OauthToken",
    "RequestToken",
    "TokenUser",
    # Photos
    "Dimension",
    "Photo",
    "PhotosPage",
    "Stat",
]
