"""Flickr REST API modules."""

from wallflower.api.auth import AuthAPI
from wallflower.api.photos import PhotosAPI

__all__ = ["AuthAPI", "PhotosAPI"]
