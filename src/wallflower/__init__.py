"""Flickr photostream mirror.

An async Python client for the parts of the Flickr API a desktop
slideshow needs: OAuth 1.0a authentication, token checks and photo
listings, plus a pipeline that keeps a local copy of a photostream.

Example:
    from wallflower import FlickrClient, FlickrConfig, MirrorSettings, PhotoMirror

    async with FlickrClient(FlickrConfig.load()) as client:
        # Stored token, or the full OAuth flow on first run
        await client.load_or_authenticate(lambda url: input(f"Visit {url}\\nCode: "))

        info = await client.check_token()
        report = await PhotoMirror(client, MirrorSettings()).run(info.user.nsid)
        print(f"{report.downloaded} downloaded, {report.failed} failed")
"""

from wallflower.client import FlickrClient
from wallflower.config import FlickrConfig, MirrorSettings
from wallflower.exceptions import (
    FlickrAPIError,
    FlickrAuthError,
    FlickrDecodeError,
    FlickrTokenError,
    FlickrTransportError,
    PhotoEncodingError,
    PhotoStoreError,
    WallflowerError,
)
from wallflower.mirror import MirrorReport, MirrorStatus, PhotoMirror

__version__ = "0.1.0"

__all__ = [
    # Main client
    "FlickrClient",
    "FlickrConfig",
    # Mirror
    "MirrorReport",
    "MirrorSettings",
    "MirrorStatus",
    "PhotoMirror",
    # Exceptions
    "FlickrAPIError",
    "FlickrAuthError",
    "FlickrDecodeError",
    "FlickrTokenError",
    "FlickrTransportError",
    "PhotoEncodingError",
    "PhotoStoreError",
    "WallflowerError",
]
