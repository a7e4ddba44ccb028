"""Configuration management for the Flickr client and photo mirror."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_config_dir() -> Path:
    """Get XDG-compliant config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "wallflower"
    return Path.home() / ".config" / "wallflower"


@dataclass(frozen=True, slots=True)
class FlickrConfig:
    """Flickr API configuration."""

    consumer_key: str
    consumer_secret: str = field(repr=False)
    perms: str = "read"

    oauth_base_url: str = field(default="https://www.flickr.com/services/oauth", repr=False)
    rest_url: str = field(default="https://api.flickr.com/services/rest", repr=False)

    @property
    def request_token_url(self) -> str:
        return f"{self.oauth_base_url}/request_token"

    @property
    def authorize_url(self) -> str:
        return f"{self.oauth_base_url}/authorize"

    @property
    def access_token_url(self) -> str:
        return f"{self.oauth_base_url}/access_token"

    @classmethod
    def from_env(cls) -> FlickrConfig:
        """Create config from environment variables.

        Expected env vars:
        - FLICKR_API_KEY
        - FLICKR_API_SECRET
        """
        consumer_key = os.environ.get("FLICKR_API_KEY")
        consumer_secret = os.environ.get("FLICKR_API_SECRET")

        if not consumer_key or not consumer_secret:
            msg = "Missing required environment variables: FLICKR_API_KEY and FLICKR_API_SECRET"
            raise ValueError(msg)

        return cls(consumer_key=consumer_key, consumer_secret=consumer_secret)

    @classmethod
    def from_file(cls, path: Path | None = None) -> FlickrConfig:
        """Load config from JSON file.

        Default path: ~/.config/wallflower/config.json

        Expected format:
        {
            "consumer_key": "...",
            "consumer_secret": "..."
        }
        """
        if path is None:
            path = _get_config_dir() / "config.json"

        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with path.open() as f:
            data = json.load(f)

        return cls(
            consumer_key=data["consumer_key"],
            consumer_secret=data["consumer_secret"],
        )

    @classmethod
    def load(cls) -> FlickrConfig:
        """Load config from environment or file (env takes precedence)."""
        try:
            return cls.from_env()
        except ValueError:
            return cls.from_file()


@dataclass(frozen=True, slots=True)
class MirrorSettings:
    """Knobs for the photo mirror pipeline.

    ``max_pages`` bounds how far back into the photostream a run reaches;
    the pipeline also stops at the last page Flickr reports.
    """

    photo_dir: Path = Path("photos")
    max_pages: int = 3
    per_page: int = 100
    workers: int = 8
    min_taken_date: str | None = "1388494800"
    content_type: str = "1"  # photos only
    size: str = "k"  # requests extras=url_k, reads url_k/height_k/width_k
    privacy_filter: str | None = None

    def __post_init__(self) -> None:
        for name in ("max_pages", "per_page", "workers"):
            if getattr(self, name) < 1:
                msg = f"{name} must be at least 1"
                raise ValueError(msg)

    @property
    def extras(self) -> str:
        return f"url_{self.size}"

    def listing_params(self, page: int) -> dict[str, str]:
        """Filter and pagination parameters for one listing page."""
        params = {
            "content_type": self.content_type,
            "per_page": str(self.per_page),
            "page": str(page),
            "extras": self.extras,
        }
        if self.min_taken_date:
            params["min_taken_date"] = self.min_taken_date
        if self.privacy_filter:
            params["privacy_filter"] = self.privacy_filter
        return params
