"""CLI configuration with XDG-compliant paths and environment variable overrides."""

import json
import logging
import os
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from wallflower.auth.tokens import DEFAULT_TOKEN_KEY

logger = logging.getLogger(__name__)


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def _default_config_dir() -> Path:
    """Get XDG-compliant config directory for credentials.

    Uses XDG_CONFIG_HOME if set, otherwise ~/.config/wallflower.
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "wallflower"
    return Path.home() / ".config" / "wallflower"


def _default_data_dir() -> Path:
    """Get XDG-compliant data directory for tokens.

    Uses XDG_DATA_HOME if set, otherwise ~/.local/share/wallflower.
    """
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data) / "wallflower"
    return Path.home() / ".local" / "share" / "wallflower"


@dataclass
class CLIConfig:
    """Configuration passed through Typer context.

    Directory Structure:
        config_dir/
        └── config.json           # Consumer key and secret

        data_dir/
        └── .flickr-data.json     # OAuth access token
    """

    verbose: bool = False
    config_dir: Path = field(default_factory=_default_config_dir)
    data_dir: Path = field(default_factory=_default_data_dir)

    @property
    def token_path(self) -> Path:
        return self.data_dir / DEFAULT_TOKEN_KEY

    @property
    def credentials_path(self) -> Path:
        return self.config_dir / "config.json"

    def load_credentials(self) -> tuple[str, str]:
        """Load credentials from config file with environment variable overrides.

        Environment variables:
        - FLICKR_API_KEY: Overrides consumer_key from file
        - FLICKR_API_SECRET: Overrides consumer_secret from file

        Returns:
            Tuple of (consumer_key, consumer_secret)

        Raises:
            ValueError: If credentials cannot be determined from file or env vars
        """
        consumer_key: str | None = None
        consumer_secret: str | None = None

        if self.credentials_path.exists():
            try:
                with self.credentials_path.open() as f:
                    data = json.load(f)
                consumer_key = data.get("consumer_key")
                consumer_secret = data.get("consumer_secret")
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Failed to read %s: %s", self.credentials_path, e)

        if env_key := os.environ.get("FLICKR_API_KEY"):
            consumer_key = env_key
        if env_secret := os.environ.get("FLICKR_API_SECRET"):
            consumer_secret = env_secret

        if not consumer_key or not consumer_secret:
            missing = []
            if not consumer_key:
                missing.append("consumer_key")
            if not consumer_secret:
                missing.append("consumer_secret")

            msg = (
                f"Missing credentials: {', '.join(missing)}. "
                f"Set via environment variables (FLICKR_API_KEY, FLICKR_API_SECRET) "
                f"or create config file at {self.credentials_path}"
            )
            raise ValueError(msg)

        return consumer_key, consumer_secret
