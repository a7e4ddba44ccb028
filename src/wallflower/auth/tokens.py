"""Token storage and persistence."""

import logging
import os
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from wallflower.models.auth import AccessToken

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_KEY = ".flickr-data.json"


def _get_data_dir() -> Path:
    """Get default token storage directory."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / "wallflower"


class BlobStore(Protocol):
    """Key-value storage for opaque byte blobs."""

    def load(self, key: str) -> bytes | None: ...

    def store(self, key: str, blob: bytes) -> None: ...

    def delete(self, key: str) -> None: ...


class FileBlobStore:
    """Stores each blob as a file named after its key under ``root``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root or _get_data_dir()

    def path_for(self, key: str) -> Path:
        return self.root / key

    def load(self, key: str) -> bytes | None:
        try:
            return self.path_for(key).read_bytes()
        except FileNotFoundError:
            return None

    def store(self, key: str, blob: bytes) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Owner read/write only, before any byte is written (fchmod covers
        # a file that already existed with a wider mode)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as f:
            os.fchmod(f.fileno(), 0o600)
            f.write(blob)

    def delete(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)


class TokenStore:
    """Persistent storage for the OAuth access token.

    The token is kept as pretty-printed JSON under a single key of the
    underlying blob store.
    """

    def __init__(self, store: BlobStore | None = None, key: str = DEFAULT_TOKEN_KEY) -> None:
        self.store = store if store is not None else FileBlobStore()
        self.key = key

    def save(self, token: AccessToken) -> None:
        """Save access token to storage."""
        blob = token.model_dump_json(indent=2, exclude_none=True)
        self.store.store(self.key, blob.encode())

    def load(self) -> AccessToken | None:
        """Load access token from storage.

        Returns None if no token is stored or the stored blob is unreadable.
        """
        blob = self.store.load(self.key)
        if blob is None:
            return None

        try:
            return AccessToken.model_validate_json(blob)
        except ValidationError:
            logger.warning("Ignoring unreadable token stored under %s", self.key)
            return None

    def clear(self) -> None:
        """Remove stored token."""
        self.store.delete(self.key)

    def has_token(self) -> bool:
        """Check if a token is stored."""
        return self.store.load(self.key) is not None
