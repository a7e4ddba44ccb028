"""Tests for access token persistence."""

import json
import os
import stat
from pathlib import Path
from typing import Any

import pytest

from wallflower.auth import FileBlobStore, TokenStore
from wallflower.models.auth import AccessToken


class DictBlobStore:
    """In-memory blob store."""

    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}

    def load(self, key: str) -> bytes | None:
        return self.blobs.get(key)

    def store(self, key: str, blob: bytes) -> None:
        self.blobs[key] = blob

    def delete(self, key: str) -> None:
        self.blobs.pop(key, None)


@pytest.fixture
def token() -> AccessToken:
    return AccessToken(token="72157626318069415-087bfc7b5816092c", secret="a202d1f853ec69de")


class TestTokenStore:
    """Tests for TokenStore over an injected blob store."""

    def test_round_trip(self, token: AccessToken) -> None:
        """A saved token should load back field for field."""
        store = TokenStore(DictBlobStore())

        store.save(token)

        assert store.load() == token

    def test_round_trip_with_identity_fields(self) -> None:
        """Optional identity fields should survive the round trip too."""
        token = AccessToken(token="t", secret="s", user_nsid="1@N07", username="jamal")
        store = TokenStore(DictBlobStore())

        store.save(token)

        assert store.load() == token

    def test_stores_pretty_printed_token_and_secret(self, token: AccessToken) -> None:
        """The blob should be indented JSON holding token and secret."""
        blobs = DictBlobStore()
        TokenStore(blobs).save(token)

        blob = blobs.blobs[".flickr-data.json"].decode()
        assert json.loads(blob) == {"token": token.token, "secret": token.secret}
        assert "\n  " in blob

    def test_load_missing_returns_none(self) -> None:
        """No stored blob means no token."""
        assert TokenStore(DictBlobStore()).load() is None

    def test_load_unreadable_returns_none(self) -> None:
        """A corrupt blob should be ignored so the flow can run again."""
        blobs = DictBlobStore()
        blobs.store(".flickr-data.json", b"{not json")

        assert TokenStore(blobs).load() is None

    def test_clear(self, token: AccessToken) -> None:
        """clear() should remove the stored token."""
        store = TokenStore(DictBlobStore())
        store.save(token)

        store.clear()

        assert store.has_token() is False
        assert store.load() is None

    def test_custom_key(self, token: AccessToken) -> None:
        """Tokens should be stored under the configured key."""
        blobs = DictBlobStore()
        TokenStore(blobs, key="other.json").save(token)

        assert list(blobs.blobs) == ["other.json"]


class TestFileBlobStore:
    """Tests for the file-backed blob store."""

    def test_round_trip_through_file(self, tmp_path: Path, token: AccessToken) -> None:
        """The token file should deserialize to the original token."""
        store = TokenStore(FileBlobStore(tmp_path / "data"))

        store.save(token)

        assert (tmp_path / "data" / ".flickr-data.json").is_file()
        assert TokenStore(FileBlobStore(tmp_path / "data")).load() == token

    def test_file_is_owner_only(self, tmp_path: Path) -> None:
        """Stored blobs should not be readable by other users."""
        FileBlobStore(tmp_path).store("key", b"secret")

        mode = stat.S_IMODE((tmp_path / "key").stat().st_mode)
        assert mode == 0o600

    def test_file_is_created_owner_only(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The file should be opened with mode 0600, never widened first."""
        modes: list[int] = []
        real_open = os.open

        def recording_open(path: Any, flags: int, mode: int = 0o777) -> int:
            modes.append(mode)
            return real_open(path, flags, mode)

        monkeypatch.setattr(os, "open", recording_open)

        FileBlobStore(tmp_path).store("key", b"secret")

        assert modes == [0o600]

    def test_overwrite_narrows_existing_file(self, tmp_path: Path) -> None:
        """A world-readable file from elsewhere should end up owner-only."""
        path = tmp_path / "key"
        path.write_bytes(b"a much longer old blob")
        path.chmod(0o644)

        FileBlobStore(tmp_path).store("key", b"new")

        assert path.read_bytes() == b"new"
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_load_missing_returns_none(self, tmp_path: Path) -> None:
        """A missing file should load as None."""
        assert FileBlobStore(tmp_path).load("absent") is None

    def test_delete_missing_is_noop(self, tmp_path: Path) -> None:
        """Deleting an absent key should not raise."""
        FileBlobStore(tmp_path).delete("absent")

    def test_default_root_uses_xdg_data_home(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without a root, blobs should live under $XDG_DATA_HOME/wallflower."""
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert FileBlobStore().root == tmp_path / "wallflower"
