"""Tests for async_runner module."""

from unittest.mock import MagicMock

import pytest
import typer

from wallflower.cli.async_runner import async_command
from wallflower.exceptions import FlickrAPIError, FlickrDecodeError


class TestAsyncCommand:
    """Tests for the async_command decorator."""

    def test_returns_coroutine_result(self) -> None:
        """The wrapped coroutine should run to completion."""

        @async_command
        async def command() -> int:
            return 42

        assert command() == 42

    def test_library_errors_exit_with_status_1(self) -> None:
        """WallflowerError subclasses should become a clean exit."""

        @async_command
        async def command() -> None:
            raise FlickrDecodeError("bad body")

        with pytest.raises(typer.Exit) as exc_info:
            command()

        assert exc_info.value.exit_code == 1

    def test_other_api_errors_do_not_offer_reauth(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Only error 98 should trigger the re-authentication prompt."""
        confirm = MagicMock()
        monkeypatch.setattr(typer, "confirm", confirm)

        @async_command
        async def command(ctx: typer.Context) -> None:
            raise FlickrAPIError("User not found", code=1)

        with pytest.raises(typer.Exit):
            command(MagicMock(spec=typer.Context))

        confirm.assert_not_called()

    def test_declined_reauth_exits(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Declining re-authentication after error 98 should exit."""
        monkeypatch.setattr(typer, "confirm", MagicMock(return_value=False))
        calls = 0

        @async_command
        async def command(ctx: typer.Context) -> None:
            nonlocal calls
            calls += 1
            raise FlickrAPIError("Invalid auth token", code=98)

        with pytest.raises(typer.Exit) as exc_info:
            command(MagicMock(spec=typer.Context))

        assert exc_info.value.exit_code == 1
        assert calls == 1

    def test_reauth_reruns_command(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """After a successful re-login the command should run again."""
        monkeypatch.setattr(typer, "confirm", MagicMock(return_value=True))
        logins = []

        async def fake_login(ctx: typer.Context, no_browser: bool = False) -> None:
            logins.append(ctx)

        from wallflower.cli.commands import auth

        monkeypatch.setattr(auth.login, "__wrapped__", fake_login)
        calls = 0

        @async_command
        async def command(ctx: typer.Context) -> str:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise FlickrAPIError("Invalid auth token", code=98)
            return "done"

        ctx = MagicMock(spec=typer.Context)
        assert command(ctx) == "done"
        assert calls == 2
        assert logins == [ctx]
