"""Async command support for Typer."""

import asyncio
from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any, TypeVar

import typer

from wallflower.exceptions import FlickrAPIError, WallflowerError

T = TypeVar("T")


async def _handle_token_invalid(ctx: typer.Context) -> None:
    """Handle a rejected token by prompting for re-authentication."""
    from wallflower.cli.formatters import console, print_error, print_info

    print_error("Flickr rejected the stored access token.")
    console.print()

    if not typer.confirm("Would you like to re-authenticate now?", default=True):
        print_info("Run 'wallflower auth login' when ready to re-authenticate.")
        raise typer.Exit(1)

    # login is wrapped by @async_command, access the original async fn via __wrapped__
    from wallflower.cli.commands.auth import login

    console.print()
    await login.__wrapped__(ctx, no_browser=False)


def _find_context(args: tuple[Any, ...], kwargs: dict[str, Any]) -> typer.Context | None:
    for arg in args:
        if isinstance(arg, typer.Context):
            return arg
    return kwargs.get("ctx")


def async_command(f: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., T]:
    """Decorator to run async Typer commands.

    A rejected token (Flickr error 98) offers re-authentication and runs the
    command once more. Any other library error is printed and exits with 1.

    Usage:
        @app.command()
        @async_command
        async def my_command(ctx: typer.Context):
            async with get_client(ctx.obj) as client:
                info = await client.check_token()
                ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        async def run_with_error_handling() -> T:
            try:
                return await f(*args, **kwargs)
            except FlickrAPIError as e:
                ctx = _find_context(args, kwargs)
                if not e.is_invalid_token or ctx is None:
                    raise
                await _handle_token_invalid(ctx)
                return await f(*args, **kwargs)

        try:
            return asyncio.run(run_with_error_handling())
        except WallflowerError as e:
            from wallflower.cli.formatters import print_error

            print_error(e.message)
            raise typer.Exit(1) from None

    return wrapper
