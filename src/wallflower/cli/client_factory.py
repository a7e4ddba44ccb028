"""Client factory for CLI commands."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import typer

from wallflower.auth import FileBlobStore, TokenStore
from wallflower.cli.formatters import print_error
from wallflower.client import FlickrClient
from wallflower.config import FlickrConfig

if TYPE_CHECKING:
    from wallflower.cli.config import CLIConfig


def get_token_store(config: CLIConfig) -> TokenStore:
    """Token store rooted in the CLI data directory."""
    return TokenStore(FileBlobStore(config.data_dir), key=config.token_path.name)


@asynccontextmanager
async def get_client(config: CLIConfig) -> AsyncGenerator[FlickrClient]:
    """Create and configure a FlickrClient for CLI use.

    This context manager:
    1. Loads credentials from config file with env var overrides,
       exiting with status 1 if there are none
    2. Uses the CLI's token storage (XDG_DATA_HOME)
    3. Loads any saved token
    4. Manages connection pooling lifecycle

    Usage:
        async with get_client(cli_config) as client:
            info = await client.check_token()
    """
    try:
        consumer_key, consumer_secret = config.load_credentials()
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1) from None

    client = FlickrClient(
        FlickrConfig(consumer_key=consumer_key, consumer_secret=consumer_secret),
        token_store=get_token_store(config),
    )
    client.load_token()

    async with client:
        yield client
