"""Main Typer application."""

import logging
from pathlib import Path

import typer
from rich.logging import RichHandler

from wallflower.cli.config import CLIConfig, _default_config_dir, _default_data_dir

app = typer.Typer(
    name="wallflower",
    help="Mirror a Flickr photostream for the wallflower slideshow.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    config_dir: Path | None = typer.Option(
        None,
        "--config-dir",
        "-c",
        help="Config directory (default: ~/.config/wallflower).",
        envvar="WALLFLOWER_CONFIG_DIR",
    ),
    data_dir: Path | None = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Token directory (default: ~/.local/share/wallflower).",
        envvar="WALLFLOWER_DATA_DIR",
    ),
) -> None:
    """Flickr photostream mirror.

    Credentials come from FLICKR_API_KEY / FLICKR_API_SECRET or the
    config directory's config.json.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )
    ctx.obj = CLIConfig(
        verbose=verbose,
        config_dir=config_dir or _default_config_dir(),
        data_dir=data_dir or _default_data_dir(),
    )
