"""Photo listing and mirroring commands."""

from pathlib import Path

import typer

from wallflower.cli.async_runner import async_command
from wallflower.cli.client_factory import get_client
from wallflower.cli.commands.auth import terminal_prompt
from wallflower.cli.config import CLIConfig, OutputFormat
from wallflower.cli.formatters import (
    console,
    format_output,
    print_error,
    print_info,
    print_success,
)
from wallflower.config import MirrorSettings
from wallflower.mirror import PhotoMirror

app = typer.Typer(no_args_is_help=True)

_defaults = MirrorSettings()


@app.command("list")
@async_command
async def list_photos(
    ctx: typer.Context,
    user_id: str = typer.Option("me", "--user-id", "-u", help="Photo owner NSID."),
    page: int = typer.Option(1, "--page", min=1, help="Listing page."),
    per_page: int = typer.Option(_defaults.per_page, "--per-page", min=1, max=500),
    size: str = typer.Option(_defaults.size, "--size", help="Size suffix (k, h, l, o...)."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--format",
        "-f",
        help="Output format.",
    ),
) -> None:
    """List one page of a user's photos."""
    config: CLIConfig = ctx.obj
    settings = MirrorSettings(per_page=per_page, size=size, min_taken_date=None)

    async with get_client(config) as client:
        if not client.is_authenticated:
            print_error("Not authenticated. Run 'wallflower auth login' first.")
            raise typer.Exit(1)

        listing = await client.photos.photos_page(
            user_id, settings.listing_params(page), size=size
        )

    format_output(
        listing.photos,
        output_format,
        title=f"Page {listing.page} of {listing.pages} ({listing.total} photos)",
        columns=["title", "public", "width", "height", "url"],
    )


@app.command("mirror")
@async_command
async def mirror(
    ctx: typer.Context,
    user_id: str | None = typer.Option(
        None,
        "--user-id",
        "-u",
        help="Photo owner NSID (default: the authenticated user).",
    ),
    photo_dir: Path = typer.Option(_defaults.photo_dir, "--photo-dir", help="Local photo store."),
    pages: int = typer.Option(_defaults.max_pages, "--pages", min=1, help="Most pages to fetch."),
    per_page: int = typer.Option(_defaults.per_page, "--per-page", min=1, max=500),
    workers: int = typer.Option(_defaults.workers, "--workers", "-w", min=1),
    min_taken_date: str | None = typer.Option(
        _defaults.min_taken_date,
        "--min-taken-date",
        help="Unix timestamp; older photos are skipped.",
    ),
    no_browser: bool = typer.Option(False, "--no-browser", help="Don't open browser."),
) -> None:
    """Download every listed photo not already in the photo directory."""
    config: CLIConfig = ctx.obj
    settings = MirrorSettings(
        photo_dir=photo_dir,
        max_pages=pages,
        per_page=per_page,
        workers=workers,
        min_taken_date=min_taken_date,
    )

    async with get_client(config) as client:
        await client.load_or_authenticate(terminal_prompt(open_browser=not no_browser))

        if user_id is None:
            info = await client.check_token()
            user_id = info.user.nsid
            print_info(f"Mirroring photos of {info.user.username or user_id}")

        report = await PhotoMirror(client, settings).run(user_id)

    for failure in report.failures:
        print_error(f"{failure.photo.url}: {failure.error}")

    console.print(
        f"{report.pages} page(s): {report.downloaded} downloaded, "
        f"{report.existing} already present, {report.failed} failed"
    )
    if not report.ok:
        raise typer.Exit(1)
    print_success(f"Photos are in {settings.photo_dir}")
