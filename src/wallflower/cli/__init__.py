"""wallflower CLI - command-line interface for the Flickr mirror."""

from wallflower.cli.app import app

# Import command modules to register them with the app
from wallflower.cli.commands import auth, photos

# Register sub-apps
app.add_typer(auth.app, name="auth", help="Authentication commands.")
app.add_typer(photos.app, name="photos", help="Photo listing and mirroring.")


def main() -> None:
    """Entry point for the CLI."""
    app()


__all__ = ["app", "main"]
