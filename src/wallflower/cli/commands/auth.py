"""Authentication commands."""

import webbrowser

import typer

from wallflower.auth import FlickrAuth, VerifierPrompt
from wallflower.cli.async_runner import async_command
from wallflower.cli.client_factory import get_client, get_token_store
from wallflower.cli.config import CLIConfig
from wallflower.cli.formatters import console, print_error, print_info, print_success
from wallflower.config import FlickrConfig

app = typer.Typer(no_args_is_help=True)


def terminal_prompt(*, open_browser: bool = True) -> VerifierPrompt:
    """Verifier prompt that shows the URL, optionally opens it, and reads the code."""

    def prompt(authorization_url: str) -> str:
        if open_browser:
            print_info("Opening browser for authorization...")
            webbrowser.open(authorization_url)
            console.print("\n[dim]If browser didn't open, visit:[/dim]")
        else:
            console.print("\nOpen this URL in your browser:")
        console.print(f"[link]{authorization_url}[/link]")
        console.print()
        return typer.prompt("Enter the verification code from Flickr")

    return prompt


@app.command("login")
@async_command
async def login(
    ctx: typer.Context,
    no_browser: bool = typer.Option(
        False,
        "--no-browser",
        help="Don't open browser automatically.",
    ),
) -> None:
    """Authenticate with Flickr OAuth.

    This command starts the OAuth flow:
    1. Opens browser for Flickr login
    2. Prompts for verification code
    3. Saves access token for future use
    """
    config: CLIConfig = ctx.obj

    try:
        consumer_key, consumer_secret = config.load_credentials()
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1) from None

    auth = FlickrAuth(FlickrConfig(consumer_key=consumer_key, consumer_secret=consumer_secret))

    print_info("Starting OAuth flow...")
    access_token = await auth.authenticate(terminal_prompt(open_browser=not no_browser))

    get_token_store(config).save(access_token)

    who = f" as {access_token.username}" if access_token.username else ""
    print_success(f"Authenticated{who}! Token saved to {config.token_path}")


@app.command("status")
def status(ctx: typer.Context) -> None:
    """Check whether a token is stored."""
    config: CLIConfig = ctx.obj

    console.print(f"Token path: {config.token_path}")

    if get_token_store(config).has_token():
        print_success("Token found - you are authenticated")
    else:
        print_info("Not authenticated - run 'wallflower auth login' to authenticate")


@app.command("check")
@async_command
async def check(ctx: typer.Context) -> None:
    """Verify the stored token with Flickr."""
    config: CLIConfig = ctx.obj

    async with get_client(config) as client:
        if not client.is_authenticated:
            print_error("Not authenticated. Run 'wallflower auth login' first.")
            raise typer.Exit(1)

        info = await client.check_token()

    console.print(f"User: [bold]{info.user.username or info.user.nsid}[/bold] ({info.user.nsid})")
    console.print(f"Permissions: {info.perms}")
    print_success("Token is valid")


@app.command("logout")
def logout(ctx: typer.Context) -> None:
    """Clear the saved token."""
    config: CLIConfig = ctx.obj

    token_store = get_token_store(config)
    if not token_store.has_token():
        print_info("No token to clear.")
        return

    token_store.clear()
    print_success("Logged out.")
