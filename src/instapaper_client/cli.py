"""CLI interface for instapaper-client.

Commands:
    login    - Exchange username/password for an OAuth token and save it
    verify   - Check the saved credentials
    add      - Add a bookmark
    archive  - Archive a bookmark
    list     - List bookmarks in a folder
    status   - Show current configuration
"""

import json
import sys
from pathlib import Path

import click

from .client import BASE_URL, DEFAULT_FOLDER
from .config import (
    CONFIG_FILE,
    AppConfig,
    ConsumerConfig,
    TokenConfig,
    config_exists,
    load_config,
    save_config,
)
from .errors import ConfigError, InstapaperError
from .logging_config import setup_logging


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load_client(config_path: Path):
    """Build an authenticated client from the config file, or exit."""
    if not config_exists(config_path):
        _fail("No config found. Run 'instapaper login' first.")
    try:
        config = load_config(config_path)
    except ConfigError as e:
        _fail(str(e))
    if config.token is None:
        _fail("Not logged in. Run 'instapaper login' first.")
    return config.to_client()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--config", type=click.Path(), default=None, help="Config file path")
@click.pass_context
def main(ctx, verbose, config):
    """Instapaper — Save and list bookmarks from the command line."""
    setup_logging(debug=verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else CONFIG_FILE


@main.command()
@click.option("--consumer-key", envvar="INSTAPAPER_CONSUMER_KEY", prompt=True)
@click.option(
    "--consumer-secret",
    envvar="INSTAPAPER_CONSUMER_SECRET",
    prompt=True,
    hide_input=True,
)
@click.option("--username", envvar="INSTAPAPER_USERNAME", prompt=True)
@click.option(
    "--password", envvar="INSTAPAPER_PASSWORD", prompt=True, hide_input=True
)
@click.option("--base-url", default=BASE_URL, show_default=True, help="API root")
@click.pass_context
def login(ctx, consumer_key, consumer_secret, username, password, base_url):
    """Exchange your Instapaper login for an OAuth token.

    Consumer credentials come from Instapaper's OAuth consumer request form.
    Only the resulting token is saved, never the password.
    """
    from .auth import exchange

    config_path = ctx.obj["config_path"]

    try:
        oauth_token, oauth_token_secret = exchange(
            username,
            password,
            consumer_key,
            consumer_secret,
            base_url=base_url,
        )
    except InstapaperError as e:
        _fail(str(e))

    config = AppConfig(
        consumer=ConsumerConfig(key=consumer_key, secret=consumer_secret),
        token=TokenConfig(
            oauth_token=oauth_token, oauth_token_secret=oauth_token_secret
        ),
        base_url=base_url,
    )
    save_config(config, config_path)
    click.echo(f"Logged in as {username}. Credentials saved to {config_path}")


@main.command()
@click.pass_context
def verify(ctx):
    """Check that the saved credentials are accepted."""
    client = _load_client(ctx.obj["config_path"])
    try:
        user = client.verify()
    except InstapaperError as e:
        _fail(str(e))

    click.echo(f"Authenticated as {user.username} (user_id {user.user_id})")


@main.command()
@click.argument("url")
@click.option("--title", default="", help="Title (default: page title)")
@click.option("--description", default="", help="Description")
@click.pass_context
def add(ctx, url, title, description):
    """Add URL to your unread bookmarks."""
    client = _load_client(ctx.obj["config_path"])
    try:
        bookmark = client.add(url, title, description)
    except InstapaperError as e:
        _fail(str(e))

    click.echo(f"Added bookmark {bookmark.bookmark_id}: {bookmark.title or bookmark.url}")


@main.command()
@click.argument("bookmark_id", type=int)
@click.pass_context
def archive(ctx, bookmark_id):
    """Move BOOKMARK_ID to the archive folder."""
    client = _load_client(ctx.obj["config_path"])
    try:
        bookmark = client.archive(bookmark_id)
    except InstapaperError as e:
        _fail(str(e))

    click.echo(f"Archived bookmark {bookmark.bookmark_id}: {bookmark.title}")


@main.command(name="list")
@click.option(
    "--folder",
    default=DEFAULT_FOLDER,
    show_default=True,
    help="Folder id, or unread/starred/archive",
)
@click.option("--json", "as_json", is_flag=True, help="Print the raw listing as JSON")
@click.pass_context
def list_bookmarks(ctx, folder, as_json):
    """List bookmarks and highlights in a folder."""
    client = _load_client(ctx.obj["config_path"])
    try:
        listing = client.bookmarks_in(folder)
    except InstapaperError as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps(listing.to_dict(), indent=2, ensure_ascii=False))
        return

    click.echo(
        f"{folder}: {len(listing.bookmarks)} bookmarks, "
        f"{len(listing.highlights)} highlights"
    )
    for b in listing.bookmarks:
        star = "*" if b.is_starred else " "
        highlights = len(listing.highlights_for(b.bookmark_id))
        suffix = f" [{highlights} highlights]" if highlights else ""
        click.echo(f"{star} {b.bookmark_id}\t{b.title}\t{b.url}{suffix}")


@main.command()
@click.pass_context
def status(ctx):
    """Show current configuration status."""
    config_path = ctx.obj["config_path"]
    has_config = config_exists(config_path)

    click.echo("Instapaper — Status")
    click.echo("=" * 40)
    click.echo(f"Config: {'Found' if has_config else 'Not configured'} ({config_path})")

    if not has_config:
        click.echo("\nRun 'instapaper login' to get started.")
        return

    try:
        config = load_config(config_path)
    except ConfigError as e:
        _fail(str(e))

    click.echo(f"API: {config.base_url}")
    click.echo(f"Consumer key: {config.consumer.key}")
    click.echo(f"Logged in: {'yes' if config.token else 'no'}")
