#!/usr/bin/env python3
"""Command-line interface for bippi."""

import logging
from collections.abc import Callable
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from bippi.config import (
    DEFAULT_AUDIO_FORMAT,
    AppConfig,
    DownloadConfig,
    default_config_path,
)
from bippi.exceptions import BippiError, ConfigError
from bippi.models.enums import DownloadMode
from bippi.services.resolver import DownloadOrchestrator

logger = logging.getLogger("bippi")


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure logging with Rich handler.

    Clears existing handlers first so repeated invocations (e.g. under
    CliRunner) do not stack handlers.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise WARNING.
        console: Optional Console instance to use for RichHandler.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = RichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def plain_printer(console: Console) -> Callable[[str], None]:
    """Print messages verbatim (queries may contain rich markup characters)."""

    def _print(message: str) -> None:
        console.print(message, markup=False, highlight=False)

    return _print


def load_app_config(ctx: click.Context) -> AppConfig:
    """Load the config file selected on the command line."""
    try:
        return AppConfig.load(ctx.obj["config_path"])
    except ConfigError as e:
        raise click.ClickException(e.message) from e


def save_app_config(ctx: click.Context, config: AppConfig) -> None:
    """Persist the config file selected on the command line."""
    try:
        config.save(ctx.obj["config_path"])
    except ConfigError as e:
        raise click.ClickException(e.message) from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="BIPPI_CONFIG",
    help="Path to config.json (default: user config directory).",
)
@click.version_option(package_name="bippi")
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Download music from YouTube and other sources."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path or default_config_path()
    setup_logging(verbose=verbose)


# ============================================================================
# DOWNLOADS
# ============================================================================


def download_options(f: Callable) -> Callable:
    """Arguments shared by the ``single`` and ``album`` commands."""
    f = click.option(
        "-f",
        "--format",
        "audio_format",
        default=DEFAULT_AUDIO_FORMAT,
        show_default=True,
        help="Audio format (mp3, m4a, flac ...).",
    )(f)
    f = click.option(
        "-d",
        "--dest",
        type=click.Path(file_okay=False, path_type=Path),
        help="Destination directory for the downloaded audio.",
    )(f)
    f = click.argument("target", nargs=-1, required=True, metavar="TARGET...")(f)
    return f


def run_download(
    ctx: click.Context,
    target: tuple[str, ...],
    dest: Path | None,
    audio_format: str,
    mode: DownloadMode,
) -> None:
    """Shared body of the download commands."""
    console = Console()
    query = " ".join(target).strip()
    if not query:
        raise click.UsageError("TARGET must not be empty")

    app_config = load_app_config(ctx)
    config = DownloadConfig(
        destination=app_config.resolve_destination(dest),
        audio_format=audio_format,
        ascii_filenames=app_config.ascii_filenames,
    )
    orchestrator = DownloadOrchestrator(
        config, app_config.aliases, notify=plain_printer(console)
    )

    try:
        orchestrator.download(query, mode)
    except BippiError as e:
        logger.debug("Download failed", exc_info=True)
        raise click.ClickException(e.message) from e
    except Exception as e:
        logger.exception("Unexpected error")
        raise click.ClickException(f"Unexpected error: {e}") from e


@main.command(name="single")
@download_options
@click.pass_context
def single_cmd(
    ctx: click.Context, target: tuple[str, ...], dest: Path | None, audio_format: str
) -> None:
    """Download a single track using a URL, alias, or search.

    \b
    Examples:
      bippi single "https://www.youtube.com/watch?v=VIDEO_ID"
      bippi single Metallica - Nothing Else Matters
      bippi single focus
    """
    run_download(ctx, target, dest, audio_format, DownloadMode.SINGLE)


@main.command(name="album")
@download_options
@click.pass_context
def album_cmd(
    ctx: click.Context, target: tuple[str, ...], dest: Path | None, audio_format: str
) -> None:
    """Download an entire album/playlist.

    Free-text queries are looked up on MusicBrainz first and downloaded
    track by track with full tags. Without a match, bippi searches YouTube
    for an album playlist and finally falls back to the first result.

    \b
    Examples:
      bippi album Metallica - Master of Puppets
      bippi album "https://www.youtube.com/playlist?list=PLxxx"
    """
    run_download(ctx, target, dest, audio_format, DownloadMode.ALBUM)


# ============================================================================
# ALIASES
# ============================================================================


@main.group(name="alias")
def alias_group() -> None:
    """Manage human-friendly aliases for URLs."""


@alias_group.command(name="add")
@click.argument("name")
@click.argument("url")
@click.option("--album", is_flag=True, help="Mark the alias as an album/playlist.")
@click.pass_context
def alias_add_cmd(ctx: click.Context, name: str, url: str, album: bool) -> None:
    """Create or update an alias mapped to a URL."""
    config = load_app_config(ctx)
    created = config.upsert_alias(name, url, album=album)
    save_app_config(ctx, config)
    click.echo(f"{'created' if created else 'updated'} alias '{name}'")


@alias_group.command(name="remove")
@click.argument("name")
@click.pass_context
def alias_remove_cmd(ctx: click.Context, name: str) -> None:
    """Remove an alias."""
    config = load_app_config(ctx)
    try:
        config.remove_alias(name)
    except ConfigError as e:
        raise click.ClickException(e.message) from e
    save_app_config(ctx, config)
    click.echo(f"removed alias '{name}'")


@alias_group.command(name="list")
@click.pass_context
def alias_list_cmd(ctx: click.Context) -> None:
    """List all aliases."""
    config = load_app_config(ctx)
    aliases = config.sorted_aliases()
    if not aliases:
        click.echo("no aliases defined yet")
        return
    for name, entry in aliases:
        suffix = " (album)" if entry.album else ""
        click.echo(f"{name} -> {entry.url}{suffix}")


# ============================================================================
# CONFIG
# ============================================================================


@main.group(name="config")
def config_group() -> None:
    """Configure default download settings."""


@config_group.command(name="set-dest")
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_context
def config_set_dest_cmd(ctx: click.Context, path: Path) -> None:
    """Set the default download destination directory."""
    config = load_app_config(ctx)
    try:
        absolute = config.set_destination(path)
    except ConfigError as e:
        raise click.ClickException(e.message) from e
    save_app_config(ctx, config)
    click.echo(f"default destination set to {absolute}")


@config_group.command(name="clear-dest")
@click.pass_context
def config_clear_dest_cmd(ctx: click.Context) -> None:
    """Clear the default download destination."""
    config = load_app_config(ctx)
    if config.clear_destination():
        save_app_config(ctx, config)
        click.echo("cleared default destination")
    else:
        click.echo("default destination was already unset")


@config_group.command(name="ascii-filenames")
@click.argument("state", type=click.Choice(["on", "off"]))
@click.pass_context
def config_ascii_cmd(ctx: click.Context, state: str) -> None:
    """Transliterate unicode track titles to ASCII in filenames."""
    config = load_app_config(ctx)
    enabled = state == "on"
    if config.ascii_filenames != enabled:
        config.ascii_filenames = enabled
        save_app_config(ctx, config)
    click.echo(f"ascii filenames {state}")


@config_group.command(name="show")
@click.pass_context
def config_show_cmd(ctx: click.Context) -> None:
    """Show the current configuration."""
    config = load_app_config(ctx)
    if config.default_destination is not None:
        click.echo(f"default destination: {config.default_destination}")
    else:
        click.echo("default destination: not set")
    click.echo(f"ascii filenames: {'on' if config.ascii_filenames else 'off'}")
    if config.aliases:
        click.echo(f"aliases: {len(config.aliases)}")
    else:
        click.echo("aliases: none")
    click.echo(f"config file: {ctx.obj['config_path']}")


if __name__ == "__main__":
    main()
