"""CLI entry point for IMDb ratings lookup."""

import json
import os
from pathlib import Path

import click
from loguru import logger

from .api.imdb import ImdbClient
from .config import RatingsConfig
from .errors import StoreError
from .lookup import MovieLookup
from .models import MovieRecord
from .movie_db import MovieDB

log = logger.bind(stage="cli")


def _find_config_file() -> Path | None:
    """Look for .env next to the package or in cwd."""
    pkg_dir = Path(__file__).resolve().parent
    for candidate in [
        pkg_dir.parent.parent / ".env",  # dev: src/../.env
        Path.cwd() / ".env",
    ]:
        if candidate.is_file():
            return candidate
    return None


def _load_env_file(env_file: Path) -> None:
    """Load a shell-style .env file into os.environ (without overriding)."""
    for line in env_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        value = value.strip()
        if (value.startswith('"') and value.endswith('"')) or (
            value.startswith("'") and value.endswith("'")
        ):
            value = value[1:-1]
        # Don't override existing env vars (CLI > env > file)
        if key not in os.environ:
            os.environ[key] = value


def _build_lookup(config: RatingsConfig) -> MovieLookup:
    return MovieLookup(client=ImdbClient(config), db=MovieDB(config.db_path))


def format_record(record: MovieRecord) -> str:
    """Render a record as a short text block."""
    heading = f"{record.title} ({record.year})" if record.year else record.title
    return (
        f"{heading}  [{record.imdb_id}]\n"
        f"  Rating:   {record.rating}\n"
        f"  Synopsis: {record.synopsis}"
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True),
    default=None,
    help="Path to .env file.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_file: str | None) -> None:
    """Look up IMDb ratings by title and keep a local cache of results."""
    # Load .env into environment before RatingsConfig reads env vars
    env_file = Path(config_file) if config_file else _find_config_file()
    if env_file and env_file.is_file():
        _load_env_file(env_file)

    config_kwargs: dict[str, bool | str] = {"verbose": verbose}
    if verbose:
        config_kwargs["log_level"] = "DEBUG"

    config = RatingsConfig(**config_kwargs)  # type: ignore[arg-type]
    config.setup_logging()
    if env_file:
        log.debug(f"Loaded env from {env_file}")

    ctx.obj = config


@main.command()
@click.argument("title", nargs=-1, required=True)
@click.option(
    "--json-output",
    "json_out",
    is_flag=True,
    help="Output as JSON instead of human-readable.",
)
@click.pass_obj
def search(config: RatingsConfig, title: tuple[str, ...], json_out: bool) -> None:
    """Find the best IMDb match for TITLE and cache it."""
    query = " ".join(title)
    try:
        lookup = _build_lookup(config)
    except StoreError as e:
        log.exception("Opening movie cache failed")
        click.echo(e.user_message, err=True)
        raise SystemExit(1)
    result = lookup.run(query)

    if json_out:
        payload = {
            "movie": result.record.to_dict() if result.record else None,
            "error": result.error,
        }
        click.echo(json.dumps(payload, indent=2))
    elif result.record:
        click.echo(format_record(result.record))
    else:
        click.echo(result.error, err=True)

    if not result.ok:
        raise SystemExit(1)


@main.command(name="list")
@click.option(
    "--json-output",
    "json_out",
    is_flag=True,
    help="Output as JSON instead of human-readable.",
)
@click.pass_obj
def list_movies(config: RatingsConfig, json_out: bool) -> None:
    """Show every cached movie."""
    try:
        movies = _build_lookup(config).list_movies()
    except StoreError:
        log.exception("Listing cached movies failed")
        raise click.ClickException("Error loading movies.") from None

    if json_out:
        click.echo(json.dumps([m.to_dict() for m in movies], indent=2))
        return

    if not movies:
        click.echo("No movies cached yet.")
        return
    for movie in movies:
        click.echo(format_record(movie))
    click.echo(f"\n{len(movies)} movie(s)")


@main.command()
@click.option("--yes", is_flag=True, help="Don't ask for confirmation.")
@click.pass_obj
def clear(config: RatingsConfig, yes: bool) -> None:
    """Delete every cached movie."""
    if not yes:
        click.confirm("Delete all cached movies?", abort=True)
    try:
        deleted = _build_lookup(config).clear()
    except StoreError:
        log.exception("Clearing cached movies failed")
        raise click.ClickException("Error clearing movies.") from None
    click.echo(f"Deleted {deleted} movie(s).")
