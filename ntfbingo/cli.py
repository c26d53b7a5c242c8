#!/usr/bin/env python3
"""ntf-bingo CLI - Name that Film bingo toolkit."""

import logging
import sys

import click

from ntfbingo import __version__
from ntfbingo.config import load_settings
from ntfbingo.errors import ExitCode, NtfBingoError

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _fail(e: Exception, code: int) -> None:
    click.secho(f"Error: {e}", fg="red", err=True)
    sys.exit(int(code))


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Settings file (default: ./ntf-bingo.yml)")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx, config_path, verbose):
    """ntf-bingo - Name that Film bingo toolkit.

    Generate bingo rounds and maintain the movie stills database.
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def _settings(ctx):
    try:
        return load_settings(ctx.obj.get("config_path"))
    except NtfBingoError as e:
        _fail(e, e.exit_code)


def _write_test_cards(out: str) -> None:
    from ntfbingo.cards.pdf import write_test_cards
    path = write_test_cards(out)
    click.echo(f"Generated: {path}")


@cli.command("round")
@click.option("--cards", "num_cards", type=click.IntRange(min=2), help="Number of cards (prompted if omitted)")
@click.option("--free-space/--no-free-space", default=None, help="Centre Free Space cell (default from settings)")
@click.option("--title", help="Card title, one letter per column (default from settings)")
@click.option("--open/--no-open", "open_files", default=None, help="Open the call sheet and cards when done")
@click.option("--test", is_flag=True, help="Skip everything and write test-output.pdf from synthetic data")
@click.pass_context
def round_command(ctx, num_cards, free_space, title, open_files, test):
    """Generate a call sheet, slideshow and bingo cards."""
    if test:
        _write_test_cards("test-output.pdf")
        return

    from ntfbingo.game.round import make_round

    settings = _settings(ctx)
    click.secho("NtF Bingo Round Generator", fg="green", bold=True)

    if num_cards is None:
        num_cards = click.prompt(
            "How many cards should I generate? Minimum 2",
            type=click.IntRange(min=2),
            default=settings.default_cards,
        )

    try:
        files = make_round(settings, num_cards, use_free_space=free_space, title=title)
    except NtfBingoError as e:
        _fail(e, e.exit_code)
    except OSError as e:
        _fail(e, ExitCode.UNKNOWN_ERROR)
    except Exception as e:
        logger.exception("Unexpected error generating the round")
        _fail(e, ExitCode.UNCAUGHT_ERROR)

    click.echo(f"Call sheet: {files.call_sheet}")
    click.echo(f"Slideshow:  {files.slideshow}")
    click.echo(f"Cards:      {files.cards}")

    if open_files is None:
        open_files = click.confirm("Would you like to open files for printing?", default=True)
    if open_files:
        click.launch(str(files.call_sheet))
        click.launch(str(files.cards))


@cli.command("test-card")
@click.option("--out", default="test-output.pdf", help="Output PDF path")
def test_card(out):
    """Write two sample cards from synthetic data."""
    _write_test_cards(out)


@cli.command()
@click.pass_context
def scan(ctx):
    """Reconcile movies.json with the stills folder and fill in details."""
    from ntfbingo.db.prompts import ClickPrompter
    from ntfbingo.db.scan import ScanWorkflow
    from ntfbingo.lookup.tmdb import TMDBClient

    settings = _settings(ctx)
    lookup = TMDBClient(api_key=settings.tmdb_api_key, base_url=settings.tmdb_base_url)
    sys.exit(int(ScanWorkflow(settings, ClickPrompter(), lookup).run()))


@cli.command()
@click.pass_context
def count(ctx):
    """Count the movies that have both a title and a year."""
    from ntfbingo.db.scan import count_complete

    settings = _settings(ctx)
    try:
        total = count_complete(settings)
    except NtfBingoError as e:
        _fail(e, e.exit_code)
    click.echo(f"\nThere are {total} movies in the db.\n")


if __name__ == "__main__":
    cli()
