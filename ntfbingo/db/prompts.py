"""Terminal prompts for the scan workflow, built on click."""

import difflib
import re
from typing import Optional, Sequence, Union

import click

from ntfbingo.db.models import MovieEntry
from ntfbingo.db.session import CANCEL, OPEN_STILL, EditAction
from ntfbingo.lookup.tmdb import Candidate

BANNER = "NtF DB Generator"
SEARCH_PAGE_SIZE = 10

_YEAR_RE = re.compile(r"^\d{4}$")

_ACTION_KEYS = {
    "y": EditAction.EDIT,
    "n": EditAction.KEEP,
    "a": EditAction.LOOKUP,
    "q": EditAction.QUIT,
}


def print_banner(title: str) -> None:
    """Clear the screen and print the tool banner."""
    click.clear()
    rule = "=" * (len(title) + 8)
    click.secho(rule, fg="green")
    click.secho(f"    {title}", fg="green", bold=True)
    click.secho(rule, fg="green")
    click.echo()


def fuzzy_filter(query: str, choices: Sequence[str], limit: int = SEARCH_PAGE_SIZE) -> list[str]:
    """Substring matches first, then close matches by difflib ratio."""
    if not query:
        return list(choices[:limit])
    needle = query.lower()
    hits = [c for c in choices if needle in c.lower()]
    if len(hits) < limit:
        lowered = {c.lower(): c for c in choices}
        for close in difflib.get_close_matches(needle, list(lowered), n=limit, cutoff=0.4):
            original = lowered[close]
            if original not in hits:
                hits.append(original)
    return hits[:limit]


def _year(value: str) -> str:
    value = value.strip()
    if value and not _YEAR_RE.match(value):
        raise click.BadParameter("Year must be 4 digits (or blank)")
    return value


class ClickPrompter:
    """Operator prompts. Implements db.session.Prompter."""

    def __init__(self, banner: str = BANNER):
        self.banner = banner

    def show_entry(self, movie: MovieEntry) -> None:
        print_banner(self.banner)
        click.echo(f"* File path: {movie.file_path}")
        click.echo(f"* Title: {movie.movie_title}")
        click.echo(f"* Year: {movie.movie_year}")

    def choose_action(self, movie: MovieEntry) -> EditAction:
        click.echo("  y) Yes   n) No   a) Ask TMDB   q) Quit")
        key = click.prompt(
            "Would you like to change this?",
            type=click.Choice(list(_ACTION_KEYS), case_sensitive=False),
            default="y",
            show_choices=False,
        )
        return _ACTION_KEYS[key.lower()]

    def edit_fields(self, movie: MovieEntry) -> tuple[str, str]:
        title = click.prompt("Movie title", default=movie.movie_title, show_default=True)
        year = click.prompt("Movie year", default=movie.movie_year, show_default=True, value_proc=_year)
        return title.strip(), year

    def choose_candidate(self, movie: MovieEntry, candidates: Sequence[Candidate]) -> Union[int, str]:
        click.echo()
        click.echo("  o) Open still in viewer")
        click.echo("  c) Cancel")
        click.echo("  " + "-" * 20)
        for idx, candidate in enumerate(candidates, 1):
            click.echo(f"  {idx}) {candidate.label}")

        while True:
            answer = click.prompt("Which would you like to use?", default="o").strip().lower()
            if answer == "o":
                return OPEN_STILL
            if answer == "c":
                return CANCEL
            if answer.isdigit() and 1 <= int(answer) <= len(candidates):
                return int(answer) - 1
            click.secho(f"Pick o, c or 1-{len(candidates)}", fg="red")

    def choose_edit_mode(self) -> str:
        return click.prompt(
            "Do you want to search for a filename or go through the list?",
            type=click.Choice(["search", "list"]),
            default="search",
        )

    def search_file(self, file_paths: Sequence[str]) -> Optional[str]:
        print_banner(self.banner)
        query = click.prompt("Search for a file to add details for", default="", show_default=False).strip()
        if query in file_paths:
            return query

        matches = fuzzy_filter(query, list(file_paths))
        if not matches:
            self.notify("No matching files")
            return None
        for idx, path in enumerate(matches, 1):
            click.echo(f"  {idx}) {path}")

        def pick(value: str) -> Optional[int]:
            value = str(value).strip()
            if not value:
                return None
            if not value.isdigit() or not 1 <= int(value) <= len(matches):
                raise click.BadParameter(f"Pick 1-{len(matches)} or leave blank")
            return int(value)

        choice = click.prompt("Pick a file (blank to skip)", default="", show_default=False, value_proc=pick)
        return matches[choice - 1] if choice else None

    def confirm(self, message: str, default: bool = True) -> bool:
        return click.confirm(message, default=default)

    def notify(self, message: str) -> None:
        click.secho(message, fg="yellow")

    def open_still(self, file_path: str) -> None:
        click.launch(file_path)
