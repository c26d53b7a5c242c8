#!/usr/bin/env python3
"""
Scan the stills directory and fill in movie details.

Steps:
  1. Read movies.json
  2. Scan stills/, drop entries whose file is gone, add new files as blank entries
  3. Optionally revisit complete entries (search by filename or walk the list)
  4. Walk every incomplete entry, pre-filled with a guess from its filename
  5. Write movies.json

movies.bak.json is rewritten after every entry, so quitting, Ctrl-C or a
crash never loses more than the entry on screen.

Usage:
  ntf-bingo scan
  python -m ntfbingo.db.scan
"""

import logging
import signal
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import click

from ntfbingo.config import Settings, load_settings
from ntfbingo.db.merge import merge
from ntfbingo.db.models import MovieDatabase, MovieEntry
from ntfbingo.db.reconcile import list_stills, reconcile
from ntfbingo.db.session import Aborted, EditSession, Lookup, Outcome, Prompter, SessionState
from ntfbingo.db.store import read_db, write_backup, write_db
from ntfbingo.errors import ExitCode, Interrupted, NtfBingoError

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM") if hasattr(signal, name)
)


def _raise_interrupted(signum, frame):
    raise Interrupted(signum)


@contextmanager
def signals_routed_to_finalize():
    """Turn SIGINT/SIGTERM into Interrupted for the duration of the block."""
    previous = {}
    for signum in HANDLED_SIGNALS:
        previous[signum] = signal.signal(signum, _raise_interrupted)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


@contextmanager
def signals_ignored():
    previous = {}
    for signum in HANDLED_SIGNALS:
        previous[signum] = signal.signal(signum, signal.SIG_IGN)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


class ScanWorkflow:
    """One scan run against a database file."""

    def __init__(self, settings: Settings, prompter: Prompter, lookup: Optional[Lookup] = None):
        self.settings = settings
        self.prompter = prompter
        self.db: Optional[MovieDatabase] = None
        self.reconciled = False
        self.session = EditSession(prompter, lookup, backup_writer=self._write_progress)

    @property
    def backup_path(self) -> Path:
        return Path(self.settings.backup_path)

    def _write_progress(self, edited: list[MovieEntry]) -> None:
        """Backup = full list with the edits so far applied."""
        write_backup(merge(edited, self.db.movies), self.backup_path)

    def _merge_and_persist(self, outcome: Outcome) -> None:
        self.session.transition(SessionState.MERGE_BACK)
        self.db.movies = merge(outcome.movies, self.db.movies)
        write_backup(self.db.movies, self.backup_path)
        self.session.transition(SessionState.PERSIST)
        write_db(self.db, self.settings.db_path)

    def finalize(self) -> None:
        """Save whatever is in progress: merge, backup, then primary if safe.

        The primary file is only written once reconciliation has completed,
        otherwise it is left untouched.
        """
        with signals_ignored():
            partial = self.session.begin_finalize()
            if self.db is None:
                return
            self.session.transition(SessionState.MERGE_BACK)
            self.db.movies = merge(partial, self.db.movies)
            write_backup(self.db.movies, self.backup_path)
            if self.reconciled:
                self.session.transition(SessionState.PERSIST)
                write_db(self.db, self.settings.db_path)
            self.session.transition(SessionState.DONE)

    def _exit_message(self) -> None:
        click.secho(f"Exiting. A backup movie db is at {self.backup_path}", fg="yellow")

    def _run(self) -> ExitCode:
        self.session.transition(SessionState.SCANNING)
        self.db = read_db(self.settings.db_path, create_missing=self.settings.create_missing_db)
        scanned = list_stills(self.settings.stills_dir)

        result = reconcile(self.db.movies, scanned, check_exists=True)
        for movie in result.dropped:
            logger.info(f"Removed missing file {movie.file_path}")
        self.db.movies = result.movies
        self.reconciled = True

        self.session.transition(SessionState.RECONCILE_DECISION)
        complete = self.db.complete_movies()
        if complete:
            if self.prompter.confirm("Would you like to update existing entries?", default=False):
                logger.info("Editing old entries...")
                mode = self.prompter.choose_edit_mode()
                if mode == "list":
                    outcome = self.session.run_list(complete)
                else:
                    outcome = self.session.run_search(complete)
                self._merge_and_persist(outcome)
                if isinstance(outcome, Aborted):
                    self._exit_message()
                    return ExitCode.OK
            else:
                logger.info("Not editing old entries")
        else:
            self.prompter.notify("No existing entries to update, moving on.")

        write_backup(self.db.movies, self.backup_path)

        self.prompter.notify("Now to fill in details for new movies.")
        outcome = self.session.run_list(self.db.incomplete_movies())
        self._merge_and_persist(outcome)
        if isinstance(outcome, Aborted):
            self._exit_message()
            return ExitCode.OK

        self.session.transition(SessionState.DONE)
        click.secho("\nProcessing complete\n", fg="green")
        return ExitCode.OK

    def run(self) -> ExitCode:
        """Run the workflow and map every outcome to an exit code."""
        try:
            with signals_routed_to_finalize():
                try:
                    return self._run()
                except (Interrupted, click.Abort) as e:
                    logger.info(f"Interrupted ({e.__class__.__name__}), saving progress")
                    self.finalize()
                    self._exit_message()
                    return ExitCode.OK
        except NtfBingoError as e:
            logger.error(str(e))
            click.secho(f"{e}\nA backup movie db is at {self.backup_path}", fg="red", err=True)
            return e.exit_code
        except Exception:
            logger.exception("Unexpected error during scan")
            click.secho(f"Some error occurred. A backup movie db is at {self.backup_path}", fg="red", err=True)
            return ExitCode.UNCAUGHT_ERROR


def count_complete(settings: Settings) -> int:
    """Number of movies with both title and year."""
    return len(read_db(settings.db_path).complete_movies())


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    from ntfbingo.db.prompts import ClickPrompter
    from ntfbingo.lookup.tmdb import TMDBClient

    settings = load_settings()
    lookup = TMDBClient(api_key=settings.tmdb_api_key, base_url=settings.tmdb_base_url)
    return int(ScanWorkflow(settings, ClickPrompter(), lookup).run())


if __name__ == "__main__":
    raise SystemExit(main())
