"""
Interactive edit session over movie entries.

States:
  SCANNING -> RECONCILE_DECISION -> LIST_MODE | SEARCH_MODE
           -> PER_ENTRY_EDIT -> MERGE_BACK -> PERSIST -> DONE

Per entry the operator picks keep, edit, remote lookup or quit. Quit is not
an error: run_list/run_search return Aborted carrying every edit completed
so far, and the caller merges and persists it like a normal finish.

After each completed entry the backup writer receives the edits so far, so
a crash loses at most the entry being edited.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence, Union

from ntfbingo.db.models import MovieEntry
from ntfbingo.db.reconcile import guess_details_from_filename
from ntfbingo.errors import TitleLookupError
from ntfbingo.lookup.tmdb import Candidate

logger = logging.getLogger(__name__)

OPEN_STILL = "open"
CANCEL = "cancel"


class SessionState(Enum):
    SCANNING = "scanning"
    RECONCILE_DECISION = "reconcile_decision"
    LIST_MODE = "list_mode"
    SEARCH_MODE = "search_mode"
    PER_ENTRY_EDIT = "per_entry_edit"
    MERGE_BACK = "merge_back"
    PERSIST = "persist"
    DONE = "done"


class EditAction(Enum):
    EDIT = "yes"
    KEEP = "no"
    LOOKUP = "tmdb"
    QUIT = "quit"


@dataclass(frozen=True)
class Continue:
    """Session step finished normally with these (edited) entries."""
    movies: list[MovieEntry] = field(default_factory=list)


@dataclass(frozen=True)
class Aborted:
    """Operator quit. movies holds every edit completed before the quit."""
    movies: list[MovieEntry] = field(default_factory=list)


Outcome = Union[Continue, Aborted]


class Prompter(Protocol):
    """Terminal collaborator. See db.prompts.ClickPrompter."""

    def show_entry(self, movie: MovieEntry) -> None: ...

    def choose_action(self, movie: MovieEntry) -> EditAction: ...

    def edit_fields(self, movie: MovieEntry) -> tuple[str, str]: ...

    def choose_candidate(self, movie: MovieEntry, candidates: Sequence[Candidate]) -> Union[int, str]: ...

    def choose_edit_mode(self) -> str: ...

    def search_file(self, file_paths: Sequence[str]) -> Optional[str]: ...

    def confirm(self, message: str, default: bool = True) -> bool: ...

    def notify(self, message: str) -> None: ...

    def open_still(self, file_path: str) -> None: ...


class Lookup(Protocol):
    def search_movie(self, movie_name: str) -> list[Candidate]: ...


class SessionClosedError(RuntimeError):
    """An edit was attempted after finalize began."""
    pass


class EditSession:
    """Drives per-entry editing. One session per scan run."""

    def __init__(
        self,
        prompter: Prompter,
        lookup: Optional[Lookup] = None,
        backup_writer: Optional[Callable[[list[MovieEntry]], object]] = None,
    ):
        self.prompter = prompter
        self.lookup = lookup
        self.backup_writer = backup_writer
        self.state = SessionState.SCANNING
        # Edits completed in the current list/search pass
        self.progress: list[MovieEntry] = []
        self.finalizing = False

    def transition(self, state: SessionState) -> None:
        logger.debug(f"Session {self.state.value} -> {state.value}")
        self.state = state

    def begin_finalize(self) -> list[MovieEntry]:
        """Stop accepting edits and hand back the progress so far."""
        self.finalizing = True
        return list(self.progress)

    def _check_open(self) -> None:
        if self.finalizing:
            raise SessionClosedError("Edit session is finalizing; no more edits accepted")

    def _backup(self, movies: list[MovieEntry]) -> None:
        if self.backup_writer is not None:
            self.backup_writer(list(movies))

    def _ask_lookup(self, movie: MovieEntry) -> Optional[MovieEntry]:
        """Remote lookup. None means go back to the decision prompt."""
        if self.lookup is None:
            self.prompter.notify("Title lookup is not configured")
            return None

        try:
            candidates = self.lookup.search_movie(movie.movie_title.lower())
        except TitleLookupError as e:
            logger.warning(f"Lookup failed for {movie.file_path}: {e}")
            self.prompter.notify(f"Lookup failed: {e}")
            return None

        if not candidates:
            self.prompter.notify("No matches found")
            return None

        while True:
            choice = self.prompter.choose_candidate(movie, candidates)
            if choice == OPEN_STILL:
                self.prompter.open_still(movie.file_path)
                continue
            if choice == CANCEL:
                return None
            picked = candidates[choice]
            return movie.with_details(picked.movie_title, picked.movie_year)

    def edit_entry(self, movie: MovieEntry) -> Outcome:
        """Run the decision prompt for one entry.

        Returns Continue([entry]) with the kept or edited entry, or
        Aborted([]) when the operator quits.
        """
        self._check_open()
        self.transition(SessionState.PER_ENTRY_EDIT)
        while True:
            self.prompter.show_entry(movie)
            action = self.prompter.choose_action(movie)
            self._check_open()

            if action is EditAction.KEEP:
                return Continue([movie])
            if action is EditAction.EDIT:
                title, year = self.prompter.edit_fields(movie)
                return Continue([movie.with_details(title, year)])
            if action is EditAction.LOOKUP:
                picked = self._ask_lookup(movie)
                if picked is not None:
                    return Continue([picked])
                continue
            if action is EditAction.QUIT:
                return Aborted([])
            raise ValueError(f"Unknown edit action: {action!r}")

    def run_list(self, movies: Sequence[MovieEntry]) -> Outcome:
        """Walk the entries in order.

        Incomplete entries are pre-filled with a guess from their filename.
        On quit the entry being edited is left as it was.
        """
        self.transition(SessionState.LIST_MODE)
        self.progress = []
        for movie in movies:
            candidate = movie if movie.is_complete else guess_details_from_filename(movie)
            outcome = self.edit_entry(candidate)
            if isinstance(outcome, Aborted):
                logger.info(f"Quit after {len(self.progress)} of {len(movies)} entries")
                return Aborted(list(self.progress))
            self.progress.extend(outcome.movies)
            self._backup(self.progress)
        return Continue(list(self.progress))

    def run_search(self, movies: Sequence[MovieEntry]) -> Outcome:
        """Pick entries by file path search, edit, repeat while the operator wants."""
        self.transition(SessionState.SEARCH_MODE)
        self.progress = []
        current = {m.file_path: m for m in movies}
        edited: dict[str, MovieEntry] = {}

        while True:
            file_path = self.prompter.search_file(list(current))
            if file_path in current:
                outcome = self.edit_entry(current[file_path])
                if isinstance(outcome, Aborted):
                    return Aborted(list(edited.values()))
                updated = outcome.movies[0]
                current[file_path] = updated
                edited[file_path] = updated
                self.progress = list(edited.values())
                self._backup(self.progress)
            elif file_path:
                self.prompter.notify(f"No entry for {file_path}")

            self.transition(SessionState.SEARCH_MODE)
            if not self.prompter.confirm("Would you like to continue?", default=True):
                break
        return Continue(list(edited.values()))
