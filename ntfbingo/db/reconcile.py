"""Reconcile movies.json against the stills directory."""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Iterable

from ntfbingo.db.models import MovieEntry, is_filename_ok, make_movie_entry, title_case
from ntfbingo.errors import StillsDirError, ValidationError

logger = logging.getLogger(__name__)

# <title><separator?><4 digit year><separator?> at the end of the stem
_TRAILING_YEAR_RE = re.compile(r"[\s\-(]?(\d{4})[\s\-)]?$")
_BEFORE_PAREN_RE = re.compile(r"([^(]+)")


@dataclass(frozen=True)
class ReconcileResult:
    kept: list[MovieEntry]
    added: list[MovieEntry]
    dropped: list[MovieEntry]
    rejected: list[str] = field(default_factory=list)

    @property
    def movies(self) -> list[MovieEntry]:
        """Kept entries in their original order, then new ones."""
        return self.kept + self.added


def clean_file_list(filenames: Iterable[str], stills_dir: str | Path) -> list[str]:
    """Dedupe, drop non-images and hidden files, and prefix the stills dir.

    Returns sorted POSIX-style paths, the form stored in movies.json.
    """
    seen = set()
    paths = []
    for filename in filenames:
        if filename in seen:
            continue
        seen.add(filename)
        if is_filename_ok(filename):
            paths.append(Path(stills_dir, filename).as_posix())
    return sorted(paths)


def list_stills(stills_dir: str | Path) -> list[str]:
    """Scan the stills directory.

    Raises:
        StillsDirError: the directory is missing or unreadable
    """
    stills_dir = Path(stills_dir)
    logger.info(f"Scanning image files in {stills_dir}")
    try:
        if not stills_dir.is_dir():
            raise FileNotFoundError(f"{stills_dir} is not a directory")
        filenames = os.listdir(stills_dir)
    except OSError as e:
        raise StillsDirError(f"Could not stat {stills_dir}: {e}") from e
    paths = clean_file_list(filenames, stills_dir)
    logger.info(f"Found {len(paths)} stills")
    return paths


def reconcile(known: Iterable[MovieEntry], scanned: Iterable[str], check_exists: bool = False) -> ReconcileResult:
    """Diff the database against a directory scan.

    Entries whose file is gone are dropped. Scanned paths not yet in the
    database become blank entries, appended in scan order. Paths that fail
    entry validation are reported in `rejected` and skipped.
    """
    scanned = list(scanned)
    scanned_set = set(scanned)

    kept, dropped = [], []
    for movie in known:
        (kept if movie.file_path in scanned_set else dropped).append(movie)

    known_paths = {m.file_path for m in kept}
    added, rejected = [], []
    for file_path in scanned:
        if file_path in known_paths:
            continue
        known_paths.add(file_path)
        try:
            added.append(make_movie_entry(file_path, check_exists=check_exists))
        except ValidationError as e:
            logger.error(str(e))
            rejected.append(file_path)

    logger.info(f"Reconciled: {len(kept)} kept, {len(added)} added, {len(dropped)} dropped")
    return ReconcileResult(kept=kept, added=added, dropped=dropped, rejected=rejected)


def guess_details_from_filename(movie: MovieEntry) -> MovieEntry:
    """Guess title and year from a still's filename.

    Expects something like "the_thing 1982.jpg" or "Alien (1979).png". The
    year is only taken from the end of the stem since titles can hold numbers
    ("3:10 to Yuma", "Another 48 Hrs"). Anything from the first "(" on is
    dropped from the title. Without a trailing year the whole stem is the
    title. Only a starting point for the operator.
    """
    stem = PurePath(movie.file_path).stem
    title, year = stem, movie.movie_year

    match = _TRAILING_YEAR_RE.search(stem)
    if match:
        year = match.group(1)
        title = stem[:match.start()].strip()

    before_paren = _BEFORE_PAREN_RE.search(title)
    if before_paren:
        title = title_case(before_paren.group(1).strip())

    return movie.with_details(title, year)
