"""Read and write movies.json and its backup.

Every write replaces the whole file atomically: the JSON goes to a temp file
in the same directory which is then os.replace()d over the target.
"""

import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any, Iterable

from ntfbingo.db.models import MovieDatabase, MovieEntry
from ntfbingo.errors import DatabaseReadError, DatabaseWriteError, ValidationError

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def atomic_write_json(path: str | Path, data: Any) -> Path:
    """Write data as 2-space indented JSON, replacing path in one step."""
    path = Path(path)
    directory = path.parent if str(path.parent) else Path(".")
    directory.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
    return path


def read_db(path: str | Path, create_missing: bool = False) -> MovieDatabase:
    """Load movies.json.

    Raises:
        DatabaseReadError: unreadable, not JSON, or malformed entries
    """
    path = Path(path)
    logger.info(f"Reading {path}")
    if create_missing and not path.exists():
        logger.warning(f"{path} not found, starting an empty movie database")
        return MovieDatabase()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        db = MovieDatabase.from_dict(data)
    except (OSError, json.JSONDecodeError, ValidationError, ValueError) as e:
        raise DatabaseReadError(f"Error reading {path}: {e}") from e
    logger.info(f"{path} read: {len(db.movies)} entries")
    return db


def write_db(db: MovieDatabase, path: str | Path) -> MovieDatabase:
    """Stamp lastScan and atomically replace the primary database file."""
    path = Path(path)
    logger.info(f"Saving {path}")
    db.last_scan = now_ms()
    try:
        atomic_write_json(path, db.to_dict())
    except OSError as e:
        raise DatabaseWriteError(f"Error writing {path}: {e}") from e
    logger.info(f"Saved {path}")
    return db


def write_backup(movies: Iterable[MovieEntry], path: str | Path) -> Path:
    """Write a bare JSON array of entries to the backup file."""
    try:
        return atomic_write_json(path, [m.to_dict() for m in movies])
    except OSError as e:
        raise DatabaseWriteError(f"Error writing backup {path}: {e}") from e


def read_backup(path: str | Path) -> list[MovieEntry]:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValidationError("backup file must hold a JSON array")
        return [MovieEntry.from_dict(m) for m in data]
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise DatabaseReadError(f"Error reading backup {path}: {e}") from e
