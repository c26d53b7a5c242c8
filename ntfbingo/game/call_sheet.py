"""Host call sheet: the drawn movies, numbered in slide order."""

import logging
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)


def format_call_sheet(names: Sequence[str]) -> str:
    return "\n".join(f"{i}. {name}" for i, name in enumerate(names, 1))


def write_call_sheet(names: Sequence[str], output_dir: str | Path, stamp: str) -> Path:
    """Write slide-list-<stamp>.txt and return its path."""
    path = Path(output_dir) / f"slide-list-{stamp}.txt"
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_call_sheet(names))
    logger.info(f"Wrote call sheet: {path} ({len(names)} movies)")
    return path
