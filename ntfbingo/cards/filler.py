"""Place a card title and movie names into a card grid."""

from dataclasses import dataclass
from typing import Sequence

from ntfbingo.cards.grid import GridGeometry, Rect

FREE_SPACE_LABEL = "Free Space"

KIND_TITLE = "title"
KIND_CONTENT = "content"
KIND_FREE = "free"


@dataclass(frozen=True)
class FilledCell:
    rect: Rect
    text: str
    kind: str


def required_pool_length(geometry: GridGeometry, use_free_space: bool) -> int:
    """Pool entries one card face consumes (25, or 24 with free space, for 5x6)."""
    needed = geometry.content_cell_count
    return needed - 1 if use_free_space else needed


def title_letters(title: str, cols: int) -> list[str]:
    """Uppercase title, truncated or space-padded to exactly cols characters."""
    return list(title.upper()[:cols].ljust(cols))


def _geometry_of(grid: Sequence[Rect]) -> GridGeometry:
    cols = sum(1 for rect in grid if rect.is_title_row)
    if cols == 0 or len(grid) % cols:
        raise ValueError("fill: grid has no title row or is not rectangular")
    return GridGeometry(cols=cols, rows=len(grid) // cols)


def fill(
    grid: Sequence[Rect],
    title: str,
    content_pool: Sequence[str],
    use_free_space: bool,
) -> tuple[FilledCell, ...]:
    """Fill one card face.

    Content is placed row-major from row 1. With use_free_space the fixed
    centre cell gets FREE_SPACE_LABEL and consumes no pool entry.

    The pool must hold at least required_pool_length() entries. That is the
    caller's job (see cards.batch.generate); it is not re-checked here.
    """
    geometry = _geometry_of(grid)
    letters = title_letters(title, geometry.cols)
    free_position = (geometry.free_space_row, geometry.free_space_col)

    filled = []
    pool_index = 0
    for rect in grid:
        if rect.is_title_row:
            filled.append(FilledCell(rect, letters[rect.col], KIND_TITLE))
        elif use_free_space and (rect.row, rect.col) == free_position:
            filled.append(FilledCell(rect, FREE_SPACE_LABEL, KIND_FREE))
        else:
            filled.append(FilledCell(rect, content_pool[pool_index], KIND_CONTENT))
            pool_index += 1
    return tuple(filled)
