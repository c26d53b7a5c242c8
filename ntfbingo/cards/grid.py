"""
Bingo card grid layout.

A letter page holds two cards stacked vertically ("two-up"). Each card is a
grid of ROWS x COLS cells; row 0 is the title row (one letter of the card
title per column) and the remaining rows hold movie names.

Page layout (points, 72 per inch):
  +-------------------------------+
  | M | O | V | I | E |           |  <- title row, grey fill
  |---+---+---+---+---|           |
  |   |   |   |   |   |           |
  |   |   | F |   |   |           |  <- free space (row 3, col 2)
  |   |   |   |   |   |           |
  +-------------------+           |
        18pt gap
  +-------------------+           |
  | bottom card, same geometry    |
  +-------------------------------+
"""

from dataclasses import dataclass

# Default geometry, in points
MARGIN = 36             # 0.5" page margin
CELL_WIDTH = 108
CELL_HEIGHT = 58
COLS = 5
ROWS = 6                # 1 title row + 5 play rows
GRID_GAP = 18           # 0.25" between the top and bottom card


@dataclass(frozen=True)
class Rect:
    """One grid cell."""
    x: float
    y: float
    width: float
    height: float
    row: int
    col: int
    is_title_row: bool

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def overlaps(self, other: "Rect") -> bool:
        """True if the interiors intersect. Shared edges do not count."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )


@dataclass(frozen=True)
class GridGeometry:
    margin: float = MARGIN
    cell_width: float = CELL_WIDTH
    cell_height: float = CELL_HEIGHT
    cols: int = COLS
    rows: int = ROWS
    gap: float = GRID_GAP

    @property
    def cell_count(self) -> int:
        return self.rows * self.cols

    @property
    def content_cell_count(self) -> int:
        """Cells below the title row."""
        return self.cell_count - self.cols

    @property
    def box_width(self) -> float:
        return self.cols * self.cell_width

    @property
    def box_height(self) -> float:
        return self.rows * self.cell_height

    @property
    def bottom_offset(self) -> float:
        return self.box_height + self.gap

    @property
    def free_space_row(self) -> int:
        return 1 + (self.rows - 1) // 2

    @property
    def free_space_col(self) -> int:
        return self.cols // 2

    @property
    def free_space_index(self) -> int:
        """Grid index of the free cell: centre of the play area (17 for 5x6)."""
        return self.free_space_row * self.cols + self.free_space_col


@dataclass(frozen=True)
class GridLayout:
    geometry: GridGeometry
    top: tuple[Rect, ...]
    bottom: tuple[Rect, ...]


def _build_grid(geometry: GridGeometry, y_offset: float) -> tuple[Rect, ...]:
    cells = []
    for row in range(geometry.rows):
        for col in range(geometry.cols):
            cells.append(Rect(
                x=geometry.margin + col * geometry.cell_width,
                y=geometry.margin + y_offset + row * geometry.cell_height,
                width=geometry.cell_width,
                height=geometry.cell_height,
                row=row,
                col=col,
                is_title_row=row == 0,
            ))
    return tuple(cells)


def calculate_grids(geometry: GridGeometry | None = None) -> GridLayout:
    """Compute the top and bottom card grids, row-major.

    Call once per run and pass the result to everything that needs it.
    """
    geometry = geometry or GridGeometry()
    if geometry.rows < 2 or geometry.cols < 1:
        raise ValueError("A card grid needs at least one column, a title row and a play row")
    if geometry.gap < 0:
        raise ValueError("Grid gap cannot be negative")
    return GridLayout(
        geometry=geometry,
        top=_build_grid(geometry, 0),
        bottom=_build_grid(geometry, geometry.bottom_offset),
    )
