from itertools import combinations

import pytest

from ntfbingo.cards.grid import GridGeometry, calculate_grids


def test_default_grids_have_rows_times_cols_cells():
    layout = calculate_grids()
    assert len(layout.top) == 30
    assert len(layout.bottom) == 30


def test_cells_never_overlap_within_or_across_grids():
    layout = calculate_grids()
    cells = layout.top + layout.bottom
    for a, b in combinations(cells, 2):
        assert not a.overlaps(b), (a, b)


def test_title_row_is_row_zero_only():
    layout = calculate_grids()
    for rect in layout.top + layout.bottom:
        assert rect.is_title_row == (rect.row == 0)
    assert sum(r.is_title_row for r in layout.top) == 5


def test_geometry_matches_defaults():
    layout = calculate_grids()
    first = layout.top[0]
    assert (first.x, first.y, first.width, first.height) == (36, 36, 108, 58)
    # bottom grid starts one box height plus the gap lower
    assert layout.bottom[0].y == 36 + 6 * 58 + 18
    last = layout.bottom[-1]
    assert (last.row, last.col) == (5, 4)
    assert last.bottom <= 792 - 36


def test_row_major_order():
    layout = calculate_grids()
    positions = [(r.row, r.col) for r in layout.top]
    assert positions == sorted(positions)


def test_free_space_index_is_centre_of_play_area():
    geometry = GridGeometry()
    assert geometry.free_space_index == 17
    assert (geometry.free_space_row, geometry.free_space_col) == (3, 2)


def test_custom_geometry():
    geometry = GridGeometry(cols=3, rows=4, cell_width=50, cell_height=20, gap=0, margin=0)
    layout = calculate_grids(geometry)
    assert len(layout.top) == 12
    assert layout.bottom[0].y == 80
    for a, b in combinations(layout.top + layout.bottom, 2):
        assert not a.overlaps(b)


def test_rejects_grid_without_play_rows():
    with pytest.raises(ValueError):
        calculate_grids(GridGeometry(rows=1))
