"""Bingo card generation for ntf-bingo.

Exports are lazily loaded so `python -m ntfbingo.cards.<module>` does not
import the module twice.
"""

__all__ = [
    # shuffle.py (shuffle() itself: import from ntfbingo.cards.shuffle)
    "shuffle_in_place",
    "pick_one_of",
    # grid.py
    "Rect",
    "GridGeometry",
    "GridLayout",
    "calculate_grids",
    # filler.py
    "fill",
    "FilledCell",
    "FREE_SPACE_LABEL",
    "required_pool_length",
    # batch.py
    "Card",
    "generate",
    "synthetic_pool",
    "MIN_POOL_SIZE",
    # pdf.py
    "render_cards",
    "write_test_cards",
]


def __getattr__(name: str):
    """Lazy import for module exports."""
    if name in ("shuffle_in_place", "pick_one_of"):
        from ntfbingo.cards import shuffle
        return getattr(shuffle, name)
    elif name in ("Rect", "GridGeometry", "GridLayout", "calculate_grids"):
        from ntfbingo.cards import grid
        return getattr(grid, name)
    elif name in ("fill", "FilledCell", "FREE_SPACE_LABEL", "required_pool_length"):
        from ntfbingo.cards import filler
        return getattr(filler, name)
    elif name in ("Card", "generate", "synthetic_pool", "MIN_POOL_SIZE"):
        from ntfbingo.cards import batch
        return getattr(batch, name)
    elif name in ("render_cards", "write_test_cards"):
        from ntfbingo.cards import pdf
        return getattr(pdf, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
