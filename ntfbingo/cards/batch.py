#!/usr/bin/env python3
"""
Bingo card batch generation.

Cards are produced two per page. For every page the whole working pool is
reshuffled (the shuffled order is carried forward to the next page), then the
first slice fills the top card and the next slice fills the bottom card.

Reshuffling the full pool per page spreads repeats around but does NOT
sample without replacement: the same movie can appear on several cards in
one batch, and two cards on different pages can share most of their cells
when the pool is small. A pool of at least MIN_POOL_SIZE keeps that rare.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from ntfbingo.cards.filler import FilledCell, fill
from ntfbingo.cards.grid import GridLayout, calculate_grids
from ntfbingo.cards.shuffle import shuffle_in_place
from ntfbingo.errors import ValidationError

logger = logging.getLogger(__name__)

MIN_CARDS = 2
MIN_POOL_SIZE = 200
DEFAULT_TITLE = "MOVIE"


@dataclass(frozen=True)
class Card:
    """One printed page: the top and bottom card faces."""
    title: str
    top: tuple[FilledCell, ...]
    bottom: tuple[FilledCell, ...]


def _validate(num_cards: int, option_pool) -> None:
    if not isinstance(num_cards, int) or isinstance(num_cards, bool):
        raise ValidationError("generate: number of cards must be an integer")
    if num_cards < MIN_CARDS:
        raise ValidationError(f"generate: Must generate at least {MIN_CARDS} bingo cards")
    if not isinstance(option_pool, (list, tuple)):
        raise ValidationError("generate: options is not a list")
    if len(option_pool) < MIN_POOL_SIZE:
        raise ValidationError(f"generate: must have at least {MIN_POOL_SIZE} options, got {len(option_pool)}")


def round_up_even(num_cards: int) -> int:
    return num_cards + 1 if num_cards % 2 else num_cards


def generate(
    num_cards: int,
    option_pool: Sequence[str],
    use_free_space: bool = True,
    title: str = DEFAULT_TITLE,
    layout: Optional[GridLayout] = None,
    rng: Optional[random.Random] = None,
) -> list[Card]:
    """Generate bingo card pages.

    Args:
        num_cards: Cards wanted, at least 2. Odd counts are rounded up.
        option_pool: Names to place in cells. List or tuple, 200+ entries.
        use_free_space: Put "Free Space" in the centre cell of every card
        title: Card title, one letter per column (uppercased, trimmed)
        layout: Precomputed grids (computed here if not given)
        rng: Random source, for reproducible batches

    Returns:
        One Card per page, num_cards / 2 pages after rounding

    Raises:
        ValidationError: bad count or pool
    """
    _validate(num_cards, option_pool)
    num_cards = round_up_even(num_cards)
    layout = layout or calculate_grids()
    rng = rng or random.Random()

    per_card = layout.geometry.content_cell_count
    if len(option_pool) < 2 * per_card:
        raise ValidationError(f"generate: need at least {2 * per_card} options for this grid")

    pages = num_cards // 2
    logger.info(f"Generating {num_cards} cards on {pages} pages from {len(option_pool)} options")

    shuffled = list(option_pool)
    result = []
    for _ in range(pages):
        shuffle_in_place(shuffled, rng)
        top_data = shuffled[:per_card]
        bottom_data = shuffled[per_card:2 * per_card]
        result.append(Card(
            title=title,
            top=fill(layout.top, title, top_data, use_free_space),
            bottom=fill(layout.bottom, title, bottom_data, use_free_space),
        ))
    return result


def synthetic_pool(size: int = MIN_POOL_SIZE, rng: Optional[random.Random] = None) -> list[str]:
    """Random numeric strings, for smoke-testing card output without a database."""
    rng = rng or random.Random()
    return [str(rng.randrange(1000)) for _ in range(size)]
