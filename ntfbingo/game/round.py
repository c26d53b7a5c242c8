#!/usr/bin/env python3
"""
Generate everything for one bingo round.

  1. Read movies.json, keep complete entries, one random still per movie
  2. Shuffle the movie names and draw settings.game_length of them
  3. Write the call sheet and the slideshow in that order
  4. Generate the bingo cards from the drawn names

All three files share one timestamp so they are easy to match up.
"""

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from ntfbingo.cards.batch import generate
from ntfbingo.cards.grid import GridLayout, calculate_grids
from ntfbingo.cards.pdf import render_cards
from ntfbingo.cards.shuffle import shuffle
from ntfbingo.config import Settings
from ntfbingo.db.store import read_db
from ntfbingo.game.call_sheet import write_call_sheet
from ntfbingo.game.pool import build_movie_map, dedupe_random
from ntfbingo.game.slideshow import write_slideshow

logger = logging.getLogger(__name__)

DATE_TIME_FORMAT = "%Y-%m-%d_%H-%M-%S"


@dataclass(frozen=True)
class RoundFiles:
    call_sheet: Path
    slideshow: Path
    cards: Path
    names: list[str]


def file_stamp(when: Optional[datetime] = None) -> str:
    return (when or datetime.now()).strftime(DATE_TIME_FORMAT)


def draw_names(movie_stills: dict[str, str], game_length: int, rng: Optional[random.Random] = None) -> list[str]:
    """Shuffle the movie names and keep the first game_length."""
    return shuffle(list(movie_stills), rng)[:game_length]


def make_round(
    settings: Settings,
    num_cards: int,
    use_free_space: Optional[bool] = None,
    title: Optional[str] = None,
    layout: Optional[GridLayout] = None,
    rng: Optional[random.Random] = None,
    stamp: Optional[str] = None,
) -> RoundFiles:
    """Write call sheet, slideshow and cards for one round.

    Raises:
        DatabaseReadError: movies.json unreadable
        ValidationError: bad card count or fewer than 200 drawn movies
        OSError: a still could not be read or an output not written
    """
    rng = rng or random.Random()
    stamp = stamp or file_stamp()
    use_free_space = settings.use_free_space if use_free_space is None else use_free_space
    title = title or settings.card_title
    layout = layout or calculate_grids()
    output_dir = Path(settings.output_dir)

    db = read_db(settings.db_path)
    movie_stills = dedupe_random(build_movie_map(db.movies), rng)
    logger.info(f"{len(movie_stills)} distinct movies available")

    names = draw_names(movie_stills, settings.game_length, rng)

    # Validate the card request before spending time on the slideshow
    cards = generate(num_cards, names, use_free_space=use_free_space, title=title, layout=layout, rng=rng)

    call_sheet = write_call_sheet(names, output_dir, stamp)
    slideshow = write_slideshow([movie_stills[name] for name in names], output_dir, stamp)
    cards_path = render_cards(cards, layout, output_dir / f"bingo-cards-{stamp}.pdf")

    return RoundFiles(call_sheet=call_sheet, slideshow=slideshow, cards=cards_path, names=names)
