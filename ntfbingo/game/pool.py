"""Turn the movie database into the pool of callable movies."""

import random
from typing import Iterable, Optional

from ntfbingo.cards.shuffle import pick_one_of
from ntfbingo.db.models import MovieEntry


def build_movie_map(movies: Iterable[MovieEntry]) -> dict[str, list[str]]:
    """Map "Title (Year)" to every still of that movie.

    Entries missing a title or year are skipped.
    """
    movie_map: dict[str, list[str]] = {}
    for movie in movies:
        if not movie.is_complete:
            continue
        movie_map.setdefault(movie.display_name, []).append(movie.file_path)
    return movie_map


def dedupe_random(movie_map: dict[str, list[str]], rng: Optional[random.Random] = None) -> dict[str, str]:
    """Keep one still per movie, picked uniformly when there are several."""
    return {name: pick_one_of(stills, rng) for name, stills in movie_map.items()}
