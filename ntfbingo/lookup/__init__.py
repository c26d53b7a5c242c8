"""Remote movie title lookup for ntf-bingo."""

from .tmdb import Candidate, TMDBClient

__all__ = [
    "Candidate",
    "TMDBClient",
]
