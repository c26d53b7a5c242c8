"""Fold edited entries back into the full movie list."""

from typing import Iterable, Sequence

from ntfbingo.db.models import MovieEntry


def merge(edited: Iterable[MovieEntry], original: Sequence[MovieEntry]) -> list[MovieEntry]:
    """Replace entries of original with their edited version, keyed by file_path.

    Order follows original. Edited entries with no counterpart in original
    are ignored. Neither input is modified.
    """
    by_path = {movie.file_path: movie for movie in edited}
    return [by_path.get(movie.file_path, movie) for movie in original]


def unknown_paths(edited: Iterable[MovieEntry], original: Sequence[MovieEntry]) -> list[str]:
    """file_paths present in edited but not in original."""
    known = {movie.file_path for movie in original}
    return [movie.file_path for movie in edited if movie.file_path not in known]
