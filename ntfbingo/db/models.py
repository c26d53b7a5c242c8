"""Movie database records.

movies.json shape:
    {
      "lastScan": <epoch ms>,
      "movies": [{"filePath": "stills/x.jpg", "movieTitle": "X", "movieYear": "1999"}, ...]
    }
"""

import os
import re
from dataclasses import dataclass, field, replace
from pathlib import PurePath

from ntfbingo.errors import ValidationError

ACCEPTED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif")

_WORD_RE = re.compile(r"\w\S*")


def is_filename_ok(filename: str) -> bool:
    """Accept image files only, and nothing hidden (leading dot)."""
    if not filename or filename.startswith("."):
        return False
    return filename.lower().endswith(ACCEPTED_EXTENSIONS)


def title_case(text: str) -> str:
    """Capitalize each word, lowercase the rest. Underscores become apostrophes."""
    cased = _WORD_RE.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)
    return cased.replace("_", "'")


@dataclass(frozen=True)
class MovieEntry:
    """One still image and the movie it comes from. file_path is the identity."""
    file_path: str
    movie_title: str = ""
    movie_year: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.movie_title) and bool(self.movie_year)

    @property
    def display_name(self) -> str:
        """Name used on cards and call sheets, e.g. 'Alien (1979)'."""
        return f"{self.movie_title} ({self.movie_year})"

    def with_details(self, movie_title: str, movie_year: str) -> "MovieEntry":
        return replace(self, movie_title=movie_title, movie_year=movie_year)

    def to_dict(self) -> dict:
        return {
            "filePath": self.file_path,
            "movieTitle": self.movie_title,
            "movieYear": self.movie_year,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MovieEntry":
        if not isinstance(data, dict) or not data.get("filePath"):
            raise ValidationError(f"Movie entry without a filePath: {data!r}")
        return cls(
            file_path=str(data["filePath"]),
            movie_title=str(data.get("movieTitle") or ""),
            movie_year=str(data.get("movieYear") or ""),
        )


def make_movie_entry(
    file_path: str,
    movie_title: str = "",
    movie_year: str = "",
    check_exists: bool = True,
) -> MovieEntry:
    """Create a MovieEntry, validating the file first.

    Raises:
        ValidationError: empty path, missing file, or not an image filename
    """
    if not file_path:
        raise ValidationError("make_movie_entry: filePath was empty")

    if check_exists:
        try:
            os.stat(file_path)
        except OSError as e:
            raise ValidationError(f"make_movie_entry: {e}") from e

    base = PurePath(file_path).name
    if not is_filename_ok(base):
        raise ValidationError(f'make_movie_entry: "{base}" is not a filename we like')

    return MovieEntry(file_path=file_path, movie_title=movie_title, movie_year=movie_year)


@dataclass
class MovieDatabase:
    last_scan: int = 0
    movies: list[MovieEntry] = field(default_factory=list)

    def __post_init__(self):
        seen = set()
        for movie in self.movies:
            if movie.file_path in seen:
                raise ValidationError(f"Duplicate filePath in movie database: {movie.file_path}")
            seen.add(movie.file_path)

    def file_paths(self) -> list[str]:
        return [m.file_path for m in self.movies]

    def complete_movies(self) -> list[MovieEntry]:
        return [m for m in self.movies if m.is_complete]

    def incomplete_movies(self) -> list[MovieEntry]:
        return [m for m in self.movies if not m.is_complete]

    def to_dict(self) -> dict:
        return {
            "lastScan": self.last_scan,
            "movies": [m.to_dict() for m in self.movies],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MovieDatabase":
        if not isinstance(data, dict):
            raise ValidationError("Movie database must be a JSON object")
        movies = data.get("movies", [])
        if not isinstance(movies, list):
            raise ValidationError('Movie database "movies" must be a list')
        return cls(
            last_scan=int(data.get("lastScan") or 0),
            movies=[MovieEntry.from_dict(m) for m in movies],
        )
