"""The Movie Database (TMDB) title search client."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import requests

from ntfbingo.errors import TitleLookupError

logger = logging.getLogger(__name__)

TMDB_API_BASE = "https://api.themoviedb.org/3/"
DEFAULT_TIMEOUT_S = 15.0


@dataclass(frozen=True)
class Candidate:
    """One search hit, in movie-entry terms."""
    movie_title: str
    movie_year: str

    @property
    def label(self) -> str:
        return f"{self.movie_title} - {self.movie_year}"


class TMDBClient:
    """Client for the TMDB v3 search API.

    A single blocking GET per search. No retries: callers fall back to
    manual entry on TitleLookupError.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
    ):
        """Initialize TMDB client.

        Args:
            api_key: TMDB API key (or TMDB_API_KEY env var)
            base_url: API root ending in "/" (or TMDB_BASE_URL env var)
            timeout: Request timeout in seconds
        """
        self.api_key = api_key or os.environ.get("TMDB_API_KEY")
        self.base_url = base_url or os.environ.get("TMDB_BASE_URL") or TMDB_API_BASE
        if not self.base_url.endswith("/"):
            self.base_url += "/"
        self.timeout = timeout
        self._session = requests.Session()

    def _get(self, path: str, params: dict) -> dict:
        if not self.api_key:
            raise TitleLookupError("Missing credentials. Set TMDB_API_KEY in the environment or .env")

        url = f"{self.base_url}{path}"
        query = {"api_key": self.api_key, **params}
        try:
            response = self._session.get(url, params=query, timeout=self.timeout)
            response.raise_for_status()
            result = response.json()
        except requests.RequestException as e:
            raise TitleLookupError(f"TMDB request failed: {e}") from e
        except ValueError as e:
            raise TitleLookupError(f"TMDB returned invalid JSON: {e}") from e

        if not isinstance(result, dict):
            raise TitleLookupError(f"Unexpected TMDB response: {result!r}")
        if "status_message" in result and "results" not in result:
            raise TitleLookupError(f"API error: {result['status_message']}")
        return result

    def search_movie(self, movie_name: str) -> list[Candidate]:
        """Search movies by title.

        Returns:
            Candidates in TMDB relevance order (possibly empty)

        Raises:
            TitleLookupError: network, HTTP or API failure
        """
        logger.info(f"Searching TMDB for {movie_name!r}")
        result = self._get("search/movie", {"query": movie_name})

        candidates = []
        for movie in result.get("results", []):
            title = movie.get("title")
            if not title:
                continue
            release_date = movie.get("release_date") or ""
            candidates.append(Candidate(movie_title=title, movie_year=release_date[:4]))

        logger.info(f"TMDB returned {len(candidates)} matches")
        return candidates
