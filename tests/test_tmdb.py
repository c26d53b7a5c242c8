import pytest
import requests

from ntfbingo.errors import TitleLookupError
from ntfbingo.lookup.tmdb import TMDB_API_BASE, Candidate, TMDBClient


class FakeResponse:
    def __init__(self, payload=None, status=200, bad_json=False):
        self.payload = payload
        self.status = status
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} Client Error")

    def json(self):
        if self.bad_json:
            raise ValueError("Expecting value")
        return self.payload


class Calls(list):
    response = None


@pytest.fixture
def calls(monkeypatch):
    """Patch Session.get; set calls.response before searching."""
    recorded = Calls()

    def fake_get(self, url, params=None, timeout=None):
        recorded.append((url, params, timeout))
        if isinstance(recorded.response, Exception):
            raise recorded.response
        return recorded.response

    monkeypatch.setattr(requests.Session, "get", fake_get)
    return recorded


def test_search_movie_maps_results(calls):
    calls.response = FakeResponse({"results": [
        {"title": "Alien", "release_date": "1979-05-25"},
        {"title": "Aliens", "release_date": "1986-07-18"},
        {"title": "Alien Nation"},
        {"release_date": "2001-01-01"},
    ]})
    client = TMDBClient(api_key="k", base_url="https://example.test/3", timeout=5)
    assert client.search_movie("alien") == [
        Candidate("Alien", "1979"),
        Candidate("Aliens", "1986"),
        Candidate("Alien Nation", ""),
    ]
    url, params, timeout = calls[0]
    assert url == "https://example.test/3/search/movie"
    assert params == {"api_key": "k", "query": "alien"}
    assert timeout == 5


def test_candidate_label():
    assert Candidate("Alien", "1979").label == "Alien - 1979"


def test_defaults_come_from_environment(monkeypatch):
    monkeypatch.setenv("TMDB_API_KEY", "from-env")
    monkeypatch.delenv("TMDB_BASE_URL", raising=False)
    client = TMDBClient()
    assert client.api_key == "from-env"
    assert client.base_url == TMDB_API_BASE


def test_missing_key_raises(monkeypatch, calls):
    monkeypatch.delenv("TMDB_API_KEY", raising=False)
    with pytest.raises(TitleLookupError, match="Missing credentials"):
        TMDBClient().search_movie("alien")
    assert calls == []


@pytest.mark.parametrize("response", [
    FakeResponse(status=401),
    FakeResponse(bad_json=True),
    FakeResponse(["not", "a", "dict"]),
    FakeResponse({"status_message": "Invalid API key", "success": False}),
    requests.ConnectionError("no route to host"),
])
def test_failures_raise_lookup_error(calls, response):
    calls.response = response
    with pytest.raises(TitleLookupError):
        TMDBClient(api_key="k").search_movie("alien")


def test_empty_results(calls):
    calls.response = FakeResponse({"page": 1, "results": []})
    assert TMDBClient(api_key="k").search_movie("zzzz") == []
