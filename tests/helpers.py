import json
from pathlib import Path

from PIL import Image

from ntfbingo.db.session import EditAction
from ntfbingo.errors import TitleLookupError


class ScriptedPrompter:
    """Prompter that replays canned answers and records what it was shown."""

    def __init__(self, actions=(), edits=(), candidates=(), confirms=(), searches=(), mode="list"):
        self.actions = list(actions)
        self.edits = list(edits)
        self.candidates = list(candidates)
        self.confirms = list(confirms)
        self.searches = list(searches)
        self.mode = mode
        self.shown = []
        self.notices = []
        self.opened = []
        self.on_action = None

    def show_entry(self, movie):
        self.shown.append(movie)

    def choose_action(self, movie):
        if self.on_action is not None:
            self.on_action(movie)
        return self.actions.pop(0)

    def edit_fields(self, movie):
        return self.edits.pop(0)

    def choose_candidate(self, movie, candidates):
        return self.candidates.pop(0)

    def choose_edit_mode(self):
        return self.mode

    def search_file(self, file_paths):
        return self.searches.pop(0)

    def confirm(self, message, default=True):
        return self.confirms.pop(0) if self.confirms else default

    def notify(self, message):
        self.notices.append(message)

    def open_still(self, file_path):
        self.opened.append(file_path)


class FakeLookup:
    def __init__(self, results=None, error=None):
        self.results = results or []
        self.error = error
        self.queries = []

    def search_movie(self, movie_name):
        self.queries.append(movie_name)
        if self.error:
            raise TitleLookupError(self.error)
        return list(self.results)


KEEP = EditAction.KEEP
EDIT = EditAction.EDIT
LOOKUP = EditAction.LOOKUP
QUIT = EditAction.QUIT


def make_still(path: Path, size=(64, 36), color=(200, 30, 30)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path)
    return path


def write_db_file(path: Path, movies, last_scan=1) -> None:
    path.write_text(json.dumps({"lastScan": last_scan, "movies": movies}), encoding="utf-8")
