import pytest

from ntfbingo.config import Settings


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """A cwd with stills/ and settings pointing at it."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "stills").mkdir()
    settings = Settings(
        db_path=str(tmp_path / "movies.json"),
        backup_path=str(tmp_path / "movies.bak.json"),
        stills_dir="stills",
        output_dir=str(tmp_path / "out"),
    )
    return tmp_path, settings
