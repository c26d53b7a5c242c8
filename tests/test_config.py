import pytest

from ntfbingo.config import Settings, load_settings
from ntfbingo.errors import ValidationError


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults(in_tmp):
    settings = load_settings(environ={})
    assert settings == Settings()
    assert settings.game_length == 200
    assert settings.use_free_space is True


def test_yaml_in_cwd_is_picked_up(in_tmp):
    (in_tmp / "ntf-bingo.yml").write_text(
        "stills_dir: frames\ngame_length: 90\nuse_free_space: false\n", encoding="utf-8"
    )
    settings = load_settings(environ={})
    assert settings.stills_dir == "frames"
    assert settings.game_length == 90
    assert settings.use_free_space is False


def test_environment_beats_yaml(in_tmp):
    config = in_tmp / "custom.yml"
    config.write_text("db_path: yaml.json\ntmdb_api_key: yaml-key\n", encoding="utf-8")
    settings = load_settings(config, environ={"NTF_DB_PATH": "env.json", "TMDB_API_KEY": ""})
    assert settings.db_path == "env.json"
    # empty values do not override
    assert settings.tmdb_api_key == "yaml-key"


def test_dotenv_file_is_loaded(in_tmp, monkeypatch):
    monkeypatch.delenv("NTF_OUTPUT_DIR", raising=False)
    (in_tmp / ".env").write_text("NTF_OUTPUT_DIR=rounds\n", encoding="utf-8")
    try:
        assert load_settings().output_dir == "rounds"
    finally:
        monkeypatch.delenv("NTF_OUTPUT_DIR", raising=False)


@pytest.mark.parametrize("body", [
    "colour: blue\n",
    "- just\n- a list\n",
    "game_length: [unclosed\n",
    "game_length: 0\n",
])
def test_bad_yaml(in_tmp, body):
    config = in_tmp / "bad.yml"
    config.write_text(body, encoding="utf-8")
    with pytest.raises(ValidationError):
        load_settings(config, environ={})


def test_explicit_config_must_exist(in_tmp):
    with pytest.raises(ValidationError, match="not found"):
        load_settings(in_tmp / "nope.yml", environ={})
