"""Runtime settings for ntf-bingo.

Settings come from three layers, later layers winning:

1. Built-in defaults (the paths the tools have always used, relative to cwd)
2. ``ntf-bingo.yml`` in the working directory, or a file given with --config
3. Environment variables, with a ``.env`` file loaded first if present
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from ntfbingo.errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "ntf-bingo.yml"

# Environment variable -> Settings field
ENV_OVERRIDES = {
    "NTF_DB_PATH": "db_path",
    "NTF_BACKUP_PATH": "backup_path",
    "NTF_STILLS_DIR": "stills_dir",
    "NTF_OUTPUT_DIR": "output_dir",
    "TMDB_BASE_URL": "tmdb_base_url",
    "TMDB_API_KEY": "tmdb_api_key",
}


@dataclass(frozen=True)
class Settings:
    db_path: str = "movies.json"
    backup_path: str = "movies.bak.json"
    stills_dir: str = "stills"
    output_dir: str = "."
    # Number of calls drawn for one round. Average bingo games run ~70 calls.
    game_length: int = 200
    default_cards: int = 20
    use_free_space: bool = True
    card_title: str = "MOVIE"
    tmdb_base_url: str = "https://api.themoviedb.org/3/"
    tmdb_api_key: Optional[str] = None
    create_missing_db: bool = False


def _load_env(env_path: Path | None = None) -> None:
    """Load .env from cwd if present. Existing environment wins."""
    env_path = env_path or (Path.cwd() / ".env")
    if env_path.exists():
        load_dotenv(env_path)
        logger.debug(f"Loaded environment from {env_path}")


def _read_yaml(config_path: Path) -> dict:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValidationError(f"Could not parse {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"{config_path} must contain a mapping at the top level")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValidationError(f"Unknown settings in {config_path}: {', '.join(unknown)}")
    return data


def load_settings(config_path: str | Path | None = None, environ: dict | None = None) -> Settings:
    """Build Settings from defaults, YAML config and environment.

    Args:
        config_path: Explicit YAML file. Must exist when given.
        environ: Environment mapping (defaults to os.environ after loading .env)

    Returns:
        Frozen Settings instance
    """
    settings = Settings()

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise ValidationError(f"Config file not found: {path}")
    else:
        path = Path.cwd() / DEFAULT_CONFIG_NAME

    if path.exists():
        logger.info(f"Reading settings from {path}")
        settings = replace(settings, **_read_yaml(path))

    if environ is None:
        _load_env()
        environ = os.environ

    overrides = {
        field_name: environ[var]
        for var, field_name in ENV_OVERRIDES.items()
        if environ.get(var)
    }
    if overrides:
        settings = replace(settings, **overrides)

    if settings.game_length < 1:
        raise ValidationError("game_length must be at least 1")
    return settings
