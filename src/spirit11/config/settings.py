"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DB_PATH_ENV = "SPIRIT11_DB_PATH"
GEMINI_API_KEY_ENV = "GEMINI_API_KEY"
GEMINI_MODEL_ENV = "SPIRIT11_GEMINI_MODEL"
ADMIN_TOKEN_ENV = "SPIRIT11_ADMIN_TOKEN"
ROSTER_ATTEMPTS_ENV = "SPIRIT11_MAX_ROSTER_ATTEMPTS"

DEFAULT_DB_PATH = Path("data/spirit11.sqlite")
DEFAULT_GEMINI_MODEL = "gemini-pro"
DEFAULT_ROSTER_ATTEMPTS = 3


def env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def env_str(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass(frozen=True)
class Settings:
    db_path: Path | str
    gemini_api_key: str | None
    gemini_model: str
    admin_token: str | None
    max_roster_attempts: int

    @classmethod
    def from_env(cls) -> "Settings":
        db_path: Path | str = DEFAULT_DB_PATH
        raw_db = env_str(DB_PATH_ENV)
        if raw_db:
            db_path = raw_db if raw_db.startswith("file:") else Path(raw_db)
        return cls(
            db_path=db_path,
            gemini_api_key=env_str(GEMINI_API_KEY_ENV),
            gemini_model=env_str(GEMINI_MODEL_ENV, DEFAULT_GEMINI_MODEL) or DEFAULT_GEMINI_MODEL,
            admin_token=env_str(ADMIN_TOKEN_ENV),
            max_roster_attempts=env_int(ROSTER_ATTEMPTS_ENV, DEFAULT_ROSTER_ATTEMPTS, min_value=1),
        )
