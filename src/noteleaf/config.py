# src/noteleaf/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every value has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "NOTELEAF"

TAXONOMY_CURRENT = "current"
TAXONOMY_LEGACY = "legacy"
STATUS_TAXONOMIES = (TAXONOMY_CURRENT, TAXONOMY_LEGACY)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    log_dir: Path

    # ---- Task defaults ----
    # Which status taxonomy new tasks start in: "current" (todo) or "legacy" (pending).
    status_taxonomy: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "noteleaf").strip() or "noteleaf"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/noteleaf"))
        log_dir = _env_path(_k("LOG_DIR"), data_dir / "logs")

        status_taxonomy = _env_choice(_k("STATUS_TAXONOMY"), STATUS_TAXONOMIES, TAXONOMY_CURRENT)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            log_dir=log_dir,
            status_taxonomy=status_taxonomy,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
