"""Environment-driven settings for Specture."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

PROJECT_ROOT_ENV = "SPECTURE_PROJECT_ROOT"
SPECS_DIR_ENV = "SPECTURE_SPECS_DIR"
LOG_LEVEL_ENV = "SPECTURE_LOG_LEVEL"
LOG_FILE_ENV = "SPECTURE_LOG_FILE"

DEFAULT_SPECS_DIR = "specs"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime settings, usually read from the environment."""

    project_root: Optional[Path] = None
    specs_dir_name: str = DEFAULT_SPECS_DIR
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[Path] = None


def _optional_path(value: Optional[str]) -> Optional[Path]:
    if not value or not value.strip():
        return None
    return Path(value.strip()).expanduser()


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from environment variables."""
    env = os.environ if environ is None else environ

    specs_dir_name = (env.get(SPECS_DIR_ENV) or "").strip() or DEFAULT_SPECS_DIR
    log_level = (env.get(LOG_LEVEL_ENV) or "").strip().upper() or DEFAULT_LOG_LEVEL

    return Settings(
        project_root=_optional_path(env.get(PROJECT_ROOT_ENV)),
        specs_dir_name=specs_dir_name,
        log_level=log_level,
        log_file=_optional_path(env.get(LOG_FILE_ENV)),
    )
