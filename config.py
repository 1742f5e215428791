"""Application configuration module.

Reads runtime settings from environment variables (and an optional ``.env``
file) with sane defaults. Game rules are fixed and live in
``core.constants.RaffleDefaults``; only process-level settings are read here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


def _get_bool(name: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    """Get integer from environment variable with fallback."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_optional_int(name: str) -> Optional[int]:
    """Get integer from environment variable, None when unset or malformed."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _get_str(name: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.getenv(name, default)


def _get_optional_str(name: str) -> Optional[str]:
    value = os.getenv(name)
    return value or None


@dataclass(frozen=True)
class Config:
    environment: str
    debug: bool
    log_level: str
    log_file: Optional[str]
    colored_logs: bool
    random_seed: Optional[int]
    clear_screen: bool
    metrics_textfile: Optional[str]


def load_config(env_file: Optional[str] = None) -> Config:
    """Load application configuration from environment variables.

    Args:
        env_file: Optional path to a ``.env`` file (defaults to lookup from cwd)

    Returns:
        Config: Application configuration with validated values
    """
    load_dotenv(dotenv_path=env_file)

    debug = _get_bool("DEBUG", False)
    config = Config(
        environment=_get_str("ENVIRONMENT", "development"),
        debug=debug,
        log_level=_get_str("LOG_LEVEL", "DEBUG" if debug else "WARNING").upper(),
        log_file=_get_str("LOG_FILE", "logs/raffle.log") or None,
        colored_logs=_get_bool("COLORED_LOGS", True),
        random_seed=_get_optional_int("RAFFLE_SEED"),
        clear_screen=_get_bool("CLEAR_SCREEN", True),
        metrics_textfile=_get_optional_str("METRICS_TEXTFILE"),
    )

    return config
