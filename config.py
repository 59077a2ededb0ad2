"""
Service configuration.
Environment variables are read once at startup into an immutable Settings value
that is handed to the app factory and from there to each collaborator.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3001
DEFAULT_MODEL_NAME = "gemini-2.5-flash"
DEFAULT_RATE_LIMIT_SHORT_MAX = 5
DEFAULT_RATE_LIMIT_LONG_MAX = 50
VALID_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration"""

    port: int = DEFAULT_PORT
    host: str = "0.0.0.0"
    gemini_api_key: Optional[str] = None
    model_name: str = DEFAULT_MODEL_NAME
    rate_limit_short_max: int = DEFAULT_RATE_LIMIT_SHORT_MAX
    rate_limit_long_max: int = DEFAULT_RATE_LIMIT_LONG_MAX
    log_level: str = "INFO"
    cors_allow_origins: tuple[str, ...] = field(default=("*",))


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid %s '%s', defaulting to %d", name, raw, default)
        return default


def _log_level_from_env() -> str:
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    if log_level_str not in VALID_LOG_LEVELS:
        logger.warning("Invalid LOG_LEVEL '%s', defaulting to INFO", log_level_str)
        return "INFO"
    return log_level_str


def load_settings(env_path: Optional[Path] = None) -> Settings:
    """
    Load settings from the process environment.

    A .env file next to this module (or at env_path) is loaded first; variables
    already present in the environment take precedence over it.

    Args:
        env_path: Optional explicit path to a .env file

    Returns:
        Settings instance
    """
    load_dotenv(dotenv_path=env_path or Path(__file__).parent / ".env")

    origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
    cors_allow_origins = tuple(o.strip() for o in origins.split(",") if o.strip()) or ("*",)

    return Settings(
        port=_int_from_env("PORT", DEFAULT_PORT),
        host=os.getenv("HOST", "0.0.0.0"),
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        model_name=os.getenv("GEMINI_MODEL", DEFAULT_MODEL_NAME),
        rate_limit_short_max=_int_from_env("RATE_LIMIT_SHORT_MAX", DEFAULT_RATE_LIMIT_SHORT_MAX),
        rate_limit_long_max=_int_from_env("RATE_LIMIT_LONG_MAX", DEFAULT_RATE_LIMIT_LONG_MAX),
        log_level=_log_level_from_env(),
        cors_allow_origins=cors_allow_origins,
    )
