"""Application configuration.

Values come from environment variables prefixed with ``PRINTANYTHING_``
(e.g. ``PRINTANYTHING_TIMEZONE=Asia/Hong_Kong``). Use the getter
functions rather than reading settings directly.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Print-Anything settings."""

    model_config = SettingsConfigDict(env_prefix="PRINTANYTHING_")

    # Date fields resolve "today" in this timezone
    timezone: str = "UTC"
    default_date_format: str = "YYYY-MM-DD"

    # Undo/redo depth
    history_limit: int = 50

    log_level: str = "INFO"

    # SQLite file for saved templates; in-memory store when unset
    database_path: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get the process settings (cached after first read)."""
    return Settings()


def get_user_timezone_str() -> str:
    return get_settings().timezone


def get_user_timezone() -> ZoneInfo:
    return ZoneInfo(get_user_timezone_str())


def get_default_date_format() -> str:
    return get_settings().default_date_format


def get_history_limit() -> int:
    return get_settings().history_limit


def get_log_level() -> str:
    return get_settings().log_level.upper()


def get_database_path() -> str | None:
    return get_settings().database_path
