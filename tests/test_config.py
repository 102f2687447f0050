"""Tests for environment-driven settings."""

from zoneinfo import ZoneInfo

import pytest

from printanything.config import (
    get_history_limit,
    get_log_level,
    get_settings,
    get_user_timezone,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = get_settings()
    assert settings.timezone == "UTC"
    assert settings.history_limit == 50


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PRINTANYTHING_TIMEZONE", "Asia/Hong_Kong")
    monkeypatch.setenv("PRINTANYTHING_HISTORY_LIMIT", "5")
    monkeypatch.setenv("PRINTANYTHING_LOG_LEVEL", "debug")
    assert get_user_timezone() == ZoneInfo("Asia/Hong_Kong")
    assert get_history_limit() == 5
    assert get_log_level() == "DEBUG"


def test_default_date_format_applies_to_new_fields(monkeypatch):
    from datetime import date

    from core import LogicKind
    from printanything.editor import EditingSession

    monkeypatch.setenv("PRINTANYTHING_DEFAULT_DATE_FORMAT", "DD/MM/YYYY")
    session = EditingSession.new(today=date(2026, 10, 18))
    added = session.add_text(LogicKind.DATE)
    assert added.date_format == "DD/MM/YYYY"
    assert added.resolved_text == "18/10/2026"
