"""Date formatting for DATE fields.

Date fields always show "today" in the configured timezone, formatted
with one of the pattern tokens in DATE_FORMATS.
"""

from datetime import date, datetime

from printanything.config import get_user_timezone

DATE_FORMATS = {
    "YYYY-MM-DD": "ISO (e.g., '2026-10-18')",
    "DD/MM/YYYY": "Day first (e.g., '18/10/2026')",
    "MM/DD/YYYY": "Month first (e.g., '10/18/2026')",
    "DD Month YYYY": "Long month name (e.g., '18 October 2026')",
    "YYYY": "Year (e.g., '2026')",
    "MM": "Month number (e.g., '10')",
    "DD": "Day of month (e.g., '18')",
}


def today_user() -> date:
    """Get today's date in user timezone."""
    return datetime.now(get_user_timezone()).date()


def format_date(value: date, pattern: str | None) -> str:
    """Format a date with a pattern token.

    Unknown tokens fall back to ISO form.

    Args:
        value: Date (or datetime) to format
        pattern: One of DATE_FORMATS

    Returns:
        Formatted date string
    """
    yyyy = f"{value.year:04d}"
    mm = f"{value.month:02d}"
    dd = f"{value.day:02d}"

    if pattern == "DD/MM/YYYY":
        return f"{dd}/{mm}/{yyyy}"
    if pattern == "MM/DD/YYYY":
        return f"{mm}/{dd}/{yyyy}"
    if pattern == "DD Month YYYY":
        return f"{value.day} {value.strftime('%B')} {value.year}"
    if pattern == "YYYY":
        return yyyy
    if pattern == "MM":
        return mm
    if pattern == "DD":
        return dd
    return f"{yyyy}-{mm}-{dd}"
