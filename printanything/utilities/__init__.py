"""Utilities - amount renderers, date formatting, logging."""

from printanything.utilities.dates import DATE_FORMATS, format_date, today_user
from printanything.utilities.logging import setup_logging
from printanything.utilities.numwords import (
    format_currency,
    number_to_chinese,
    number_to_english,
    parse_amount,
)

__all__ = [
    "DATE_FORMATS",
    "format_currency",
    "format_date",
    "number_to_chinese",
    "number_to_english",
    "parse_amount",
    "setup_logging",
    "today_user",
]
