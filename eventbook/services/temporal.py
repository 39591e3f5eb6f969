"""
Date and time normalization to canonical YYYY-MM-DD and HH:MM forms
"""

import re

import pandas as pd

from eventbook.core.errors import InvalidFormatError

_TIME_PATTERN = re.compile(r"([01][0-9]|2[0-3]):([0-5][0-9])(?::([0-5][0-9]))?")

# numpy date keywords that pandas resolves against the clock
_CLOCK_KEYWORDS = {"now", "today"}


def normalize_time(value: str) -> str:
    """Normalize HH:MM or HH:MM:SS (24-hour) to HH:MM, dropping seconds"""
    match = _TIME_PATTERN.fullmatch(value.strip())
    if not match:
        raise InvalidFormatError("time", "Invalid time format. Expected HH:MM (24-hour).")

    hours, minutes = match.group(1), match.group(2)
    return f"{hours}:{minutes}"


def normalize_date(value: str) -> str:
    """Normalize a free-form date/time string to its UTC calendar date.

    Strings without an offset are read as UTC. Time of day and zone are
    discarded after conversion, so an evening timestamp west of UTC lands
    on the following day.
    """
    text = value.strip()
    if text.lower() in _CLOCK_KEYWORDS:
        raise InvalidFormatError("date", "Invalid date format.")

    try:
        parsed = pd.to_datetime(text, utc=True)
    except (ValueError, TypeError, OverflowError) as exc:
        raise InvalidFormatError("date", "Invalid date format.") from exc

    if pd.isna(parsed):
        raise InvalidFormatError("date", "Invalid date format.")

    return f"{parsed.year:04d}-{parsed.month:02d}-{parsed.day:02d}"
