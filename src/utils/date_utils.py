"""Date and time utility functions."""
import time
from datetime import datetime
from typing import Optional

FRENCH_MONTHS = [
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
]


def format_registration_date(moment: datetime) -> str:
    """
    Format a date the way the list displays it.

    Args:
        moment: datetime to format

    Returns:
        French long date, e.g. "18 octobre 2026"
    """
    return f"{moment.day} {FRENCH_MONTHS[moment.month - 1]} {moment.year}"


def format_registration_time(moment: datetime) -> str:
    """
    Format a time of day.

    Returns:
        24h "HH:MM", e.g. "09:05"
    """
    return moment.strftime("%H:%M")


def epoch_millis(moment: Optional[datetime] = None) -> int:
    """Milliseconds since the Unix epoch for moment (default: now)."""
    if moment is None:
        return int(time.time() * 1000)
    return int(moment.timestamp() * 1000)
