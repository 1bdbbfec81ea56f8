"""Encoding of run timestamps as history directory names."""
import re
from datetime import datetime
from typing import Optional

# YYYY-MM-DD-HH-mm-ss
TIMESTAMP_FOLDER_REGEX = re.compile(r"^[0-9]{4}(-[0-9]{2}){5}$")


def format_timestamp(ts: datetime) -> str:
    """Render a timestamp as a history directory name (no timezone conversion)."""
    return (
        f"{ts.year:04d}-{ts.month:02d}-{ts.day:02d}-"
        f"{ts.hour:02d}-{ts.minute:02d}-{ts.second:02d}"
    )


def is_candidate(name: str) -> bool:
    """Check that a directory name has the timestamp shape."""
    return TIMESTAMP_FOLDER_REGEX.fullmatch(name) is not None


def parse_timestamp(name: str) -> Optional[datetime]:
    """
    Decode a history directory name into a naive timestamp.

    Returns:
        The timestamp, or None if the name has the wrong shape or does not
        denote a real calendar date and time (e.g. month 13).
    """
    if not is_candidate(name):
        return None
    year, month, day, hour, minute, second = (int(part) for part in name.split("-"))
    try:
        return datetime(year, month, day, hour, minute, second)
    except ValueError:
        return None
