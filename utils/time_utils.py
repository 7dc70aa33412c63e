"""Timestamp parsing and spoken-style clock formatting."""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional
from zoneinfo import ZoneInfo

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="time_utils")

# RFC 3339 allows up to nanosecond precision; datetime stops at microseconds.
_FRACTION_RE = re.compile(r"\.(\d{6})\d+")


def parse_timestamp(value: Optional[str]) -> Optional[dt.datetime]:
    """
    Parse an RFC 3339 timestamp into an aware datetime (naive input is taken as UTC).

    Returns None for empty or unparseable input.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(r".\1", text)
    try:
        parsed = dt.datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Ignoring unparseable timestamp %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def format_local_time(moment: dt.datetime, tz: Optional[ZoneInfo] = None) -> str:
    """
    Render `moment` as a 12-hour clock string such as "2:05 PM".

    `tz` defaults to the process's local time zone. Midnight and noon both
    render with hour 12.
    """
    local = moment.astimezone(tz) if tz is not None else moment.astimezone()
    suffix = "PM" if local.hour >= 12 else "AM"
    hour = local.hour % 12 or 12
    return f"{hour}:{local.minute:02d} {suffix}"
