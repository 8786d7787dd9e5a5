"""
Clock command encoding.

The clock firmware accepts one ASCII command per line:

    T<epoch seconds>   set absolute time
    O<offset>          set UTC offset in hours, -12..12
    DON / DOFF         enable / disable daylight saving time
"""

import re
import time
from datetime import datetime

from nixieclock.errors import UsageError

OFFSET_MIN = -12
OFFSET_MAX = 12

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT_HINT = (
    "Use plain seconds since epoch or a ISO 8601 Date without milliseconds, "
    'like "2015-10-27 18:43:25"'
)

EPOCH_RE = re.compile(r"\d{10}", re.ASCII)
OFFSET_RE = re.compile(r"-?\d{1,2}", re.ASCII)


def parse_time(value, now=None):
    """Return epoch seconds for a --time value.

    Accepts exactly 10 digits (epoch seconds, taken verbatim) or a local
    time in DATE_FORMAT. None means the current wall-clock time.
    """
    if value is None:
        return int(now if now is not None else time.time())
    if EPOCH_RE.fullmatch(value):
        return int(value)
    invalid = UsageError(f"Invalid date format: {value}\n{DATE_FORMAT_HINT}")
    # strptime also accepts non-ASCII digits
    if not value.isascii():
        raise invalid
    try:
        dt = datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        raise invalid from None
    # Naive datetime: timestamp() interprets it in the local time zone
    return int(dt.timestamp())


def time_command(value=None, now=None):
    return f"T{parse_time(value, now)}"


def offset_command(value):
    """Build the UTC offset command, rejecting values outside -12..12."""
    if value is None or not OFFSET_RE.fullmatch(value):
        raise UsageError(f"Invalid offset: {value}")
    offset = int(value)
    if offset < OFFSET_MIN or offset > OFFSET_MAX:
        raise UsageError(
            f"Invalid offset: {offset} - must be between {OFFSET_MIN} and {OFFSET_MAX}"
        )
    return f"O{offset}"


def dst_command(setting):
    setting_lower = setting.lower()
    if setting_lower == "on":
        return "DON"
    if setting_lower == "off":
        return "DOFF"
    raise UsageError(
        f"Invalid option for daylight saving time: {setting} "
        '- only "on" and "off" are allowed'
    )
