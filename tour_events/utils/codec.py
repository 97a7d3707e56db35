"""Conversion between display strings and wire timestamps.

Dates are timezone-less calendar dates. On the wire they are written as
midnight UTC of the day (``2025-06-20T00:00:00.000Z``) and decoded back
to the calendar date written in the timestamp, so a date never shifts
with the viewer's offset.

Times of day are local clock times in the display timezone. On the wire
they are written as an instant on the fixed reference date 1970-01-01;
only hour and minute are meaningful when decoding.

Display formats:
    date: DD.MM.YYYY
    time: HH:mm
"""

import re
from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfo

from .timezone import UTC, get_display_timezone

DISPLAY_DATE_PATTERN = re.compile(r'([0-9]{2})\.([0-9]{2})\.([0-9]{4})')
DISPLAY_TIME_PATTERN = re.compile(r'([0-9]{2}):([0-9]{2})')

# Placeholder day carried by encoded times
REFERENCE_DATE = date(1970, 1, 1)

class FormatError(ValueError):
    """Raised when a value cannot be converted between display and wire format."""

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value

def format_wire_timestamp(moment: datetime) -> str:
    """Serialize an aware datetime the way the backend writes timestamps."""
    moment = moment.astimezone(UTC)
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        f".{moment.microsecond // 1000:03d}Z"
    )

def parse_wire_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp from the backend.

    Timestamps without an offset are taken to be UTC.

    Raises:
        FormatError: If the value is not a string or not a valid instant
    """
    if not isinstance(value, str) or not value.strip():
        raise FormatError(f"Not a timestamp: {value!r}", value)
    try:
        moment = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError as e:
        raise FormatError(f"Invalid timestamp {value!r}: {e}", value) from e
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    try:
        moment.astimezone(UTC)
    except OverflowError as e:
        raise FormatError(f"Timestamp out of range {value!r}: {e}", value) from e
    return moment

def parse_wire_date(value: str) -> date:
    """Calendar date written in a wire timestamp."""
    return parse_wire_timestamp(value).date()

def parse_display_date(value: str) -> date:
    """
    Parse a DD.MM.YYYY string into a date.

    Raises:
        FormatError: On a non-matching format or an impossible calendar date
    """
    match = DISPLAY_DATE_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise FormatError(f"Date must be in DD.MM.YYYY format, got {value!r}", value)
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise FormatError(f"Invalid calendar date {value!r}: {e}", value) from e

def parse_display_time(value: str) -> time:
    """
    Parse an HH:mm string into a time of day.

    Raises:
        FormatError: On a non-matching format or out-of-range hour/minute
    """
    match = DISPLAY_TIME_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise FormatError(f"Time must be in HH:mm format, got {value!r}", value)
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise FormatError(f"Time out of range: {value!r}", value)
    return time(hour, minute)

def format_display_date(value: date) -> str:
    return f"{value.day:02d}.{value.month:02d}.{value.year:04d}"

def decode_date(wire: str) -> str:
    """Wire timestamp -> DD.MM.YYYY."""
    return format_display_date(parse_wire_date(wire))

def encode_date(display: str) -> str:
    """DD.MM.YYYY -> wire timestamp at midnight UTC of that day."""
    day = parse_display_date(display)
    return format_wire_timestamp(datetime.combine(day, time(0, 0), tzinfo=UTC))

def format_display_time(moment: datetime, tz: Optional[ZoneInfo] = None) -> str:
    """
    Raises:
        FormatError: If the local time falls outside the supported years
    """
    try:
        local = moment.astimezone(tz or get_display_timezone())
    except OverflowError as e:
        raise FormatError(f"Time out of range: {moment!r}", moment) from e
    return f"{local.hour:02d}:{local.minute:02d}"

def decode_time(wire: str, tz: Optional[ZoneInfo] = None) -> str:
    """Wire timestamp -> HH:mm in the display timezone."""
    return format_display_time(parse_wire_timestamp(wire), tz)

def encode_time(display: str, tz: Optional[ZoneInfo] = None) -> str:
    """HH:mm -> wire timestamp on the reference date."""
    clock = parse_display_time(display)
    local = datetime.combine(REFERENCE_DATE, clock, tzinfo=tz or get_display_timezone())
    return format_wire_timestamp(local)

def normalize_optional_text(value: Optional[str]) -> Optional[str]:
    """Empty or blank text is sent as null, never as an empty string."""
    if value is None:
        return None
    value = value.strip()
    return value or None
