"""Rule set for event drafts and backend event records.

Every rule runs; the result maps each offending field to its message so a
form can show all problems at once. An empty mapping means the event is valid.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import urlparse

from ..utils.codec import (
    FormatError,
    parse_display_date,
    parse_display_time,
    parse_wire_date,
    parse_wire_timestamp,
)

class ValidationContext(Enum):
    """Where the values being validated come from."""

    # Admin create/edit form: display formats, venue and address required
    ADMIN_FORM = 'admin_form'
    # Records exchanged with the backend: wire formats, venue and address optional
    WIRE = 'wire'

TITLE_REQUIRED = "Title is required."
DATE_REQUIRED = "Start date is required."
DATE_INVALID = "Start date is invalid."
END_DATE_INVALID = "Invalid end date."
START_TIME_INVALID = "Invalid start time."
VENUE_REQUIRED = "Venue is required."
LOCATION_REQUIRED = "Address is required."
URL_INVALID = "Invalid URL."

class ValidationError(ValueError):
    """Raised when event values violate one or more rules."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        details = '; '.join(f"{field}: {message}" for field, message in self.errors.items())
        super().__init__(f"Invalid event: {details}")

def _text(values: Mapping[str, Any], field: str) -> str:
    value = values.get(field)
    if value is None:
        return ''
    return str(value).strip()

def _parse_date(value: str, context: ValidationContext):
    if context is ValidationContext.WIRE:
        return parse_wire_date(value)
    return parse_display_date(value)

def _parse_time(value: str, context: ValidationContext):
    if context is ValidationContext.WIRE:
        return parse_wire_timestamp(value)
    return parse_display_time(value)

def is_valid_url(value: str) -> bool:
    """Syntactic check for an absolute http(s) URL."""
    if any(ch.isspace() for ch in value):
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)

def check_title(values, context) -> Optional[str]:
    if not _text(values, 'title'):
        return TITLE_REQUIRED
    return None

def check_date(values, context) -> Optional[str]:
    value = _text(values, 'date')
    if not value:
        return DATE_REQUIRED
    try:
        _parse_date(value, context)
    except FormatError:
        return DATE_INVALID
    return None

def check_end_date(values, context) -> Optional[str]:
    value = _text(values, 'end_date')
    if not value:
        return None
    try:
        end = _parse_date(value, context)
    except FormatError:
        return END_DATE_INVALID
    try:
        start = _parse_date(_text(values, 'date'), context)
    except FormatError:
        # Start date problems are reported on the start date alone
        return None
    if end < start:
        return END_DATE_INVALID
    return None

def check_start_time(values, context) -> Optional[str]:
    value = _text(values, 'start_time')
    if not value:
        return None
    try:
        _parse_time(value, context)
    except FormatError:
        return START_TIME_INVALID
    return None

def _required_in_form(field: str, message: str) -> Callable[[Mapping[str, Any], ValidationContext], Optional[str]]:
    def check(values, context) -> Optional[str]:
        if context is ValidationContext.ADMIN_FORM and not _text(values, field):
            return message
        return None
    return check

def _optional_url(field: str) -> Callable[[Mapping[str, Any], ValidationContext], Optional[str]]:
    def check(values, context) -> Optional[str]:
        value = _text(values, field)
        if value and not is_valid_url(value):
            return URL_INVALID
        return None
    return check

@dataclass(frozen=True)
class FieldRule:
    """A check that yields an error message for one field, or None."""

    field: str
    check: Callable[[Mapping[str, Any], ValidationContext], Optional[str]]

EVENT_RULES: List[FieldRule] = [
    FieldRule('title', check_title),
    FieldRule('date', check_date),
    FieldRule('end_date', check_end_date),
    FieldRule('start_time', check_start_time),
    FieldRule('venue', _required_in_form('venue', VENUE_REQUIRED)),
    FieldRule('location', _required_in_form('location', LOCATION_REQUIRED)),
    FieldRule('image_url', _optional_url('image_url')),
    FieldRule('ticket_url', _optional_url('ticket_url')),
]

def validate_event(
    values: Mapping[str, Any],
    context: ValidationContext = ValidationContext.ADMIN_FORM,
) -> Dict[str, str]:
    """
    Run every rule against the given field values.

    Args:
        values: Field values keyed by snake_case field name
        context: Which formats and required fields apply

    Returns:
        Dict[str, str]: Field name -> message for every violation
    """
    errors = {}
    for rule in EVENT_RULES:
        message = rule.check(values, context)
        if message:
            errors[rule.field] = message
    return errors
