"""Event model definition."""

import logging
from datetime import date, datetime
from typing import Any, Dict, Optional
from dataclasses import asdict, dataclass, fields
from zoneinfo import ZoneInfo

from ..forms.validator import ValidationContext, ValidationError, validate_event
from ..utils.codec import (
    FormatError,
    encode_date,
    encode_time,
    format_display_date,
    format_display_time,
    normalize_optional_text,
    parse_wire_date,
    parse_wire_timestamp,
    format_wire_timestamp,
)

logger = logging.getLogger(__name__)

# snake_case attribute -> camelCase key used by the backend
WIRE_FIELDS = {
    'title': 'title',
    'date': 'date',
    'end_date': 'endDate',
    'start_time': 'startTime',
    'description': 'description',
    'venue': 'venue',
    'location': 'location',
    'image_url': 'imageUrl',
    'ticket_url': 'ticketUrl',
}

OPTIONAL_TEXT_FIELDS = ('description', 'venue', 'location', 'image_url', 'ticket_url')

def _parse_audit_timestamp(data: Dict[str, Any], key: str) -> Optional[datetime]:
    value = data.get(key)
    if not value:
        return None
    try:
        return parse_wire_timestamp(value)
    except FormatError as e:
        logger.warning(f"Invalid datetime format for {key}: {e}")
        return None

@dataclass
class Event:
    """
    Event model representing one show as stored by the backend.

    Fields:
        id: Identifier assigned by the backend
        title: Event title
        date: Calendar date the event starts on
        end_date: Last calendar day of the event (optional)
        start_time: Instant carrying the local start time of day (optional)
        description: Free text description (optional)
        venue: Name of the venue (optional)
        location: Address of the venue (optional)
        image_url: URL of the event image (optional)
        ticket_url: URL where tickets are sold (optional)
        created_at: When the backend created the event
        updated_at: When the backend last changed the event
    """
    id: Optional[Any]
    title: str
    date: date
    end_date: Optional[date] = None
    start_time: Optional[datetime] = None
    description: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    ticket_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def comparison_date(self) -> date:
        """Day used to decide whether the event is upcoming or past."""
        return self.end_date or self.date

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Event':
        """
        Convert a backend event record to an Event object.

        Args:
            data: Dictionary containing event data from the API

        Returns:
            Event: Event object

        Raises:
            ValidationError: If required fields are missing or invalid
            FormatError: If the record is not a JSON object
        """
        if not isinstance(data, dict):
            raise FormatError(f"Event record must be an object, got {type(data).__name__}", data)

        values = {name: data.get(key) for name, key in WIRE_FIELDS.items()}
        errors = validate_event(values, ValidationContext.WIRE)
        if errors:
            raise ValidationError(errors)

        return cls(
            id=data.get('id'),
            title=values['title'],
            date=parse_wire_date(values['date']),
            end_date=parse_wire_date(values['end_date']) if values['end_date'] else None,
            start_time=parse_wire_timestamp(values['start_time']) if values['start_time'] else None,
            description=normalize_optional_text(values['description']),
            venue=normalize_optional_text(values['venue']),
            location=normalize_optional_text(values['location']),
            image_url=normalize_optional_text(values['image_url']),
            ticket_url=normalize_optional_text(values['ticket_url']),
            created_at=_parse_audit_timestamp(data, 'createdAt'),
            updated_at=_parse_audit_timestamp(data, 'updatedAt'),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation of the event."""
        data = {
            'id': self.id,
            'title': self.title,
            'date': encode_date(format_display_date(self.date)),
            'endDate': encode_date(format_display_date(self.end_date)) if self.end_date else None,
            'startTime': format_wire_timestamp(self.start_time) if self.start_time else None,
            'createdAt': format_wire_timestamp(self.created_at) if self.created_at else None,
            'updatedAt': format_wire_timestamp(self.updated_at) if self.updated_at else None,
        }
        for name in OPTIONAL_TEXT_FIELDS:
            data[WIRE_FIELDS[name]] = getattr(self, name)
        return data

    def to_summary_string(self, tz: Optional[ZoneInfo] = None) -> str:
        """One-line description used in logs."""
        when = format_display_date(self.date)
        if self.end_date and self.end_date != self.date:
            when = f"{when} - {format_display_date(self.end_date)}"
        if self.start_time:
            when = f"{when} {format_display_time(self.start_time, tz)}"
        where = ', '.join(part for part in (self.venue, self.location) if part)
        return f"{self.title} ({when}){' @ ' + where if where else ''}"

@dataclass
class EventDraft:
    """
    In-progress form state for one event.

    Every field holds the text shown in the form; an empty string means
    the field was left blank. Dates use DD.MM.YYYY and the start time HH:mm.
    """
    title: str = ''
    date: str = ''
    end_date: str = ''
    start_time: str = ''
    description: str = ''
    venue: str = ''
    location: str = ''
    image_url: str = ''
    ticket_url: str = ''

    @classmethod
    def field_names(cls):
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_event(cls, event: Event, tz: Optional[ZoneInfo] = None) -> 'EventDraft':
        """Decode a stored event into display strings."""
        return cls(
            title=event.title or '',
            date=format_display_date(event.date),
            end_date=format_display_date(event.end_date) if event.end_date else '',
            start_time=format_display_time(event.start_time, tz) if event.start_time else '',
            description=event.description or '',
            venue=event.venue or '',
            location=event.location or '',
            image_url=event.image_url or '',
            ticket_url=event.ticket_url or '',
        )

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)

    def to_wire(self, tz: Optional[ZoneInfo] = None) -> Dict[str, Any]:
        """
        Encode the draft into the JSON body sent to the backend.

        Raises:
            FormatError: If a date or time field is not in display format
        """
        end_date = self.end_date.strip()
        start_time = self.start_time.strip()
        data = {
            'title': self.title.strip(),
            'date': encode_date(self.date.strip()),
            'endDate': encode_date(end_date) if end_date else None,
            'startTime': encode_time(start_time, tz) if start_time else None,
        }
        for name in OPTIONAL_TEXT_FIELDS:
            data[WIRE_FIELDS[name]] = normalize_optional_text(getattr(self, name))
        return data
