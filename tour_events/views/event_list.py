"""Public and admin event lists with the upcoming/past filter."""

import logging
from datetime import date
from enum import Enum
from typing import Callable, List, Optional, Sequence
from zoneinfo import ZoneInfo

from ..client.errors import AuthenticationError, EventClientError
from ..forms.controller import Redirect
from ..models.event import Event
from ..utils.timezone import today_local

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = 'Error loading events.'

class EventFilter(Enum):
    ALL = 'all'
    UPCOMING = 'upcoming'
    PAST = 'past'

    @classmethod
    def parse(cls, value: Optional[str]) -> 'EventFilter':
        """Filter for a query string value; missing or unknown values mean ALL."""
        try:
            return cls((value or cls.ALL.value).lower())
        except ValueError:
            logger.warning(f"Unknown event filter {value!r}, showing all events")
            return cls.ALL

def is_event_past(event: Event, today: date) -> bool:
    """An event is past once its last day is before today."""
    return event.comparison_date < today

def filter_events(events: Sequence[Event], event_filter: EventFilter, today: date) -> List[Event]:
    """
    Apply the three-way filter without touching the source list.

    Original order is kept for every filter.
    """
    if event_filter is EventFilter.ALL:
        return list(events)
    if event_filter is EventFilter.UPCOMING:
        return [event for event in events if not is_event_past(event, today)]
    return [event for event in events if is_event_past(event, today)]

class PublicEventListView:
    """All events from the backend, filtered client-side."""

    def __init__(
        self,
        repository,
        tz: Optional[ZoneInfo] = None,
        today: Optional[Callable[[], date]] = None,
        on_navigate: Optional[Callable[[Redirect], None]] = None
    ):
        self.repository = repository
        self.tz = tz
        self._today = today or (lambda: today_local(self.tz))
        self.on_navigate = on_navigate

        self.events: List[Event] = []
        self.filtered_events: List[Event] = []
        self.active_filter = EventFilter.ALL
        self.is_loading = False
        self.error: Optional[str] = None
        self.redirect: Optional[Redirect] = None
        self._mounted = True

    def _navigate(self, target: Redirect) -> None:
        self.redirect = target
        if self.on_navigate:
            self.on_navigate(target)

    def _refresh(self) -> None:
        self.filtered_events = filter_events(self.events, self.active_filter, self._today())

    def unmount(self) -> None:
        self._mounted = False

    def load(self) -> None:
        """Fetch the list; failures are kept in `error` for inline display."""
        self.is_loading = True
        try:
            events = self.repository.list()
        except AuthenticationError:
            if self._mounted:
                self.is_loading = False
                self._navigate(Redirect.LOGIN)
            return
        except EventClientError as e:
            logger.error(f"Error fetching events: {e}")
            if self._mounted:
                self.is_loading = False
                self.error = LOAD_ERROR_MESSAGE
            return

        if not self._mounted:
            return
        self.events = events
        self.error = None
        self.is_loading = False
        self._refresh()

    def set_filter(self, event_filter: EventFilter) -> None:
        self.active_filter = event_filter
        self._refresh()

class AdminEventListView(PublicEventListView):
    """Event list for admins, with delete."""

    def delete(self, event_id, confirm: Callable[[Event], bool]) -> bool:
        """
        Delete an event after the admin confirms it.

        Args:
            event_id: ID of the event to delete
            confirm: Asked with the event; returning False cancels

        Returns:
            bool: True if the event was deleted
        """
        event = next((e for e in self.events if str(e.id) == str(event_id)), None)
        if event is None:
            logger.warning(f"Event {event_id} is not in the loaded list")
            return False
        if not confirm(event):
            logger.info(f"Deletion of event {event_id} cancelled")
            return False

        try:
            self.repository.delete(event.id)
        except AuthenticationError:
            if self._mounted:
                self._navigate(Redirect.LOGIN)
            return False
        except EventClientError as e:
            logger.error(f"Error deleting event {event_id}: {e}")
            if self._mounted:
                self.error = f"Error deleting event: {e}"
            return False

        if self._mounted:
            self.events = [e for e in self.events if e is not event]
            self._refresh()
        return True
