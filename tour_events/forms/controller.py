"""Create/edit session for one event.

The controller owns the draft while the admin edits it. It validates and
encodes the draft before anything reaches the network, sends exactly one
create or update per submit and never retries.

States:
    LOADING    -> EDITING    existing event fetched and decoded (edit mode)
    EDITING    -> SUBMITTING draft valid, request sent
    SUBMITTING -> SAVED      request succeeded (terminal)
    SUBMITTING -> EDITING    request failed, error shown
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional
from zoneinfo import ZoneInfo

from ..client.errors import AuthenticationError, EventClientError
from ..models.event import Event, EventDraft
from ..utils.codec import FormatError
from .validator import ValidationContext, validate_event

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = 'Error loading event data.'
CREATED_MESSAGE = 'Event created successfully.'
UPDATED_MESSAGE = 'Event updated successfully.'

class FormState(Enum):
    LOADING = 'loading'
    EDITING = 'editing'
    SUBMITTING = 'submitting'
    SAVED = 'saved'

class Redirect(Enum):
    """Where the surrounding UI should navigate next."""
    LOGIN = 'login'
    EVENT_LIST = 'event_list'

@dataclass
class Notification:
    text: str
    kind: str  # 'success' or 'error'

class EventFormController:
    """State machine driving one create or edit session."""

    def __init__(
        self,
        repository,
        event_id=None,
        tz: Optional[ZoneInfo] = None,
        on_navigate: Optional[Callable[[Redirect], None]] = None
    ):
        """
        Args:
            repository: EventRepositoryClient (or anything with get/create/update)
            event_id: Event to edit; None starts a new event
            tz: Timezone start times are shown in, defaults to the display timezone
            on_navigate: Called with the redirect target when the session ends
        """
        self.repository = repository
        self.event_id = event_id
        self.tz = tz
        self.on_navigate = on_navigate

        self.state = FormState.LOADING if self.is_edit_mode else FormState.EDITING
        self.draft = EventDraft()
        self.errors: Dict[str, str] = {}
        self.notification: Optional[Notification] = None
        self.load_error: Optional[str] = None
        self.redirect: Optional[Redirect] = None
        self.saved_event: Optional[Event] = None
        self._mounted = False

    @property
    def is_edit_mode(self) -> bool:
        return self.event_id is not None

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    def _navigate(self, target: Redirect) -> None:
        self.redirect = target
        if self.on_navigate:
            self.on_navigate(target)

    def mount(self) -> None:
        """Start the session; in edit mode this loads the event into the draft."""
        self._mounted = True
        if not self.is_edit_mode:
            self.state = FormState.EDITING
            return

        self.state = FormState.LOADING
        try:
            event = self.repository.get(self.event_id)
        except AuthenticationError:
            if self._mounted:
                self._navigate(Redirect.LOGIN)
            return
        except EventClientError as e:
            logger.error(f"Error loading event {self.event_id} for edit: {e}")
            if self._mounted:
                self.load_error = LOAD_ERROR_MESSAGE
            return

        if not self._mounted:
            logger.debug(f"Form unmounted while loading event {self.event_id}, discarding result")
            return

        if event is None:
            logger.warning(f"Event with ID {self.event_id} not found")
            self._navigate(Redirect.EVENT_LIST)
            return

        try:
            draft = EventDraft.from_event(event, self.tz)
        except FormatError as e:
            logger.error(f"Cannot show event {self.event_id} in the form: {e}")
            self.load_error = LOAD_ERROR_MESSAGE
            return

        self.draft = draft
        self.state = FormState.EDITING

    def unmount(self) -> None:
        """Results of calls still in flight are discarded after this."""
        self._mounted = False

    def change(self, field: str, value: str) -> None:
        """Update one draft field and clear its error; other errors stay."""
        if field not in EventDraft.field_names():
            raise ValueError(f"Unknown event field: {field}")
        setattr(self.draft, field, value if value is not None else '')
        self.errors.pop(field, None)

    def update_fields(self, values: Dict[str, str]) -> None:
        """Apply several field changes, e.g. from a submitted HTML form."""
        for field, value in values.items():
            if field in EventDraft.field_names():
                self.change(field, value)

    def submit(self) -> bool:
        """
        Validate the draft and send it to the backend.

        Returns:
            bool: True if the backend saved the event
        """
        if self.state is FormState.SUBMITTING:
            logger.warning("Submit ignored, a previous submit is still in flight")
            return False
        if self.state is not FormState.EDITING:
            logger.warning(f"Submit ignored in state {self.state.value}")
            return False

        errors = validate_event(self.draft.as_dict(), ValidationContext.ADMIN_FORM)
        if errors:
            self.errors = errors
            logger.info(f"Draft has {len(errors)} validation error(s): {', '.join(errors)}")
            return False

        payload = self.draft.to_wire(self.tz)
        self.errors = {}
        self.notification = None
        self.state = FormState.SUBMITTING

        try:
            if self.is_edit_mode:
                event = self.repository.update(self.event_id, payload)
            else:
                event = self.repository.create(payload)
        except AuthenticationError:
            if self._mounted:
                self.state = FormState.EDITING
                self._navigate(Redirect.LOGIN)
            return False
        except EventClientError as e:
            logger.error(f"Error saving event: {e}")
            if self._mounted:
                self.state = FormState.EDITING
                self.notification = Notification(f"Error saving event: {e}", 'error')
            return False

        if not self._mounted:
            logger.debug("Form unmounted during submit, discarding result")
            return True

        self.saved_event = event
        self.state = FormState.SAVED
        if self.is_edit_mode:
            self.notification = Notification(UPDATED_MESSAGE, 'success')
        else:
            self.notification = Notification(CREATED_MESSAGE, 'success')
            self.draft = EventDraft()
        self._navigate(Redirect.EVENT_LIST)
        return True
