import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import requests

from ..models.event import Event
from .auth import TokenStore
from .errors import AuthenticationError, NotFoundError, ServerError

logger = logging.getLogger(__name__)

# Empty date/time values are sent as null
NULLABLE_WIRE_FIELDS = ('date', 'endDate', 'startTime')

@dataclass
class DeleteResult:
    success: bool
    status: int

class EventRepositoryClient:
    """Client for the events endpoints of the backend."""

    def __init__(
        self,
        base_url: str,
        token_store: TokenStore,
        timeout: int = 30,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.token_store = token_store
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        authenticated: bool = True,
        payload: Optional[Dict[str, Any]] = None
    ) -> requests.Response:
        """
        Send one request to the backend.

        Raises:
            AuthenticationError: If authentication is required and no token is
                stored, or the backend answers 401
            ServerError: If the backend cannot be reached
        """
        endpoint = f"{self.base_url}{path}"
        headers = {'Content-Type': 'application/json'}

        if authenticated:
            token = self.token_store.get_token()
            if not token:
                logger.warning(f"No token stored, cannot {method} {path}")
                raise AuthenticationError("Authentication required")
            headers['Authorization'] = f"Bearer {token}"

        logger.info(f"{method} {endpoint}")
        try:
            response = self.session.request(
                method,
                endpoint,
                headers=headers,
                json=payload,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Failed to reach events API: {e}")
            raise ServerError(f"Failed to reach events API: {e}") from e

        if authenticated and response.status_code == 401:
            logger.warning(f"Unauthorized response for {method} {path}, clearing token")
            self.token_store.clear_token()
            raise AuthenticationError("Session expired, please sign in again")

        return response

    def _error(self, response: requests.Response, action: str) -> ServerError:
        body = response.text or ''
        logger.error(f"Failed to {action}: {response.status_code} {response.reason}")
        return ServerError(
            f"Failed to {action}: {response.status_code} {response.reason} - {body}",
            status_code=response.status_code,
            body=body
        )

    def _json(self, response: requests.Response, action: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Error parsing JSON response to {action}: {e}")
            raise ServerError(
                f"Failed to parse {action} JSON: {e} - Response body: \"{response.text}\"",
                status_code=response.status_code,
                body=response.text
            ) from e

    def _to_event(self, data: Any, action: str) -> Event:
        try:
            return Event.from_dict(data)
        except ValueError as e:
            logger.error(f"Invalid event data in response to {action}: {e}")
            raise ServerError(f"Invalid event data received from server: {e}") from e

    def _prepare_body(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        body = dict(data)
        for key in NULLABLE_WIRE_FIELDS:
            if key in body:
                body[key] = body[key] or None
        return body

    def list(self) -> List[Event]:
        """
        Fetch all events. Does not require authentication.

        Returns:
            List[Event]: Events in the order the backend returned them;
                empty for a 204 or empty response. Records that fail
                validation are logged and skipped.

        Raises:
            ServerError: If the request fails or the response is invalid
        """
        response = self._request('GET', '/events', authenticated=False)
        if not response.ok:
            raise self._error(response, 'fetch events')

        if response.status_code == 204 or not response.content or not response.content.strip():
            logger.info("Received empty or 204 response for events")
            return []

        events_data = self._json(response, 'fetch events')
        if not isinstance(events_data, list):
            logger.error(f"Fetched data is not a list: {type(events_data).__name__}")
            raise ServerError("Invalid data format received from server.", status_code=response.status_code)

        events = []
        for item in events_data:
            try:
                events.append(Event.from_dict(item))
            except ValueError as e:
                # One bad record must not hide the rest of the list
                event_id = item.get('id') if isinstance(item, dict) else None
                logger.warning(f"Skipping invalid event {event_id} in list response: {e}")
        logger.info(f"Fetched {len(events)} events")
        return events

    def get(self, event_id) -> Optional[Event]:
        """
        Fetch one event.

        Returns:
            Optional[Event]: The event, or None if the backend answers 404

        Raises:
            AuthenticationError: If not signed in or the token was rejected
            ServerError: On any other failure
        """
        response = self._request('GET', f"/events/{event_id}")
        if response.status_code == 404:
            logger.info(f"Event {event_id} not found")
            return None
        if not response.ok:
            raise self._error(response, f"fetch event {event_id}")
        return self._to_event(self._json(response, f"fetch event {event_id}"), f"fetch event {event_id}")

    def require(self, event_id) -> Event:
        """Like get(), for callers where a missing event is an error.

        Raises:
            NotFoundError: If the backend answers 404
        """
        event = self.get(event_id)
        if event is None:
            raise NotFoundError(event_id)
        return event

    def create(self, data: Mapping[str, Any]) -> Event:
        """
        Create an event from a wire-format draft.

        Raises:
            AuthenticationError: If not signed in or the token was rejected
            ServerError: On any other failure
        """
        response = self._request('POST', '/events', payload=self._prepare_body(data))
        if not response.ok:
            raise self._error(response, 'create event')
        event = self._to_event(self._json(response, 'create event'), 'create event')
        logger.info(f"Event created: {event.to_summary_string()}")
        return event

    def update(self, event_id, data: Mapping[str, Any]) -> Event:
        """
        Update an event with a (partial) wire-format draft.

        Raises:
            AuthenticationError: If not signed in or the token was rejected
            ServerError: On any other failure
        """
        response = self._request('PUT', f"/events/{event_id}", payload=self._prepare_body(data))
        if not response.ok:
            raise self._error(response, f"update event {event_id}")
        event = self._to_event(self._json(response, f"update event {event_id}"), f"update event {event_id}")
        logger.info(f"Event {event_id} updated")
        return event

    def delete(self, event_id) -> DeleteResult:
        """
        Delete an event. Any 2xx status, including 204, counts as success.

        Raises:
            AuthenticationError: If not signed in or the token was rejected
            ServerError: On any other failure
        """
        response = self._request('DELETE', f"/events/{event_id}")
        if not response.ok:
            raise self._error(response, f"delete event {event_id}")
        logger.info(f"Event {event_id} deleted (status {response.status_code})")
        return DeleteResult(success=True, status=response.status_code)
