"""Errors raised by the backend clients."""

from typing import Optional

class EventClientError(Exception):
    """Base exception for errors talking to the events backend."""
    pass

class AuthenticationError(EventClientError):
    """Raised when the backend rejects the stored token (HTTP 401) or no token is stored.

    Callers redirect to the login page instead of showing an error.
    """
    pass

class NotFoundError(EventClientError):
    """Raised by callers that need an absent event to be an error."""

    def __init__(self, event_id):
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id

class ServerError(EventClientError):
    """Raised on non-success responses, transport failures and unparsable bodies."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ''):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
