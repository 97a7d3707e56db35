"""Per-request clients built from the app configuration."""

from zoneinfo import ZoneInfo

from flask import current_app, session

from ...client import AuthClient, EventRepositoryClient, MappingTokenStore
from ...utils.timezone import get_display_timezone

def display_timezone() -> ZoneInfo:
    return get_display_timezone(current_app.config.get('DISPLAY_TIMEZONE'))

def token_store() -> MappingTokenStore:
    """The admin token lives in the signed Flask session cookie."""
    return MappingTokenStore(session)

def event_repository() -> EventRepositoryClient:
    return EventRepositoryClient(
        base_url=current_app.config['API_BASE_URL'],
        token_store=token_store(),
        timeout=current_app.config['API_TIMEOUT'],
        session=current_app.config.get('API_HTTP_SESSION')
    )

def auth_client() -> AuthClient:
    return AuthClient(
        base_url=current_app.config['API_BASE_URL'],
        token_store=token_store(),
        timeout=current_app.config['API_TIMEOUT'],
        session=current_app.config.get('API_HTTP_SESSION')
    )
