"""Clients for the external events backend."""

from .errors import (
    EventClientError,
    AuthenticationError,
    NotFoundError,
    ServerError
)
from .auth import (
    TOKEN_STORAGE_KEY,
    TokenStore,
    MappingTokenStore,
    FileTokenStore,
    LoginResult,
    AuthClient
)
from .events import DeleteResult, EventRepositoryClient

__all__ = [
    # Exceptions
    'EventClientError',
    'AuthenticationError',
    'NotFoundError',
    'ServerError',

    # Authentication
    'TOKEN_STORAGE_KEY',
    'TokenStore',
    'MappingTokenStore',
    'FileTokenStore',
    'LoginResult',
    'AuthClient',

    # Events
    'DeleteResult',
    'EventRepositoryClient',
]
