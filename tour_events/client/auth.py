"""Admin authentication against the backend and token persistence."""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import MutableMapping, Optional

import requests

from .errors import AuthenticationError

logger = logging.getLogger(__name__)

TOKEN_STORAGE_KEY = 'jwtToken'

class TokenStore(ABC):
    """Interface for persisting the admin bearer token.

    Presence of a token is the only client-side authentication signal;
    expiry is detected by the backend answering 401.
    """

    @abstractmethod
    def get_token(self) -> Optional[str]:
        """Return the stored token, or None if signed out."""
        ...

    @abstractmethod
    def store_token(self, token: str) -> None:
        ...

    @abstractmethod
    def clear_token(self) -> None:
        ...

class MappingTokenStore(TokenStore):
    """Keeps the token in a dict-like object, e.g. a Flask session."""

    def __init__(self, storage: Optional[MutableMapping] = None):
        self.storage = storage if storage is not None else {}

    def get_token(self) -> Optional[str]:
        return self.storage.get(TOKEN_STORAGE_KEY)

    def store_token(self, token: str) -> None:
        self.storage[TOKEN_STORAGE_KEY] = token

    def clear_token(self) -> None:
        self.storage.pop(TOKEN_STORAGE_KEY, None)

class FileTokenStore(TokenStore):
    """Keeps the token in a small JSON file, for scripts run from a shell."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable token file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get_token(self) -> Optional[str]:
        return self._read().get(TOKEN_STORAGE_KEY)

    def store_token(self, token: str) -> None:
        data = self._read()
        data[TOKEN_STORAGE_KEY] = token
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding='utf-8')

    def clear_token(self) -> None:
        data = self._read()
        if data.pop(TOKEN_STORAGE_KEY, None) is not None:
            self.path.write_text(json.dumps(data), encoding='utf-8')

@dataclass
class LoginResult:
    """Outcome of a login attempt."""
    success: bool = False
    error: Optional[str] = None

class AuthClient:
    """Client for the backend's login endpoint."""

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

    def login(self, username: Optional[str], password: Optional[str]) -> LoginResult:
        """
        Exchange credentials for a token and store it.

        Failures are reported in the result rather than raised, so the
        login form can show the message next to the fields.
        """
        if not username or not password:
            return LoginResult(error='Username and password are required.')

        endpoint = f"{self.base_url}/auth/login"
        try:
            response = self.session.post(
                endpoint,
                json={'username': username, 'password': password},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Login network error: {e}")
            return LoginResult(error='Connection error.')

        try:
            result = response.json()
        except ValueError:
            result = {'message': 'Unknown response.'}
        if not isinstance(result, dict):
            result = {'message': 'Unknown response.'}

        if not response.ok:
            logger.error(f"Login failed: {response.status_code} {result.get('message')}")
            return LoginResult(error=result.get('message') or 'Login failed.')

        token = result.get('token')
        if not token:
            logger.error("Login response did not contain a token")
            return LoginResult(error='Login failed.')

        self.token_store.store_token(token)
        logger.info("Login successful")
        return LoginResult(success=True)

    def signout(self) -> None:
        self.token_store.clear_token()
        logger.info("Signed out")

    def is_authenticated(self) -> bool:
        return self.token_store.get_token() is not None

    def require_auth(self) -> None:
        """
        Raises:
            AuthenticationError: If no token is stored
        """
        if not self.is_authenticated():
            logger.info("Authentication required")
            raise AuthenticationError("Authentication required")
