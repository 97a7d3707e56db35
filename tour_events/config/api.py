"""Events backend configuration."""

import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass

from .environment import IS_PRODUCTION_ENVIRONMENT, get_app_mode

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = 'http://localhost:3001/api'

# APP_MODE -> environment variable holding the backend URL for that mode
API_URL_VARIABLES = {
    'vercel': 'API_URL_VERCEL',
    'production': 'API_URL_PROD',
    'dev': 'API_URL_DEV',
}

def resolve_api_base_url(app_mode: Optional[str] = None) -> str:
    """
    Pick the backend base URL for the given app mode.

    Unknown or missing modes use the development URL. When the selected
    variable is not set, the local default is used and an error is logged.
    """
    mode = get_app_mode(app_mode)
    variable = API_URL_VARIABLES[mode]
    base_url = os.environ.get(variable)
    if not base_url:
        logger.error(
            f"API base URL not defined for mode: {mode} "
            f"({variable} is not set). Falling back to {DEFAULT_API_BASE_URL}"
        )
        base_url = DEFAULT_API_BASE_URL
    return base_url.rstrip('/')

@dataclass
class ApiConfig:
    """Events backend configuration settings."""

    base_url: str = ""
    timeout: Optional[int] = None
    display_timezone: str = ""
    token_file: Optional[Path] = None

    def __post_init__(self):
        """Fill unset values from the environment."""
        if not self.base_url:
            self.base_url = resolve_api_base_url()
        if self.timeout is None:
            self.timeout = int(os.environ.get('API_TIMEOUT', '30'))
        if not self.display_timezone:
            self.display_timezone = os.environ.get('DISPLAY_TIMEZONE', 'Europe/Berlin')
        if self.token_file is None:
            default_path = Path.home() / '.tour_events' / 'token.json'
            self.token_file = Path(os.environ.get('TOKEN_FILE', default_path))

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            'base_url': self.base_url,
            'timeout': self.timeout,
            'display_timezone': self.display_timezone,
            'token_file': str(self.token_file),
            'production': IS_PRODUCTION_ENVIRONMENT,
        }

    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.base_url.startswith(('http://', 'https://')):
            raise ValueError(f"API base URL must be an http(s) URL, got: {self.base_url!r}")
        if self.timeout <= 0:
            raise ValueError("API_TIMEOUT must be a positive number of seconds")
        return True

def get_api_config() -> ApiConfig:
    """Get the backend configuration with validation."""
    config = ApiConfig()
    config.validate()
    return config
