"""Configuration package.

The environment module is imported first so .env values are loaded
before any other settings are read.
"""

from .environment import IS_PRODUCTION_ENVIRONMENT, get_app_mode
from .api import ApiConfig, get_api_config, resolve_api_base_url
from .web import Config

__all__ = [
    'IS_PRODUCTION_ENVIRONMENT',
    'get_app_mode',
    'ApiConfig',
    'get_api_config',
    'resolve_api_base_url',
    'Config',
]
