import os

from .api import resolve_api_base_url

class Config:
    # Flask configuration
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev')
    DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'

    # API configuration
    API_BASE_URL = resolve_api_base_url()
    API_TIMEOUT = int(os.getenv('API_TIMEOUT', '30'))
    DISPLAY_TIMEZONE = os.getenv('DISPLAY_TIMEZONE', 'Europe/Berlin')
