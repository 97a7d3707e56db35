"""Environment configuration module.

Imported before anything that reads settings: it loads the .env file once,
then exposes the deployment environment and the backend mode.

Variables:
    ENVIRONMENT: 'development' or 'production' (decides how run.py serves the site)
    APP_MODE: 'dev', 'production' or 'vercel' (decides which backend URL is used)

In production the variables come from the hosting platform instead of a .env file.
"""

import os
import logging
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

ENVIRONMENTS = ('development', 'production')
APP_MODES = ('dev', 'production', 'vercel')

env_setting = os.environ.get('ENVIRONMENT', '').lower()
IS_PRODUCTION_ENVIRONMENT = env_setting == 'production'

if env_setting not in ENVIRONMENTS:
    logging.warning(
        f"Environment setting '{env_setting}' is invalid or not specified. "
        f"Expected one of {', '.join(ENVIRONMENTS)}. Defaulting to development environment."
    )

def get_app_mode(value: Optional[str] = None) -> str:
    """
    Backend mode from the argument or APP_MODE.

    Unknown or missing modes are reported and treated as 'dev'.
    """
    mode = (value if value is not None else os.environ.get('APP_MODE', '')).strip().lower()
    if mode not in APP_MODES:
        logging.getLogger(__name__).warning(
            f"App mode '{mode}' is invalid or not specified, using the dev backend"
        )
        return 'dev'
    return mode

__all__ = ['IS_PRODUCTION_ENVIRONMENT', 'APP_MODES', 'get_app_mode']
