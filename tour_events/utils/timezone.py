"""Timezone helpers for the display side of the site."""

import os
from datetime import datetime, date
from typing import Optional
from zoneinfo import ZoneInfo

DEFAULT_DISPLAY_TIMEZONE = 'Europe/Berlin'
UTC = ZoneInfo('UTC')

def get_display_timezone(name: Optional[str] = None) -> ZoneInfo:
    """Return the zone in which times of day are shown to visitors and admins."""
    return ZoneInfo(name or os.environ.get('DISPLAY_TIMEZONE', DEFAULT_DISPLAY_TIMEZONE))

def now_local(tz: Optional[ZoneInfo] = None) -> datetime:
    """Current time in the display timezone."""
    return datetime.now(tz or get_display_timezone())

def today_local(tz: Optional[ZoneInfo] = None) -> date:
    """Current calendar date in the display timezone."""
    return now_local(tz).date()
