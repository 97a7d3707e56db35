from .events import events_bp
from .admin import admin_bp

__all__ = ['events_bp', 'admin_bp']
