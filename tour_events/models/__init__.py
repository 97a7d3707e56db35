"""Models package initialization."""

from .event import Event, EventDraft

__all__ = ['Event', 'EventDraft']
