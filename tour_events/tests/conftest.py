"""Pytest configuration and shared fixtures."""

import pytest

from tour_events.client import EventRepositoryClient, MappingTokenStore, TOKEN_STORAGE_KEY
from .helpers import FakeSession

@pytest.fixture(autouse=True)
def display_timezone(monkeypatch):
    monkeypatch.setenv('DISPLAY_TIMEZONE', 'Europe/Berlin')
    return 'Europe/Berlin'

@pytest.fixture
def fake_session():
    return FakeSession()

@pytest.fixture
def token_store():
    return MappingTokenStore({TOKEN_STORAGE_KEY: 'test-token'})

@pytest.fixture
def repository(fake_session, token_store):
    return EventRepositoryClient('http://api.test/api', token_store, timeout=5, session=fake_session)
