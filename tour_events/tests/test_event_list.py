"""Tests for the upcoming/past filter and the list views."""

from datetime import date
from unittest.mock import Mock

import pytest

from tour_events.client import AuthenticationError, EventRepositoryClient, MappingTokenStore, ServerError
from tour_events.forms.controller import Redirect
from tour_events.views.event_list import (
    AdminEventListView,
    EventFilter,
    PublicEventListView,
    filter_events,
    is_event_past,
)
from .helpers import make_event, make_response, wire_event

TODAY = date(2025, 6, 20)

@pytest.fixture
def events():
    return [
        make_event(1, day=date(2025, 6, 19)),
        make_event(2, day=date(2025, 6, 21)),
        make_event(3, day=date(2025, 6, 18), end_date=date(2025, 6, 20)),
        make_event(4, day=TODAY),
    ]

@pytest.fixture
def repository(events):
    repo = Mock(spec=EventRepositoryClient)
    repo.list.return_value = events
    return repo

class TestFilter:

    def test_yesterday_is_past(self):
        assert is_event_past(make_event(day=date(2025, 6, 19)), TODAY) is True

    def test_today_and_tomorrow_are_upcoming(self):
        assert is_event_past(make_event(day=TODAY), TODAY) is False
        assert is_event_past(make_event(day=date(2025, 6, 21)), TODAY) is False

    def test_multi_day_event_is_upcoming_until_its_last_day(self):
        event = make_event(day=date(2025, 6, 10), end_date=TODAY)
        assert is_event_past(event, TODAY) is False
        assert is_event_past(event, date(2025, 6, 21)) is True

    def test_filters_keep_order(self, events):
        assert [e.id for e in filter_events(events, EventFilter.ALL, TODAY)] == [1, 2, 3, 4]
        assert [e.id for e in filter_events(events, EventFilter.UPCOMING, TODAY)] == [2, 3, 4]
        assert [e.id for e in filter_events(events, EventFilter.PAST, TODAY)] == [1]

    def test_filter_does_not_mutate_source(self, events):
        filter_events(events, EventFilter.PAST, TODAY)
        assert len(events) == 4

    @pytest.mark.parametrize('value,expected', [
        ('upcoming', EventFilter.UPCOMING),
        ('PAST', EventFilter.PAST),
        ('all', EventFilter.ALL),
        (None, EventFilter.ALL),
        ('someday', EventFilter.ALL),
    ])
    def test_parse(self, value, expected):
        assert EventFilter.parse(value) is expected

class TestPublicView:

    def test_load_and_filter(self, repository):
        view = PublicEventListView(repository, today=lambda: TODAY)
        view.load()
        assert view.is_loading is False
        assert view.error is None
        assert [e.id for e in view.filtered_events] == [1, 2, 3, 4]

        view.set_filter(EventFilter.UPCOMING)
        assert [e.id for e in view.filtered_events] == [2, 3, 4]
        assert len(view.events) == 4

    def test_load_error_is_shown_inline(self, repository):
        repository.list.side_effect = ServerError('boom')
        view = PublicEventListView(repository, today=lambda: TODAY)
        view.load()
        assert view.error == 'Error loading events.'
        assert view.is_loading is False
        assert view.filtered_events == []

    def test_bad_record_does_not_hide_the_others(self, fake_session):
        fake_session.queue(make_response(200, [
            wire_event(1),
            wire_event(2, imageUrl='www.example.com/a.jpg'),
        ]))
        client = EventRepositoryClient('http://api.test/api', MappingTokenStore(), session=fake_session)
        view = PublicEventListView(client, today=lambda: TODAY)
        view.load()
        assert view.error is None
        assert [e.id for e in view.filtered_events] == [1]

    def test_unmounted_view_ignores_result(self, repository):
        view = PublicEventListView(repository, today=lambda: TODAY)
        view.unmount()
        view.load()
        assert view.events == []

class TestAdminDelete:

    @pytest.fixture
    def view(self, repository):
        view = AdminEventListView(repository, today=lambda: TODAY)
        view.load()
        return view

    def test_confirmed_delete_removes_event(self, view, repository):
        assert view.delete('2', confirm=lambda event: True) is True
        repository.delete.assert_called_once_with(2)
        assert [e.id for e in view.events] == [1, 3, 4]
        assert [e.id for e in view.filtered_events] == [1, 3, 4]

    def test_cancelled_delete_does_nothing(self, view, repository):
        asked = []
        assert view.delete(2, confirm=lambda event: asked.append(event.title) or False) is False
        assert asked == ['Event 2']
        repository.delete.assert_not_called()
        assert len(view.events) == 4

    def test_unknown_event_is_not_deleted(self, view, repository):
        assert view.delete(42, confirm=lambda event: True) is False
        repository.delete.assert_not_called()

    def test_delete_failure_keeps_event(self, view, repository):
        repository.delete.side_effect = ServerError('Failed to delete event 2: 500')
        assert view.delete(2, confirm=lambda event: True) is False
        assert view.error.startswith('Error deleting event:')
        assert len(view.events) == 4

    def test_rejected_token_redirects_to_login(self, repository):
        navigations = []
        view = AdminEventListView(repository, today=lambda: TODAY, on_navigate=navigations.append)
        view.load()
        repository.delete.side_effect = AuthenticationError('expired')
        assert view.delete(1, confirm=lambda event: True) is False
        assert navigations == [Redirect.LOGIN]
