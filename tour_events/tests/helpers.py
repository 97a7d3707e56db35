"""Fake HTTP plumbing and sample data shared by the tests."""

import json
from datetime import date, datetime
from http import HTTPStatus

import requests

from tour_events.models.event import Event
from tour_events.utils.timezone import UTC

def make_response(status_code=200, json_body=None, text=None):
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = HTTPStatus(status_code).phrase
    response.encoding = 'utf-8'
    if json_body is not None:
        response._content = json.dumps(json_body).encode('utf-8')
        response.headers['Content-Type'] = 'application/json'
    elif text is not None:
        response._content = text.encode('utf-8')
    else:
        response._content = b''
    return response

class FakeSession:
    """Stands in for requests.Session; replays queued responses and records calls."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def request(self, method, url, **kwargs):
        self.calls.append({'method': method, 'url': url, **kwargs})
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def post(self, url, **kwargs):
        return self.request('POST', url, **kwargs)

def wire_event(event_id=1, **overrides):
    data = {
        'id': event_id,
        'title': 'Release Show',
        'date': '2025-06-20T00:00:00.000Z',
        'endDate': None,
        'startTime': '1970-01-01T19:00:00.000Z',
        'description': 'Album release',
        'venue': 'Kulturhaus',
        'location': 'Hauptstr. 1, Berlin',
        'imageUrl': None,
        'ticketUrl': 'https://tickets.example.com/1',
        'createdAt': '2025-01-01T10:00:00.000Z',
        'updatedAt': '2025-01-02T10:00:00.000Z',
    }
    data.update(overrides)
    return data

def make_event(event_id=1, day=date(2025, 6, 20), **overrides):
    values = dict(
        id=event_id,
        title=f"Event {event_id}",
        date=day,
        start_time=datetime(1970, 1, 1, 19, 0, tzinfo=UTC),
        venue='Kulturhaus',
        location='Hauptstr. 1, Berlin',
    )
    values.update(overrides)
    return Event(**values)

