"""Tests for the Flask pages, using the Flask test client and a fake backend."""

import pytest

from tour_events.client import TOKEN_STORAGE_KEY
from tour_events.config import Config
from tour_events.web import create_app
from .helpers import make_response, wire_event

class WebTestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    API_BASE_URL = 'http://api.test/api'
    API_TIMEOUT = 5
    DISPLAY_TIMEZONE = 'Europe/Berlin'

@pytest.fixture
def app(fake_session):
    app = create_app(WebTestingConfig)
    app.config['API_HTTP_SESSION'] = fake_session
    return app

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def signed_in(client):
    with client.session_transaction() as sess:
        sess[TOKEN_STORAGE_KEY] = 'test-token'
    return client

def test_index_lists_filtered_events(client, fake_session):
    fake_session.queue(make_response(200, [
        wire_event(1, title='Old Show', date='2000-01-01T00:00:00.000Z'),
        wire_event(2, title='Future Show', date='2099-01-01T00:00:00.000Z'),
    ]))
    response = client.get('/?filter=upcoming')
    assert response.status_code == 200
    assert b'Future Show' in response.data
    assert b'Old Show' not in response.data
    assert b'01.01.2099' in response.data
    assert b'20:00 Uhr' in response.data

def test_index_shows_load_error(client, fake_session):
    fake_session.queue(make_response(500, text='down'))
    response = client.get('/')
    assert response.status_code == 200
    assert b'Error loading events.' in response.data

def test_calendar_feed(client, fake_session):
    fake_session.queue(make_response(200, [
        wire_event(1),
        wire_event(2, title='Festival', startTime=None, endDate='2025-06-22T00:00:00.000Z'),
    ]))
    response = client.get('/calendar.ics')
    assert response.status_code == 200
    assert response.headers['Content-Type'].startswith('text/calendar')
    assert b'SUMMARY:Release Show' in response.data
    assert b'20250620T200000' in response.data
    assert b'SUMMARY:Festival' in response.data
    assert b'20250623' in response.data

def test_calendar_feed_timed_multi_day_event_has_end(client, fake_session):
    fake_session.queue(make_response(200, [
        wire_event(3, title='Tour', endDate='2025-06-22T00:00:00.000Z'),
    ]))
    response = client.get('/calendar.ics')
    assert response.status_code == 200
    assert b'20250620T200000' in response.data
    assert b'DTEND' in response.data
    assert b'20250623T000000' in response.data

def test_admin_requires_login(client, fake_session):
    response = client.get('/admin/events')
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/admin/login')
    assert fake_session.calls == []

def test_login_stores_token_in_session(client, fake_session):
    fake_session.queue(make_response(200, {'token': 'jwt-abc'}))
    response = client.post('/admin/login', data={'username': 'admin', 'password': 'secret'})
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/admin/events')
    with client.session_transaction() as sess:
        assert sess[TOKEN_STORAGE_KEY] == 'jwt-abc'

def test_failed_login_shows_message(client, fake_session):
    fake_session.queue(make_response(401, {'message': 'Invalid credentials'}))
    response = client.post('/admin/login', data={'username': 'admin', 'password': 'wrong'})
    assert response.status_code == 401
    assert b'Invalid credentials' in response.data

def test_logout_clears_token(signed_in):
    response = signed_in.post('/admin/logout')
    assert response.status_code == 302
    with signed_in.session_transaction() as sess:
        assert TOKEN_STORAGE_KEY not in sess

def test_create_event_from_form(signed_in, fake_session):
    fake_session.queue(make_response(201, wire_event(10)))
    response = signed_in.post('/admin/events/new', data={
        'title': 'Release Show',
        'date': '20.06.2025',
        'start_time': '20:00',
        'venue': 'Kulturhaus',
        'location': 'Hauptstr. 1, Berlin',
    })
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/admin/events')

    call = fake_session.calls[0]
    assert call['method'] == 'POST'
    assert call['headers']['Authorization'] == 'Bearer test-token'
    assert call['json']['date'] == '2025-06-20T00:00:00.000Z'
    assert call['json']['startTime'] == '1970-01-01T19:00:00.000Z'
    assert call['json']['ticketUrl'] is None

def test_invalid_form_is_not_sent(signed_in, fake_session):
    response = signed_in.post('/admin/events/new', data={'title': '', 'date': '20.06.2025'})
    assert response.status_code == 422
    assert b'Title is required.' in response.data
    assert fake_session.calls == []

def test_edit_form_shows_decoded_values(signed_in, fake_session):
    fake_session.queue(make_response(200, wire_event(3)))
    response = signed_in.get('/admin/events/3')
    assert response.status_code == 200
    assert b'value="20.06.2025"' in response.data
    assert b'value="20:00"' in response.data

def test_edit_with_expired_token_goes_to_login(signed_in, fake_session):
    fake_session.queue(make_response(401, {'message': 'Token expired'}))
    response = signed_in.get('/admin/events/3')
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/admin/login')
    with signed_in.session_transaction() as sess:
        assert TOKEN_STORAGE_KEY not in sess

def test_delete_after_confirmation(signed_in, fake_session):
    fake_session.queue(make_response(200, [wire_event(3)]), make_response(204))
    response = signed_in.post('/admin/events/3/delete', data={'confirm': 'yes'})
    assert response.status_code == 302
    assert [call['method'] for call in fake_session.calls] == ['GET', 'DELETE']
    assert fake_session.calls[1]['url'] == 'http://api.test/api/events/3'
