from datetime import datetime, time, timedelta
from flask import Blueprint, render_template, request, make_response, current_app
from icalendar import Calendar, Event as ICalEvent

from ...client import EventClientError
from ...views.event_list import EventFilter, PublicEventListView
from .common import display_timezone, event_repository

# Create the blueprint
events_bp = Blueprint('events', __name__)

def get_events():
    """Fetch events from the API"""
    try:
        return event_repository().list()
    except EventClientError as e:
        current_app.logger.error(f"Error fetching events from API: {e}")
        return []

@events_bp.route('/')
def index():
    """Render the public events page."""
    view = PublicEventListView(event_repository(), tz=display_timezone())
    view.load()
    view.set_filter(EventFilter.parse(request.args.get('filter')))
    return render_template('index.html', view=view, filters=list(EventFilter))

@events_bp.route('/calendar.ics')
def ics_feed():
    """Generate an iCalendar feed of all events."""
    events = get_events()
    tz = display_timezone()

    # Create calendar
    cal = Calendar()
    cal.add('prodid', '-//Tour Events//events//')
    cal.add('version', '2.0')
    cal.add('x-wr-calname', 'Events')
    cal.add('x-wr-timezone', tz.key)

    # Add events to calendar
    for event in events:
        cal_event = ICalEvent()
        cal_event.add('uid', f"event-{event.id}@tour-events")
        cal_event.add('summary', event.title)

        if event.start_time:
            local_start = event.start_time.astimezone(tz)
            cal_event.add('dtstart', datetime.combine(event.date, local_start.time(), tzinfo=tz))
            if event.end_date and event.end_date > event.date:
                # No end time is stored, so the event runs until the end of its last day
                cal_event.add('dtend', datetime.combine(event.end_date + timedelta(days=1), time(0, 0), tzinfo=tz))
        else:
            # All-day event spanning through the last day
            cal_event.add('dtstart', event.date)
            cal_event.add('dtend', event.comparison_date + timedelta(days=1))

        if event.description:
            cal_event.add('description', event.description)

        where = ', '.join(part for part in (event.venue, event.location) if part)
        if where:
            cal_event.add('location', where)

        if event.ticket_url:
            cal_event.add('url', event.ticket_url)

        cal.add_component(cal_event)

    # Generate response
    response = make_response(cal.to_ical())
    response.headers['Content-Type'] = 'text/calendar; charset=utf-8'
    response.headers['Content-Disposition'] = 'attachment; filename=calendar.ics'

    return response
