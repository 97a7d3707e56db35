#!/usr/bin/env python3

"""
Command-line interface for managing events from a shell.

Uses the same components as the admin web pages: the form controller for
create/update, the admin list view for listing and deleting. The token is
kept in a small file (TOKEN_FILE, default ~/.tour_events/token.json).

Common use cases:
    # Sign in once
    tour-events login --username admin

    # One event with all fields
    tour-events show 12

    # Upcoming events only
    tour-events list --filter upcoming

    # Create an event (dates DD.MM.YYYY, time HH:mm)
    tour-events create --title "Release Show" --date 20.06.2025 --start-time 20:00 \
        --venue "Kulturhaus" --location "Hauptstr. 1, Berlin"

    # Change one field of an existing event
    tour-events update 12 --ticket-url https://tickets.example.com/12

    # Delete without the confirmation prompt
    tour-events delete 12 --yes
"""

import argparse
import getpass
import logging
import sys
from typing import List, Optional

from .client import (
    AuthClient,
    AuthenticationError,
    EventClientError,
    EventRepositoryClient,
    FileTokenStore,
    NotFoundError,
)
from .config import get_api_config
from .forms.controller import EventFormController, FormState, Redirect
from .models.event import EventDraft
from .utils.codec import FormatError
from .utils.logging_config import setup_logging
from .utils.timezone import get_display_timezone
from .views.event_list import AdminEventListView, EventFilter

logger = logging.getLogger(__name__)

def add_draft_arguments(parser: argparse.ArgumentParser):
    parser.add_argument('--title')
    parser.add_argument('--date', help='Start date, DD.MM.YYYY')
    parser.add_argument('--end-date', dest='end_date', help='End date, DD.MM.YYYY')
    parser.add_argument('--start-time', dest='start_time', help='Start time, HH:mm')
    parser.add_argument('--description')
    parser.add_argument('--venue')
    parser.add_argument('--location', help='Address of the venue')
    parser.add_argument('--image-url', dest='image_url')
    parser.add_argument('--ticket-url', dest='ticket_url')

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='tour-events', description='Manage events on the artist website')
    parser.add_argument('--verbose', action='store_true', help='Show debug logging')
    commands = parser.add_subparsers(dest='command', required=True)

    login_parser = commands.add_parser('login', help='Sign in and store the token')
    login_parser.add_argument('--username', required=True)
    login_parser.add_argument('--password', help='Prompted for when omitted')

    commands.add_parser('logout', help='Forget the stored token')

    show_parser = commands.add_parser('show', help='Show one event')
    show_parser.add_argument('event_id')

    list_parser = commands.add_parser('list', help='List events')
    list_parser.add_argument('--filter', choices=[f.value for f in EventFilter], default='all')

    create_parser = commands.add_parser('create', help='Create an event')
    add_draft_arguments(create_parser)

    update_parser = commands.add_parser('update', help='Update an event')
    update_parser.add_argument('event_id')
    add_draft_arguments(update_parser)

    delete_parser = commands.add_parser('delete', help='Delete an event')
    delete_parser.add_argument('event_id')
    delete_parser.add_argument('--yes', action='store_true', help='Skip the confirmation prompt')

    return parser

def print_form_errors(controller: EventFormController):
    for field, message in controller.errors.items():
        print(f"  {field}: {message}", file=sys.stderr)
    if controller.notification and controller.notification.kind == 'error':
        print(controller.notification.text, file=sys.stderr)

def run_form(controller: EventFormController, args: argparse.Namespace) -> int:
    controller.mount()
    if controller.redirect is Redirect.LOGIN:
        print("Not signed in, run 'tour-events login' first.", file=sys.stderr)
        return 2
    if controller.redirect is Redirect.EVENT_LIST:
        print(f"Event {controller.event_id} not found.", file=sys.stderr)
        return 1
    if controller.load_error:
        print(controller.load_error, file=sys.stderr)
        return 1

    for field in EventDraft.field_names():
        value = getattr(args, field)
        if value is not None:
            controller.change(field, value)

    controller.submit()
    if controller.state is FormState.SAVED:
        print(controller.notification.text)
        print(controller.saved_event.to_summary_string(controller.tz))
        return 0
    if controller.redirect is Redirect.LOGIN:
        print("Session expired, run 'tour-events login' again.", file=sys.stderr)
        return 2
    print("Event not saved:", file=sys.stderr)
    print_form_errors(controller)
    return 1

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    logger.debug(f"Running command {args.command}")

    config = get_api_config()
    tz = get_display_timezone(config.display_timezone)
    token_store = FileTokenStore(config.token_file)
    repository = EventRepositoryClient(config.base_url, token_store, timeout=config.timeout)
    auth = AuthClient(config.base_url, token_store, timeout=config.timeout)

    if args.command == 'login':
        password = args.password or getpass.getpass('Password: ')
        result = auth.login(args.username, password)
        if not result.success:
            print(result.error, file=sys.stderr)
            return 1
        print("Signed in.")
        return 0

    if args.command == 'logout':
        auth.signout()
        print("Signed out.")
        return 0

    if args.command == 'show':
        try:
            event = repository.require(args.event_id)
        except AuthenticationError:
            print("Not signed in, run 'tour-events login' first.", file=sys.stderr)
            return 2
        except NotFoundError as e:
            print(f"{e}.", file=sys.stderr)
            return 1
        except EventClientError as e:
            print(f"Error loading event: {e}", file=sys.stderr)
            return 1
        try:
            draft = EventDraft.from_event(event, tz)
        except FormatError as e:
            print(f"Error showing event: {e}", file=sys.stderr)
            return 1
        print(f"[{event.id}] {event.title}")
        for field, value in draft.as_dict().items():
            if field != 'title' and value:
                print(f"  {field}: {value}")
        return 0

    if args.command == 'list':
        view = AdminEventListView(repository, tz=tz)
        view.load()
        if view.error:
            print(view.error, file=sys.stderr)
            return 1
        view.set_filter(EventFilter(args.filter))
        for event in view.filtered_events:
            print(f"[{event.id}] {event.to_summary_string(tz)}")
        return 0

    if args.command == 'create':
        return run_form(EventFormController(repository, tz=tz), args)

    if args.command == 'update':
        return run_form(EventFormController(repository, event_id=args.event_id, tz=tz), args)

    if args.command == 'delete':
        if not auth.is_authenticated():
            print("Not signed in, run 'tour-events login' first.", file=sys.stderr)
            return 2
        view = AdminEventListView(repository, tz=tz)
        view.load()
        if view.error:
            print(view.error, file=sys.stderr)
            return 1

        def confirm(event) -> bool:
            if args.yes:
                return True
            answer = input(f"Delete '{event.to_summary_string(tz)}'? [y/N] ")
            return answer.strip().lower() in ('y', 'yes')

        if view.delete(args.event_id, confirm):
            print(f"Event {args.event_id} deleted.")
            return 0
        if view.redirect is Redirect.LOGIN:
            print("Session expired, run 'tour-events login' again.", file=sys.stderr)
            return 2
        if view.error:
            print(view.error, file=sys.stderr)
        return 1

    return 1

if __name__ == '__main__':
    sys.exit(main())
