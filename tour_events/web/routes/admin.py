"""Admin area: login, event list, create/edit forms and delete."""

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ...forms.controller import EventFormController, Redirect
from ...views.event_list import AdminEventListView, EventFilter
from .common import auth_client, display_timezone, event_repository

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')

PUBLIC_ENDPOINTS = {'admin.login'}

def _to_login():
    flash('Please sign in.', 'error')
    return redirect(url_for('admin.login'))

def _follow(target: Redirect):
    if target is Redirect.LOGIN:
        return _to_login()
    return redirect(url_for('admin.event_list'))

@admin_bp.before_request
def require_login():
    """Every admin page except the login form needs a stored token."""
    if request.endpoint in PUBLIC_ENDPOINTS:
        return None
    if not auth_client().is_authenticated():
        return _to_login()
    return None

@admin_bp.route('/login', methods=['GET', 'POST'])
def login():
    error = None
    if request.method == 'POST':
        result = auth_client().login(
            request.form.get('username'),
            request.form.get('password')
        )
        if result.success:
            return redirect(url_for('admin.event_list'))
        error = result.error
    return render_template('admin/login.html', error=error), 200 if error is None else 401

@admin_bp.route('/logout', methods=['POST'])
def logout():
    auth_client().signout()
    return redirect(url_for('admin.login'))

@admin_bp.route('/events')
def event_list():
    view = AdminEventListView(event_repository(), tz=display_timezone())
    view.load()
    if view.redirect:
        return _follow(view.redirect)
    view.set_filter(EventFilter.parse(request.args.get('filter')))
    return render_template('admin/events.html', view=view, filters=list(EventFilter))

@admin_bp.route('/events/<event_id>/delete', methods=['GET', 'POST'])
def delete_event(event_id):
    """GET asks for confirmation, POST with confirm=yes deletes."""
    view = AdminEventListView(event_repository(), tz=display_timezone())
    view.load()
    if view.redirect:
        return _follow(view.redirect)
    if view.error:
        flash(view.error, 'error')
        return redirect(url_for('admin.event_list'))

    if request.method == 'GET':
        event = next((e for e in view.events if str(e.id) == event_id), None)
        if event is None:
            return render_template('errors/404.html'), 404
        return render_template('admin/confirm_delete.html', event=event)

    confirmed = request.form.get('confirm') == 'yes'
    if view.delete(event_id, confirm=lambda event: confirmed):
        flash('Event deleted.', 'success')
    elif view.redirect:
        return _follow(view.redirect)
    elif view.error:
        flash(view.error, 'error')
    return redirect(url_for('admin.event_list'))

def _run_form(controller: EventFormController):
    controller.mount()
    if controller.redirect:
        return _follow(controller.redirect)

    if request.method == 'POST' and not controller.load_error:
        controller.update_fields(request.form.to_dict())
        controller.submit()
        if controller.redirect:
            if controller.notification:
                flash(controller.notification.text, controller.notification.kind)
            return _follow(controller.redirect)

    status = 200
    if controller.load_error:
        status = 502
    elif controller.errors:
        status = 422
    elif controller.notification and controller.notification.kind == 'error':
        status = 502
    return render_template('admin/event_form.html', form=controller), status

@admin_bp.route('/events/new', methods=['GET', 'POST'])
def new_event():
    return _run_form(EventFormController(event_repository(), tz=display_timezone()))

@admin_bp.route('/events/<event_id>', methods=['GET', 'POST'])
def edit_event(event_id):
    return _run_form(EventFormController(event_repository(), event_id=event_id, tz=display_timezone()))
