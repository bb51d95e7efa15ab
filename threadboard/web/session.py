"""
ThreadBoard Session Gate

Rehydrates the logged-in user on every request and guards views that
need one.
"""

import functools
import logging

from flask import current_app, g, redirect, request, session, url_for

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


def get_board():
    """The MessageBoard bound to the current app."""
    return current_app.extensions["threadboard"]


def load_current_user():
    """
    before_request hook: resolve the session's user id to a User.

    The user is fetched again on each request. An id that no longer
    resolves leaves the request unauthenticated and drops it from the
    session.
    """
    g.user = None

    if SESSION_USER_KEY not in session:
        return

    user = get_board().accounts.resolve_session_user(session.get(SESSION_USER_KEY))
    if user is None:
        session.pop(SESSION_USER_KEY, None)
        return

    g.user = user


def log_in(user):
    """Bind a freshly authenticated user to the session."""
    session.clear()
    session[SESSION_USER_KEY] = user.id
    g.user = user


def log_out():
    session.clear()
    g.user = None


def login_required(view):
    """Redirect to the login page unless a user is attached to the request."""
    @functools.wraps(view)
    def wrapped(*args, **kwargs):
        if g.get("user") is None:
            logger.debug(f"Unauthenticated request to {request.path}")
            return redirect(url_for("board.login"))
        return view(*args, **kwargs)
    return wrapped


def client_address() -> str:
    """Address used as the rate limit key."""
    return request.remote_addr or "unknown"
