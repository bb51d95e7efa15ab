"""
ThreadBoard Web Views

Registration, login, feed, posting and profile routes.
"""

import logging
from typing import Any, Optional

from flask import (
    Blueprint,
    flash,
    g,
    redirect,
    render_template,
    request,
    url_for,
)

from ..core.accounts import AuthStatus, RegistrationStatus
from ..core.posts import MAX_CONTENT_LENGTH, MAX_MESSAGE_ID, PostStatus
from ..utils.formatting import format_timestamp, localize_feed
from .session import client_address, get_board, log_in, log_out, login_required

logger = logging.getLogger(__name__)

bp = Blueprint("board", __name__)


REGISTRATION_RESPONSES = {
    RegistrationStatus.CREATED: ("User registered successfully", 200),
    RegistrationStatus.MISSING_FIELDS: ("All fields are required", 400),
    RegistrationStatus.DUPLICATE_EMAIL: ("Email already in use", 400),
    RegistrationStatus.DUPLICATE_USERNAME: ("Username already taken", 400),
    RegistrationStatus.FAILURE: ("Error registering user", 500),
}

POST_ERRORS = {
    PostStatus.EMPTY_CONTENT: ("Message content is required", 400),
    PostStatus.TOO_LONG: (f"Message too long (max {MAX_CONTENT_LENGTH} chars)", 400),
    PostStatus.PARENT_NOT_FOUND: ("Parent message not found", 400),
    PostStatus.FAILURE: ("Error posting message", 500),
}

INVALID_LOGIN = "Invalid username or password."


def _form_data() -> dict[str, Any]:
    """Request fields from a JSON body or a submitted form."""
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form


def _field(data, name: str) -> str:
    """A text field; anything that is not a string counts as missing."""
    value = data.get(name)
    return value if isinstance(value, str) else ""


def _parent_id(data) -> Optional[int]:
    """The reply's parent id, or None when it is not a usable message id."""
    value = data.get("parent_id")
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError:
            return None
    if not isinstance(value, int) or not 0 < value <= MAX_MESSAGE_ID:
        return None
    return value


def _too_many_attempts():
    wait = int(get_board().rate_limiter.time_until_allowed(client_address())) + 1
    return "Too many attempts", 429, {"Retry-After": str(wait)}


@bp.route("/")
def index():
    return redirect(url_for("board.login"))


@bp.route("/login", methods=["GET"])
def login():
    if g.get("user") is not None:
        return redirect(url_for("board.feed"))
    return render_template("login.html")


@bp.route("/login", methods=["POST"])
def login_submit():
    board = get_board()
    if not board.rate_limiter.check(client_address()):
        return _too_many_attempts()

    data = _form_data()
    user, status = board.accounts.authenticate(
        _field(data, "username"), _field(data, "password")
    )

    if status is AuthStatus.SUCCESS:
        log_in(user)
        return redirect(url_for("board.feed"))

    if status is AuthStatus.FAILURE:
        flash("Login is unavailable right now. Please try again.")
    else:
        flash(INVALID_LOGIN)
    return redirect(url_for("board.login"))


@bp.route("/register", methods=["GET"])
def register():
    return render_template("register.html")


@bp.route("/register", methods=["POST"])
def register_submit():
    board = get_board()
    if not board.config.web.registration_enabled:
        return "Registration is disabled", 403

    if not board.rate_limiter.check(client_address()):
        return _too_many_attempts()

    data = _form_data()
    _, status = board.accounts.register(
        _field(data, "username"),
        _field(data, "email"),
        _field(data, "password"),
    )
    return REGISTRATION_RESPONSES[status]


@bp.route("/feed")
@bp.route("/dashboard")
@login_required
def feed():
    board = get_board()
    threads = localize_feed(board.posts.get_feed(), board.display_timezone)
    return render_template("feed.html", user=g.user, threads=threads)


@bp.route("/messages", methods=["POST"])
@login_required
def post_message():
    content = _field(_form_data(), "content")
    _, status = get_board().posts.post_message(g.user.id, content)

    if status is not PostStatus.CREATED:
        return POST_ERRORS[status]
    return redirect(url_for("board.feed"))


@bp.route("/reply", methods=["POST"])
@login_required
def post_reply():
    data = _form_data()
    content = _field(data, "content")

    parent_id = _parent_id(data)
    if parent_id is None:
        return "Invalid parent message", 400

    _, status = get_board().posts.post_message(g.user.id, content, parent_id)

    if status is not PostStatus.CREATED:
        return POST_ERRORS[status]
    return redirect(url_for("board.feed"))


@bp.route("/profile")
@login_required
def profile():
    board = get_board()
    return render_template(
        "profile.html",
        user=g.user,
        joined=format_timestamp(g.user.created_at_us, board.display_timezone),
        message_count=board.posts.count_user_messages(g.user.id),
    )


@bp.route("/logout")
def logout():
    if g.get("user") is not None:
        logger.info(f"User logged out: {g.user.username}")
    log_out()
    return redirect(url_for("board.index"))
