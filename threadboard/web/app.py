"""
ThreadBoard Flask Application Factory
"""

import sqlite3
import logging
from typing import TYPE_CHECKING

from flask import Flask, g

from .session import load_current_user
from .views import bp

if TYPE_CHECKING:
    from ..core.server import MessageBoard

logger = logging.getLogger(__name__)


def create_app(board: "MessageBoard") -> Flask:
    """Create the Flask app serving the given board."""
    app = Flask(__name__)

    app.secret_key = board.config.board.secret_key
    app.config.update(
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        SESSION_COOKIE_SECURE=board.config.web.session_cookie_secure,
    )

    app.extensions["threadboard"] = board

    app.before_request(load_current_user)
    app.register_blueprint(bp)

    @app.errorhandler(sqlite3.Error)
    def storage_error(error):
        logger.error("Unhandled storage error", exc_info=error)
        return "Internal server error", 500

    @app.context_processor
    def inject_board():
        return {
            "board_name": board.config.board.name,
            "motd": board.config.board.motd,
            "current_user": g.get("user"),
        }

    return app
