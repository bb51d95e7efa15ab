"""
ThreadBoard Main Server Class

Owns the database handle and services and runs the web front end.
"""

import logging
from typing import Optional

from ..config import Config
from .crypto import PasswordManager
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class MessageBoard:
    """
    Main ThreadBoard class - orchestrates all board components.

    Responsibilities:
    - Open and close the database connection
    - Construct services with their storage dependency
    - Build and serve the Flask application
    """

    def __init__(self, config: Config):
        """
        Initialize ThreadBoard with configuration.

        Args:
            config: Loaded configuration object
        """
        self.config = config

        self.passwords = PasswordManager(
            time_cost=config.crypto.argon2_time_cost,
            memory_cost_kb=config.crypto.argon2_memory_kb,
            parallelism=config.crypto.argon2_parallelism
        )
        self.rate_limiter = RateLimiter(
            attempts_per_minute=config.web.login_attempts_per_minute
        )

        # These will be initialized in setup()
        self.db = None
        self.accounts = None
        self.posts = None

        logger.info(f"ThreadBoard initialized: {config.board.name}")

    def setup(self, db=None):
        """
        Initialize database and services.

        Args:
            db: Already initialized Database to use instead of opening
                config.database.path
        """
        logger.info("Setting up ThreadBoard components...")

        if db is None:
            from ..db.connection import Database
            db = Database(self.config.database.path)
            db.initialize()
        self.db = db

        from .accounts import AccountService
        from .posts import PostService
        self.accounts = AccountService(self.db, self.passwords)
        self.posts = PostService(self.db)

        logger.info("ThreadBoard setup complete")

    def create_app(self):
        """Build the Flask application bound to this board."""
        from ..web.app import create_app
        return create_app(self)

    def run(self):
        """Set up, serve HTTP until interrupted, then shut down."""
        self.setup()
        app = self.create_app()

        logger.info(
            f"Starting {self.config.board.name} on "
            f"http://{self.config.web.host}:{self.config.web.port}"
        )

        try:
            app.run(
                host=self.config.web.host,
                port=self.config.web.port,
                threaded=True,
                use_reloader=False
            )
        finally:
            self.shutdown()

    def shutdown(self):
        """Graceful shutdown."""
        logger.info("Shutting down ThreadBoard...")

        if self.db:
            self.db.close()
            self.db = None

        logger.info("ThreadBoard shutdown complete")

    @property
    def display_timezone(self) -> Optional[str]:
        return self.config.board.display_timezone
