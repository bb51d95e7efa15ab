"""
ThreadBoard Database Connection Manager

SQLite database with WAL mode for concurrent reads.
"""

import sqlite3
import logging
import threading
import time
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class Database:
    """
    SQLite database manager for ThreadBoard.

    One connection is shared by all request threads; every statement on
    it is serialized by a re-entrant lock.
    """

    def __init__(self, path: str):
        """
        Initialize database handle.

        Args:
            path: Path to SQLite database file, or ":memory:"
        """
        self.path = Path(path)
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    def initialize(self):
        """Open the connection and bring the schema up to date."""
        if str(self.path) != ":memory:":
            self.path.parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(
            str(self.path),
            check_same_thread=False,
            isolation_level=None  # Autocommit mode
        )

        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA foreign_keys=ON")
        self._conn.row_factory = sqlite3.Row

        self._run_migrations()

        logger.info(f"Database initialized: {self.path}")

    def _run_migrations(self):
        """Run database migrations."""
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY,
                name TEXT UNIQUE NOT NULL,
                applied_at INTEGER NOT NULL
            )
        """)

        applied = {
            row[0] for row in
            self._conn.execute("SELECT name FROM _migrations").fetchall()
        }

        migrations = [
            ("001_users", self._migration_001_users),
            ("002_messages", self._migration_002_messages),
        ]

        for name, func in migrations:
            if name not in applied:
                logger.info(f"Running migration: {name}")
                func()
                self._conn.execute(
                    "INSERT INTO _migrations (name, applied_at) VALUES (?, ?)",
                    (name, int(time.time() * 1_000_000))
                )

    def _migration_001_users(self):
        """Users table."""
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS users (
                id              INTEGER PRIMARY KEY AUTOINCREMENT,
                username        TEXT UNIQUE NOT NULL,
                email           TEXT UNIQUE NOT NULL,
                password_hash   TEXT NOT NULL,
                created_at_us   INTEGER NOT NULL
            );
        """)

    def _migration_002_messages(self):
        """Messages table with optional parent for replies."""
        # No foreign key on parent_id: replies may outlive their parent
        # when the parent's author is deleted.
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS messages (
                id              INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id         INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
                content         TEXT NOT NULL,
                parent_id       INTEGER,
                created_at_us   INTEGER NOT NULL
            );
            CREATE INDEX IF NOT EXISTS idx_messages_parent ON messages(parent_id);
            CREATE INDEX IF NOT EXISTS idx_messages_user ON messages(user_id);
        """)

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        """Execute SQL query."""
        with self._lock:
            return self._conn.execute(sql, params)

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        """Execute query and fetch one result."""
        with self._lock:
            return self._conn.execute(sql, params).fetchone()

    def fetchall(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        """Execute query and fetch all results."""
        with self._lock:
            return self._conn.execute(sql, params).fetchall()

    def close(self):
        """Close database connection."""
        with self._lock:
            if self._conn:
                self._conn.close()
                self._conn = None
                logger.info("Database connection closed")

    # === Utility Methods ===

    def count_users(self) -> int:
        """Count total registered users."""
        row = self.fetchone("SELECT COUNT(*) FROM users")
        return row[0] if row else 0

    def count_messages(self) -> int:
        """Count total messages."""
        row = self.fetchone("SELECT COUNT(*) FROM messages")
        return row[0] if row else 0
