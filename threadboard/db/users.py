"""
ThreadBoard User Database Operations

CRUD operations for registered users.
"""

import time
import logging
from typing import Optional

from .connection import Database
from .models import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for user-related database operations."""

    def __init__(self, db: Database):
        self.db = db

    def create_user(self, username: str, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        Raises sqlite3.IntegrityError if the username or email is taken.
        """
        now_us = int(time.time() * 1_000_000)

        cursor = self.db.execute("""
            INSERT INTO users (username, email, password_hash, created_at_us)
            VALUES (?, ?, ?, ?)
        """, (username, email, password_hash, now_us))

        return User(
            id=cursor.lastrowid,
            username=username,
            email=email,
            password_hash=password_hash,
            created_at_us=now_us
        )

    def email_exists(self, email: str) -> bool:
        """Check if a user with this email is registered."""
        row = self.db.fetchone(
            "SELECT 1 FROM users WHERE email = ?",
            (email,)
        )
        return row is not None

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        row = self.db.fetchone("SELECT * FROM users WHERE id = ?", (user_id,))
        return self._row_to_user(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username (exact match)."""
        row = self.db.fetchone(
            "SELECT * FROM users WHERE username = ?",
            (username,)
        )
        return self._row_to_user(row) if row else None

    def delete_user(self, user_id: int) -> bool:
        """Delete a user; their messages go with them (ON DELETE CASCADE)."""
        cursor = self.db.execute("DELETE FROM users WHERE id = ?", (user_id,))
        return cursor.rowcount > 0

    def list_users(self, limit: int = 100, offset: int = 0) -> list[User]:
        """List users with pagination."""
        rows = self.db.fetchall(
            "SELECT * FROM users ORDER BY id LIMIT ? OFFSET ?",
            (limit, offset)
        )
        return [self._row_to_user(row) for row in rows]

    def _row_to_user(self, row) -> User:
        """Convert database row to User object."""
        return User(
            id=row["id"],
            username=row["username"],
            email=row["email"],
            password_hash=row["password_hash"],
            created_at_us=row["created_at_us"]
        )
