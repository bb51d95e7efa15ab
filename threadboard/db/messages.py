"""
ThreadBoard Message Database Operations

Create and read board messages and replies.
"""

import time
import logging
from typing import Optional

from .connection import Database
from .models import Message

logger = logging.getLogger(__name__)


class MessageRepository:
    """Repository for message-related database operations."""

    def __init__(self, db: Database):
        self.db = db

    def create_message(
        self,
        user_id: int,
        content: str,
        parent_id: Optional[int] = None
    ) -> Message:
        """Insert a new message (a reply when parent_id is given)."""
        now_us = int(time.time() * 1_000_000)

        cursor = self.db.execute("""
            INSERT INTO messages (user_id, content, parent_id, created_at_us)
            VALUES (?, ?, ?, ?)
        """, (user_id, content, parent_id, now_us))

        return Message(
            id=cursor.lastrowid,
            user_id=user_id,
            content=content,
            parent_id=parent_id,
            created_at_us=now_us
        )

    def message_exists(self, message_id: int) -> bool:
        """Check if a message with this ID exists."""
        row = self.db.fetchone(
            "SELECT 1 FROM messages WHERE id = ?",
            (message_id,)
        )
        return row is not None

    def list_all_messages(self) -> list[Message]:
        """
        Get every message joined with its author's username.

        No ordering is applied; the feed assembler orders threads.
        """
        rows = self.db.fetchall("""
            SELECT m.*, u.username AS author FROM messages m
            JOIN users u ON u.id = m.user_id
        """)
        return [self._row_to_message(row) for row in rows]

    def count_user_messages(self, user_id: int) -> int:
        """Count messages authored by a user."""
        row = self.db.fetchone(
            "SELECT COUNT(*) FROM messages WHERE user_id = ?",
            (user_id,)
        )
        return row[0] if row else 0

    def _row_to_message(self, row) -> Message:
        """Convert database row to Message object."""
        return Message(
            id=row["id"],
            user_id=row["user_id"],
            content=row["content"],
            parent_id=row["parent_id"],
            created_at_us=row["created_at_us"],
            author=row["author"]
        )
