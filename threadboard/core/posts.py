"""
ThreadBoard Post Service

Posting messages and replies, and reading the assembled feed.
"""

import sqlite3
import logging
from enum import Enum
from typing import Optional

from ..db.connection import Database
from ..db.messages import MessageRepository
from ..db.models import Message
from .feed import Thread, assemble_feed

logger = logging.getLogger(__name__)


MAX_CONTENT_LENGTH = 2000

# Largest value a SQLite INTEGER column can hold
MAX_MESSAGE_ID = 2 ** 63 - 1


class PostStatus(Enum):
    """Outcome of posting a message."""
    CREATED = "created"
    EMPTY_CONTENT = "empty_content"
    TOO_LONG = "too_long"
    PARENT_NOT_FOUND = "parent_not_found"
    FAILURE = "failure"


class PostService:
    """Message store operations used by the web layer."""

    def __init__(self, db: Database):
        self.msg_repo = MessageRepository(db)

    def post_message(
        self,
        author_id: int,
        content: str,
        parent_id: Optional[int] = None
    ) -> tuple[Optional[Message], PostStatus]:
        """
        Create a top-level message, or a reply when parent_id is given.

        Nothing is written unless the content is valid and the parent exists.

        Returns:
            (Message, CREATED) on success
            (None, status) on failure
        """
        if not content or not content.strip():
            return None, PostStatus.EMPTY_CONTENT

        if len(content) > MAX_CONTENT_LENGTH:
            return None, PostStatus.TOO_LONG

        if parent_id is not None and not 0 < parent_id <= MAX_MESSAGE_ID:
            return None, PostStatus.PARENT_NOT_FOUND

        try:
            if parent_id is not None and not self.msg_repo.message_exists(parent_id):
                return None, PostStatus.PARENT_NOT_FOUND

            message = self.msg_repo.create_message(author_id, content, parent_id)

        except sqlite3.Error:
            logger.exception(f"Failed to store message from user {author_id}")
            return None, PostStatus.FAILURE

        if parent_id is None:
            logger.info(f"Message {message.id} posted by user {author_id}")
        else:
            logger.info(f"Reply {message.id} to {parent_id} posted by user {author_id}")
        return message, PostStatus.CREATED

    def list_all_messages(self) -> list[Message]:
        """All messages, author-joined, unordered."""
        return self.msg_repo.list_all_messages()

    def count_user_messages(self, user_id: int) -> int:
        return self.msg_repo.count_user_messages(user_id)

    def get_feed(self) -> list[Thread]:
        """Assemble the threaded feed (UTC timestamps)."""
        return assemble_feed(self.msg_repo.list_all_messages())
