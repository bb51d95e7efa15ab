"""
ThreadBoard Data Models

Dataclasses representing database entities.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """Registered board user."""
    id: Optional[int] = None
    username: str = ""
    email: str = ""
    password_hash: str = ""
    created_at_us: int = 0


@dataclass
class Message:
    """Board message. A message without parent_id is top-level."""
    id: Optional[int] = None
    user_id: int = 0
    content: str = ""
    parent_id: Optional[int] = None
    created_at_us: int = 0
    author: Optional[str] = None  # joined from users for display

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None
