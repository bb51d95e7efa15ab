"""ThreadBoard Database Module - SQLite database operations."""

from .connection import Database
from .models import User, Message

__all__ = ["Database", "User", "Message"]
