"""ThreadBoard Core Module - accounts, posting, feed assembly and server."""

from .crypto import PasswordManager
from .accounts import AccountService, AuthStatus, RegistrationStatus
from .posts import PostService, PostStatus
from .feed import Thread, assemble_feed
from .rate_limiter import RateLimiter
from .server import MessageBoard

__all__ = [
    "PasswordManager",
    "AccountService",
    "AuthStatus",
    "RegistrationStatus",
    "PostService",
    "PostStatus",
    "Thread",
    "assemble_feed",
    "RateLimiter",
    "MessageBoard",
]
