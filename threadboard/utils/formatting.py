"""
ThreadBoard Formatting Utilities

Presentation helpers: timestamps in the display timezone and feed views.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.feed import Thread
from ..db.models import Message

DEFAULT_DISPLAY_TIMEZONE = "America/New_York"


@dataclass
class MessageView:
    """A message ready for display."""
    id: int
    author: str
    content: str
    posted: str


@dataclass
class ThreadView:
    """A thread ready for display."""
    message: MessageView
    replies: list[MessageView] = field(default_factory=list)
    latest_activity: str = ""


def format_timestamp(
    timestamp_us: int,
    tz_name: str = DEFAULT_DISPLAY_TIMEZONE,
    fmt: str = "%Y-%m-%d %H:%M %Z"
) -> str:
    """
    Format a UTC microsecond timestamp in the given timezone.

    Args:
        timestamp_us: Microseconds since epoch (UTC)
        tz_name: IANA timezone name
        fmt: strftime format

    Returns:
        Formatted string like "2025-12-10 09:32 EST"
    """
    if not timestamp_us:
        return "Never"

    dt = datetime.fromtimestamp(timestamp_us / 1_000_000, tz=timezone.utc)
    return dt.astimezone(ZoneInfo(tz_name)).strftime(fmt)


def _message_view(msg: Message, tz_name: str) -> MessageView:
    return MessageView(
        id=msg.id,
        author=msg.author or "unknown",
        content=msg.content,
        posted=format_timestamp(msg.created_at_us, tz_name)
    )


def localize_feed(
    threads: list[Thread],
    tz_name: Optional[str] = None
) -> list[ThreadView]:
    """Convert assembled threads to display views in the given timezone."""
    tz_name = tz_name or DEFAULT_DISPLAY_TIMEZONE
    return [
        ThreadView(
            message=_message_view(thread.message, tz_name),
            replies=[_message_view(r, tz_name) for r in thread.replies],
            latest_activity=format_timestamp(thread.latest_activity_us, tz_name)
        )
        for thread in threads
    ]


def truncate(text: str, max_length: int = 50, suffix: str = "...") -> str:
    """
    Truncate text to maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length including suffix
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix
