"""
ThreadBoard Feed Assembly

Builds the threaded feed from the flat set of stored messages.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from ..db.models import Message


@dataclass
class Thread:
    """A top-level message with its direct replies."""
    message: Message
    replies: list[Message] = field(default_factory=list)
    latest_activity_us: int = 0


def _by_creation(msg: Message) -> tuple[int, int]:
    return (msg.created_at_us, msg.id or 0)


def assemble_feed(messages: Iterable[Message]) -> list[Thread]:
    """
    Group replies under their top-level message and order the threads.

    Replies within a thread are oldest first. Threads are ordered by latest
    activity (own creation time or newest reply), most recent first.
    Only one level of replies is rendered: replies to replies, and replies
    whose parent is gone, are not attached to any thread.

    All timestamps stay in UTC microseconds.
    """
    top_level: list[Message] = []
    replies_by_parent: dict[int, list[Message]] = defaultdict(list)

    for msg in messages:
        if msg.is_reply:
            replies_by_parent[msg.parent_id].append(msg)
        else:
            top_level.append(msg)

    threads = []
    for msg in top_level:
        replies = sorted(replies_by_parent.get(msg.id, []), key=_by_creation)
        latest = max([msg.created_at_us] + [r.created_at_us for r in replies])
        threads.append(Thread(message=msg, replies=replies, latest_activity_us=latest))

    threads.sort(
        key=lambda t: (t.latest_activity_us, t.message.id or 0),
        reverse=True
    )
    return threads
