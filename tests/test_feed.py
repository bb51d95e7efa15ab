"""
Tests for ThreadBoard Feed Assembly and Formatting
"""

from datetime import datetime, timezone

from threadboard.core.feed import assemble_feed
from threadboard.db.models import Message
from threadboard.utils.formatting import format_timestamp, localize_feed, truncate


def msg(id, created_at_us, parent_id=None, author="alice", content=None):
    return Message(
        id=id,
        user_id=1,
        content=content or f"message {id}",
        parent_id=parent_id,
        created_at_us=created_at_us,
        author=author
    )


def utc_us(*args) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1_000_000)


class TestAssembleFeed:
    """Tests for assemble_feed."""

    def test_empty(self):
        """No messages, no threads."""
        assert assemble_feed([]) == []

    def test_reply_bumps_thread(self):
        """A(t=1) with reply B(t=3) sorts above C(t=2)."""
        a = msg(1, 1)
        b = msg(2, 3, parent_id=1)
        c = msg(3, 2)

        threads = assemble_feed([c, b, a])

        assert [t.message.id for t in threads] == [1, 3]
        assert threads[0].latest_activity_us == 3
        assert [r.id for r in threads[0].replies] == [2]
        assert threads[1].latest_activity_us == 2
        assert threads[1].replies == []

    def test_replies_oldest_first(self):
        """Replies are sorted by creation time regardless of input order."""
        top = msg(1, 10)
        replies = [msg(2, 50, 1), msg(3, 20, 1), msg(4, 40, 1), msg(5, 30, 1)]

        threads = assemble_feed([replies[0], top, replies[2], replies[1], replies[3]])

        assert [r.created_at_us for r in threads[0].replies] == [20, 30, 40, 50]
        assert threads[0].latest_activity_us == 50

    def test_reply_timestamp_tie_uses_id(self):
        """Replies created in the same microsecond keep id order."""
        threads = assemble_feed([msg(1, 1), msg(3, 5, 1), msg(2, 5, 1)])

        assert [r.id for r in threads[0].replies] == [2, 3]

    def test_threads_without_replies_newest_first(self):
        """Without replies, threads sort by own creation time."""
        threads = assemble_feed([msg(1, 100), msg(2, 300), msg(3, 200)])

        assert [t.message.id for t in threads] == [2, 3, 1]

    def test_thread_tie_newer_id_first(self):
        """Equal latest activity puts the higher id first."""
        threads = assemble_feed([msg(1, 100), msg(2, 100)])

        assert [t.message.id for t in threads] == [2, 1]

    def test_only_one_level(self):
        """Replies to replies are not rendered anywhere."""
        threads = assemble_feed([msg(1, 1), msg(2, 2, 1), msg(3, 9, 2)])

        assert len(threads) == 1
        assert [r.id for r in threads[0].replies] == [2]
        assert threads[0].latest_activity_us == 2

    def test_orphaned_replies_ignored(self):
        """Replies whose parent is missing are not rendered."""
        threads = assemble_feed([msg(1, 1), msg(2, 5, parent_id=42)])

        assert len(threads) == 1
        assert threads[0].replies == []
        assert threads[0].latest_activity_us == 1

    def test_reply_older_than_parent(self):
        """Latest activity never drops below the parent's own time."""
        threads = assemble_feed([msg(1, 10), msg(2, 5, 1)])

        assert threads[0].latest_activity_us == 10


class TestFormatting:
    """Tests for display formatting."""

    def test_format_timestamp_eastern_winter(self):
        """UTC 17:30 in January is 12:30 EST."""
        ts = utc_us(2024, 1, 15, 17, 30)

        assert format_timestamp(ts) == "2024-01-15 12:30 EST"

    def test_format_timestamp_eastern_summer(self):
        """UTC 16:00 in July is 12:00 EDT."""
        ts = utc_us(2024, 7, 1, 16, 0)

        assert format_timestamp(ts, "America/New_York") == "2024-07-01 12:00 EDT"

    def test_format_timestamp_other_zone(self):
        """The display zone is swappable."""
        ts = utc_us(2024, 1, 15, 17, 30)

        assert format_timestamp(ts, "UTC") == "2024-01-15 17:30 UTC"

    def test_format_timestamp_zero(self):
        assert format_timestamp(0) == "Never"

    def test_localize_feed(self):
        """Views carry converted timestamps and keep the assembled order."""
        threads = assemble_feed([
            msg(1, utc_us(2024, 1, 15, 17, 30), author="alice", content="hi"),
            msg(2, utc_us(2024, 1, 15, 18, 0), parent_id=1, author="bob"),
        ])

        views = localize_feed(threads, "America/New_York")

        assert len(views) == 1
        assert views[0].message.author == "alice"
        assert views[0].message.content == "hi"
        assert views[0].message.posted == "2024-01-15 12:30 EST"
        assert views[0].replies[0].author == "bob"
        assert views[0].replies[0].posted == "2024-01-15 13:00 EST"
        assert views[0].latest_activity == "2024-01-15 13:00 EST"

    def test_localize_feed_default_zone(self):
        """No zone given means US Eastern."""
        threads = assemble_feed([msg(1, utc_us(2024, 1, 15, 17, 30))])

        assert localize_feed(threads)[0].message.posted == "2024-01-15 12:30 EST"

    def test_truncate(self):
        assert truncate("short") == "short"
        assert truncate("x" * 60, 10) == "xxxxxxx..."
