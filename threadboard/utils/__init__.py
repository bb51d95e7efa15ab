"""ThreadBoard Utilities Module."""

from .formatting import format_timestamp, localize_feed

__all__ = ["format_timestamp", "localize_feed"]
