"""Utility helper functions."""

from postdeck.utils.helpers import get_summary, host, strip_bearer, today_str, utcnow

__all__ = [
    "get_summary",
    "host",
    "strip_bearer",
    "today_str",
    "utcnow",
]
