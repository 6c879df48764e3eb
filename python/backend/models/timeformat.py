"""Countdown formatting shared by the status summary and the frontends."""

from __future__ import annotations


def format_clock(seconds: int) -> str:
    """Return ``m:ss``, e.g. ``1:05``."""
    m, s = divmod(max(0, int(seconds)), 60)
    return f"{m}:{s:02d}"


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def describe_duration(seconds: int) -> str:
    """Spoken form of a duration.

    >>> describe_duration(65)
    '1 minute and 5 seconds'
    >>> describe_duration(45)
    '45 seconds'
    """
    m, s = divmod(max(0, int(seconds)), 60)
    if m > 0:
        return f"{_plural(m, 'minute')} and {_plural(s, 'second')}"
    return _plural(s, "second")
