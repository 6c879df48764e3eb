"""Single-keypress reader for the terminal frontends.

Maps arrows / WASD to cursor movement and Space / Enter to a card flip.
Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
from typing import Callable

# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    " ": "flip",
    "\r": "flip",
    "\n": "flip",
    "r": "restart",
    "m": "menu",
    "h": "status",
    "?": "status",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    action = _KEY_MAP.get(ch.lower() if ch.isalpha() else ch)
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


def _resolve_escape(read_next: Callable[[], str | None]) -> str:
    """Finish an ``ESC`` sequence; *read_next* returns None when idle."""
    ch2 = read_next()
    if ch2 is None:
        return "quit"  # bare Escape
    if ch2 != "[":
        return "quit"
    ch3 = read_next()
    if ch3 is None:
        return ""
    return _ARROW_MAP.get(ch3, "")


# -- platform readers ------------------------------------------------------------


def _read_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        if timeout is not None:
            ready, _, _ = select.select([fd], [], [], timeout)
            if not ready:
                return None

        # os.read is unbuffered so select() still sees the remaining bytes
        # of a multi-byte arrow sequence.
        def read_next() -> str | None:
            r, _, _ = select.select([fd], [], [], 0.1)
            if not r:
                return None
            return os.read(fd, 1).decode("utf-8", errors="ignore")

        ch = os.read(fd, 1).decode("utf-8", errors="ignore")
        if ch == "\x1b":
            return _resolve_escape(read_next)
        return _resolve(ch)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]
    import time

    if timeout is not None:
        end = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= end:
                return None
            time.sleep(0.02)

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        # Windows arrow keys arrive as a two-character scan code.
        return {"H": "up", "P": "down", "K": "left", "M": "right"}.get(
            msvcrt.getwch(), ""
        )
    if ch == "\x1b":
        return "quit"
    return _resolve(ch)


_read = _read_windows if os.name == "nt" else _read_unix


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block for one keypress and return its action.

    Possible return values:
        "up", "down", "left", "right"  — cursor movement
        "flip"                         — Space / Enter
        "restart"                      — r
        "menu"                         — m
        "status"                       — h / ?
        "quit"                         — q / Ctrl-C / Escape
        "<char>"                       — unmapped printable char
        ""                             — unrecognised key
    """
    key = _read(None)
    assert key is not None
    return key


def get_key_timeout(timeout: float) -> str | None:
    """Like ``get_key`` but return ``None`` if nothing arrives in *timeout* s.

    The game loops use this to keep polling the scheduler between keys.
    """
    return _read(timeout)
