"""Collect instance dumps either on standard output or in a string buffer.

By default, dumped text goes to standard output.  After
:func:`dump_to_string` has been called, it is appended to an in-memory
buffer instead, which :func:`dump_buffer` retrieves and clears.
"""

from __future__ import annotations

import sys
import threading

_lock = threading.Lock()
# None means "write to stdout"; a list means "append to this buffer".
_buffer: list[str] | None = None


def dump_to_string() -> None:
    """Send subsequent dumps to an empty string buffer instead of stdout."""
    global _buffer
    with _lock:
        _buffer = []


def dump_buffer() -> str:
    """Return the buffered dump text and clear the buffer.

    Returns an empty string when dumping goes to stdout.
    """
    with _lock:
        if _buffer is None:
            return ""
        text = "".join(_buffer)
        _buffer.clear()
        return text


def dump(s: str) -> None:
    """Write ``s`` to stdout, or append it to the buffer if one is active."""
    with _lock:
        if _buffer is None:
            sys.stdout.write(s)
        else:
            _buffer.append(s)