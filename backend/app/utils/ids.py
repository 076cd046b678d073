"""Identifier helpers for questions."""

import time


def timestamp_id() -> str:
    """Return the current epoch time in milliseconds as a string."""
    return str(int(time.time() * 1000))
