"""Notify/skip decision."""
from __future__ import annotations

from datetime import timedelta


def should_notify(duration: timedelta, threshold: timedelta, always: bool) -> bool:
    """True when forced, or when the run took at least ``threshold``."""
    if always:
        return True
    return duration >= threshold
