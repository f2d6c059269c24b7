"""Text formatting: durations, AppleScript escaping, status lines."""
from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal

_MICROSECOND = timedelta(microseconds=1)
_SECOND = timedelta(seconds=1)

_UNIT_MICROSECONDS: dict[str, Decimal] = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),  # U+00B5 micro sign
    "μs": Decimal(1),  # U+03BC greek mu
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}

# Longer units first so "ms" is never read as "m" + "s".
_UNIT_PATTERN = "ns|us|µs|μs|ms|s|m|h"
_NUMBER_PATTERN = r"\d+\.?\d*|\.\d+"
_DURATION_RE = re.compile(rf"([-+]?)((?:(?:{_NUMBER_PATTERN})(?:{_UNIT_PATTERN}))+)")
_PART_RE = re.compile(rf"({_NUMBER_PATTERN})({_UNIT_PATTERN})")

_APPLESCRIPT_ESCAPES = str.maketrans({
    "\\": "\\\\",
    '"': '\\"',
    "\n": " ",
    "\r": " ",
    "\t": " ",
})


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``10s``, ``1m30s``, ``1.5h`` or ``15s200ms``.

    Raises ValueError for anything that is not a sequence of number+unit pairs.
    """
    if text in ("0", "+0", "-0"):
        return timedelta(0)
    match = _DURATION_RE.fullmatch(text)
    if not match:
        raise ValueError(f"invalid duration {text!r}")
    sign, body = match.groups()
    total = Decimal(0)
    for number, unit in _PART_RE.findall(body):
        total += Decimal(number) * _UNIT_MICROSECONDS[unit]
    micros = int(total)
    try:
        return timedelta(microseconds=-micros if sign == "-" else micros)
    except OverflowError as e:
        raise ValueError(f"invalid duration {text!r}") from e


def format_duration(d: timedelta) -> str:
    """Human-friendly duration: ``500ms``, ``45s``, ``2m30s``, ``1h05m03s``.

    Below one second the value is rounded to the nearest millisecond; from one
    second up it is rounded to the nearest whole second and decomposed.
    """
    micros = max(d // _MICROSECOND, 0)
    if d < _SECOND:
        millis = (micros + 500) // 1000
        if millis == 0:
            return "0s"
        if millis == 1000:
            return "1s"
        return f"{millis}ms"

    seconds = (micros + 500_000) // 1_000_000
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    if hours > 0:
        return f"{hours}h{minutes:02d}m{secs:02d}s"
    if minutes > 0:
        return f"{minutes}m{secs:02d}s"
    return f"{secs}s"


def escape_applescript(text: str) -> str:
    """Escape text for an AppleScript double-quoted string literal."""
    return text.translate(_APPLESCRIPT_ESCAPES)


def status_body(exit_code: int, duration: timedelta) -> str:
    """Notification body: ``succeeded in 15s`` / ``failed (exit 2) in 1m03s``."""
    status = "succeeded" if exit_code == 0 else f"failed (exit {exit_code})"
    return f"{status} in {format_duration(duration)}"
