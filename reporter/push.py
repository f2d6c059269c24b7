"""HTTP push channel: POST a plain-text notification to a configured URL."""
from __future__ import annotations

import urllib.error
import urllib.parse
import urllib.request

from reporter.config import PUSH_TIMEOUT


class PushError(Exception):
    """Push delivery failed (transport error, timeout, or status >= 300)."""


def push_payload(title: str, body: str, subtitle: str) -> str:
    return f"{title} — {body}\n{subtitle}"


def _encode(text: str) -> bytes:
    """UTF-8 encode; undecodable argv bytes (surrogates) go back out unchanged."""
    try:
        return text.encode("utf-8", errors="surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", errors="replace")


def send_push(url: str, title: str, body: str, subtitle: str, timeout: float = PUSH_TIMEOUT) -> None:
    """POST the notification to ``url``. An empty url is a no-op.

    Raises PushError on failure.
    """
    if not url:
        return

    try:
        scheme = urllib.parse.urlsplit(url).scheme
    except ValueError as e:
        raise PushError(f"creating request for {url}: {e}") from e
    if scheme not in ("http", "https"):
        raise PushError(f"posting to {url}: unsupported protocol scheme {scheme!r}")

    data = _encode(push_payload(title, body, subtitle))
    try:
        req = urllib.request.Request(
            url, data=data,
            headers={"Content-Type": "text/plain"},
            method="POST",
        )
    except ValueError as e:
        raise PushError(f"creating request for {url}: {e}") from e

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            status = resp.status
            reason = resp.reason
    except urllib.error.HTTPError as e:
        raise PushError(f"push to {url} returned {e.code} {e.reason}") from e
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        raise PushError(f"posting to {url}: {e}") from e

    if status >= 300:
        raise PushError(f"push to {url} returned {status} {reason}")
