"""Notification dispatch: desktop channel with stderr fallback, plus HTTP push."""
from __future__ import annotations

import sys
from datetime import timedelta

from reporter._log import log
from reporter.desktop import NotifierError, get_desktop_notifier
from reporter.formatting import status_body
from reporter.push import PushError, send_push


def ring_bell() -> None:
    """Emit a terminal bell on stderr."""
    sys.stderr.write("\a")
    sys.stderr.flush()


def notify(title: str, command: str, duration: timedelta, exit_code: int, push_url: str = "") -> None:
    """Send a completion notification on every channel.

    The desktop and push channels fail independently; neither failure
    propagates to the caller.
    """
    body = status_body(exit_code, duration)
    subtitle = command

    try:
        get_desktop_notifier().notify(title, body, subtitle)
    except NotifierError:
        log(f"{subtitle} — {body}", tag="notify")

    try:
        send_push(push_url, title, body, subtitle)
    except PushError as e:
        log(str(e), tag="push")
