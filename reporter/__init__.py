"""reporter — run a command and get notified when it finishes."""
from __future__ import annotations

__version__ = "1.2.0"

# Re-export the primary entry points
from reporter._log import log as _log  # noqa: F401
from reporter._types import Invocation, RunResult  # noqa: F401
from reporter.config import _cfg_bool, _cfg_str, _getenv_default, _load_config  # noqa: F401
from reporter.desktop import DesktopNotifier, NotifierError, get_desktop_notifier  # noqa: F401
from reporter.dispatch import notify, ring_bell  # noqa: F401
from reporter.formatting import escape_applescript, format_duration, parse_duration, status_body  # noqa: F401
from reporter.policy import should_notify  # noqa: F401
from reporter.push import PushError, push_payload, send_push  # noqa: F401
from reporter.runner import CommandError, SignalRelay, notify_only, run_command, run_with_notification  # noqa: F401
