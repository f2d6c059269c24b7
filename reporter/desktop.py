"""Desktop notification channel: osascript on macOS, notify-send on Linux."""
from __future__ import annotations

import shutil
import subprocess
import sys
import threading

from reporter.formatting import escape_applescript

# Notifier binary per platform family
_NOTIFIER_BINARIES: dict[str, str] = {
    "darwin": "osascript",
    "linux": "notify-send",
}


class NotifierError(Exception):
    """The desktop notifier is unavailable or failed to run."""


def _platform_family(platform: str) -> str:
    if platform == "darwin":
        return "darwin"
    if platform.startswith("linux"):
        return "linux"
    return platform


class DesktopNotifier:
    """Sends desktop notifications via the platform's notifier binary.

    The binary lookup happens lazily on first use and at most once per
    instance; the result is never invalidated.
    """

    def __init__(self, platform: str | None = None) -> None:
        self.platform = _platform_family(platform or sys.platform)
        self._lock = threading.Lock()
        self._resolved = False
        self._path: str | None = None

    @property
    def binary(self) -> str | None:
        """Name of the notifier binary for this platform, or None if unsupported."""
        return _NOTIFIER_BINARIES.get(self.platform)

    @property
    def path(self) -> str | None:
        """Resolved path of the notifier binary (cached after the first lookup)."""
        if not self._resolved:
            with self._lock:
                if not self._resolved:
                    self._path = shutil.which(self.binary) if self.binary else None
                    self._resolved = True
        return self._path

    @property
    def available(self) -> bool:
        return self.path is not None

    def notify(self, title: str, body: str, subtitle: str) -> None:
        """Show a notification. Raises NotifierError on any failure."""
        if self.binary is None:
            raise NotifierError(f"no notifier available for {self.platform}")
        path = self.path
        if path is None:
            raise NotifierError(f"{self.binary} not found in PATH")

        if self.platform == "darwin":
            script = (
                f'display notification "{escape_applescript(body)}" '
                f'with title "{escape_applescript(title)}" '
                f'subtitle "{escape_applescript(subtitle)}"'
            )
            cmd = [path, "-e", script]
        else:
            cmd = [path, title, f"{subtitle} — {body}"]

        try:
            subprocess.run(
                cmd,
                check=True,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (OSError, ValueError, subprocess.CalledProcessError) as e:
            raise NotifierError(f"{self.binary}: {e}") from e


_notifier_instance: DesktopNotifier | None = None
_notifier_lock = threading.Lock()


def get_desktop_notifier() -> DesktopNotifier:
    """Get or create the process-wide DesktopNotifier."""
    global _notifier_instance
    if _notifier_instance is None:
        with _notifier_lock:
            if _notifier_instance is None:
                _notifier_instance = DesktopNotifier()
    return _notifier_instance
