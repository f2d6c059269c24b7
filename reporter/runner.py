"""Run a command with stdio passed through, then notify when it took long enough."""
from __future__ import annotations

import queue
import signal
import subprocess
import threading
from collections.abc import Sequence
from datetime import timedelta
from time import monotonic

from reporter._log import log
from reporter._types import Invocation, RunResult
from reporter.dispatch import notify, ring_bell
from reporter.policy import should_notify

# Signals relayed to the child while it runs
_FORWARDED_SIGNALS: tuple[signal.Signals, ...] = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGHUP") if hasattr(signal, name)
)


class SignalRelay:
    """Forward SIGINT/SIGTERM/SIGHUP to a child process for as long as it runs.

    Handlers only enqueue the signal; a daemon thread drains the queue and
    calls ``send_signal`` on the child. Closing the relay restores the
    previous handlers and stops the thread.
    """

    def __init__(self, signals: Sequence[signal.Signals] = _FORWARDED_SIGNALS) -> None:
        self.signals = tuple(signals)
        self._queue: queue.SimpleQueue[int | None] = queue.SimpleQueue()
        self._previous: dict[int, object] = {}
        self._thread: threading.Thread | None = None

    def _handler(self, signum: int, frame: object) -> None:  # noqa: ARG002
        self._queue.put(signum)

    def install(self) -> None:
        for sig in self.signals:
            self._previous[sig] = signal.signal(sig, self._handler)

    def start(self, proc: subprocess.Popen) -> None:
        self._thread = threading.Thread(target=self._forward, args=(proc,), daemon=True)
        self._thread.start()

    def _forward(self, proc: subprocess.Popen) -> None:
        while True:
            signum = self._queue.get()
            if signum is None:
                return
            try:
                proc.send_signal(signum)
            except OSError as e:
                log(f"forwarding signal {signum}: {e}")

    def close(self) -> None:
        for sig, previous in self._previous.items():
            signal.signal(sig, previous if previous is not None else signal.SIG_DFL)
        self._previous.clear()
        self._queue.put(None)
        if self._thread is not None:
            self._thread.join(timeout=1)
            self._thread = None


class CommandError(Exception):
    """The child could not be started or reaped."""


def _exit_code(returncode: int) -> int:
    """Map Popen.returncode to a process exit code (signal N → 128 + N)."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def run_command(args: Sequence[str]) -> RunResult:
    """Run ``args`` with inherited stdio and measure its wall-clock duration.

    Raises CommandError when the child cannot be started or its wait fails.
    """
    relay = SignalRelay()
    relay.install()
    try:
        start = monotonic()
        try:
            proc = subprocess.Popen(list(args))
        except OSError as e:
            raise CommandError(f"failed to start command: {e}") from e

        relay.start(proc)
        try:
            returncode = proc.wait()
        except OSError as e:
            raise CommandError(f"failed to run command: {e}") from e
        duration = timedelta(seconds=monotonic() - start)
    finally:
        relay.close()

    return RunResult(duration=duration, exit_code=_exit_code(returncode))


def _finish(inv: Invocation, command_text: str, result: RunResult) -> None:
    if not should_notify(result.duration, inv.threshold, inv.always):
        return
    if inv.bell:
        ring_bell()
    notify(inv.title, command_text, result.duration, result.exit_code, inv.push_url)


def run_with_notification(inv: Invocation) -> int:
    """Wrapping mode: run the command, notify if warranted, return its exit code."""
    try:
        result = run_command(inv.command)
    except CommandError as e:
        log(str(e))
        return 1
    _finish(inv, " ".join(inv.command), result)
    return result.exit_code


def notify_only(inv: Invocation, command_text: str, duration: timedelta, exit_code: int) -> int:
    """Hook mode: decide and dispatch for an already-finished command."""
    _finish(inv, command_text, RunResult(duration=duration, exit_code=exit_code))
    return exit_code
