"""Tests for notification dispatch and channel independence."""
from __future__ import annotations

import sys
from datetime import timedelta
from typing import Any

import pytest


class TestNotify:
    """Test dispatch.notify channel handling."""

    def test_desktop_and_push_both_attempted(
        self, reporter: Any, fake_notifier: list, push_calls: list,
    ) -> None:
        reporter.notify("Task finished", "make all", timedelta(seconds=15), 0, "https://ntfy.sh/t")
        assert fake_notifier == [("Task finished", "succeeded in 15s", "make all")]
        assert push_calls == [("https://ntfy.sh/t", "Task finished", "succeeded in 15s", "make all")]

    def test_failure_body(self, reporter: Any, fake_notifier: list, push_calls: list) -> None:
        reporter.notify("Task finished", "false", timedelta(seconds=2), 1)
        assert fake_notifier[0][1] == "failed (exit 1) in 2s"

    def test_desktop_failure_falls_back_to_stderr(
        self, reporter: Any, push_calls: list, monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(
            sys.modules["reporter.desktop"], "_notifier_instance", reporter.DesktopNotifier("win32"),
        )
        reporter.notify("Task finished", "sleep 15", timedelta(seconds=15), 0, "https://ntfy.sh/t")
        err = capsys.readouterr().err
        assert "[notify] sleep 15 — succeeded in 15s\n" in err
        assert len(push_calls) == 1

    def test_push_failure_is_reported_and_desktop_still_sent(
        self, reporter: Any, fake_notifier: list, monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def failing_push(url: str, title: str, body: str, subtitle: str) -> None:
            raise reporter.PushError("push to https://ntfy.sh/t returned 500 Internal Server Error")

        monkeypatch.setattr(sys.modules["reporter.dispatch"], "send_push", failing_push)
        reporter.notify("Task finished", "make", timedelta(seconds=30), 0, "https://ntfy.sh/t")
        err = capsys.readouterr().err
        assert "[push] push to https://ntfy.sh/t returned 500 Internal Server Error" in err
        assert "[notify]" not in err
        assert len(fake_notifier) == 1

    def test_no_push_url_attempts_nothing_remote(
        self, reporter: Any, fake_notifier: list, monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        reporter.notify("Task finished", "make", timedelta(seconds=30), 0, "")
        assert "[push]" not in capsys.readouterr().err


class TestRingBell:
    """Test the terminal bell."""

    def test_writes_bel_to_stderr(self, reporter: Any, capsys: pytest.CaptureFixture[str]) -> None:
        reporter.ring_bell()
        captured = capsys.readouterr()
        assert captured.err == "\a"
        assert captured.out == ""


class TestNotificationFailuresKeepExitCode:
    """Push and desktop problems never replace the command's exit code."""

    def _inv(self, reporter: Any, push_url: str) -> Any:
        return reporter.Invocation(
            command=(), threshold=timedelta(seconds=10), always=True, bell=False, push_url=push_url,
        )

    def test_undecodable_command_with_push(
        self, reporter: Any, fake_notifier: list, monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def refused(req: Any, timeout: float) -> None:
            raise OSError("connection refused")

        monkeypatch.setattr(sys.modules["reporter.push"].urllib.request, "urlopen", refused)
        inv = self._inv(reporter, "http://127.0.0.1:9/")
        assert reporter.notify_only(inv, "ls \udcff", timedelta(seconds=1), 7) == 7
        assert "[push] posting to http://127.0.0.1:9/" in capsys.readouterr().err
        assert len(fake_notifier) == 1

    def test_data_url_push(
        self, reporter: Any, fake_notifier: list, capsys: pytest.CaptureFixture[str],
    ) -> None:
        inv = self._inv(reporter, "data:,hello")
        assert reporter.notify_only(inv, "make", timedelta(seconds=1), 7) == 7
        assert "[push] posting to data:,hello: unsupported protocol scheme 'data'" in capsys.readouterr().err
