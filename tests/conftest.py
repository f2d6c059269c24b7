"""Shared fixtures for reporter tests."""
from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture()
def reporter(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Any:
    """Import reporter with a sandboxed config file and a fresh notifier cache."""
    import reporter as _reporter
    from reporter import config, desktop

    patches: dict[str, object] = {
        "CONFIG_PATH": tmp_path / "config.json",
        "THRESHOLD": "10s",
        "ALWAYS": False,
        "TITLE": "Task finished",
        "BELL": True,
        "PUSH_URL": "",
        "LOG_FILE": "",
    }
    for attr, value in patches.items():
        monkeypatch.setattr(config, attr, value)

    # Clear caches
    monkeypatch.setattr(config, "_reporter_config", None)
    monkeypatch.setattr(desktop, "_notifier_instance", None)
    monkeypatch.setattr(sys.modules["reporter._log"], "_file_logger", None)

    return _reporter


@pytest.fixture()
def mock_notify(reporter: Any, monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    """Replace the dispatcher used by the runner with a call recorder."""
    calls: list[dict[str, Any]] = []

    def fake_notify(title: str, command: str, duration: timedelta, exit_code: int, push_url: str = "") -> None:
        calls.append({
            "title": title,
            "command": command,
            "duration": duration,
            "exit_code": exit_code,
            "push_url": push_url,
            "body": reporter.status_body(exit_code, duration),
        })

    monkeypatch.setattr(sys.modules["reporter.runner"], "notify", fake_notify)
    return calls


@pytest.fixture()
def fake_notifier(reporter: Any, monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, str, str]]:
    """Install a desktop notifier that records calls instead of spawning a binary."""
    calls: list[tuple[str, str, str]] = []

    class RecordingNotifier(reporter.DesktopNotifier):
        def notify(self, title: str, body: str, subtitle: str) -> None:
            calls.append((title, body, subtitle))

    monkeypatch.setattr(sys.modules["reporter.desktop"], "_notifier_instance", RecordingNotifier("linux"))
    return calls


@pytest.fixture()
def push_calls(reporter: Any, monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, str, str, str]]:
    """Record send_push calls made by the dispatcher."""
    calls: list[tuple[str, str, str, str]] = []

    def fake_send_push(url: str, title: str, body: str, subtitle: str) -> None:
        calls.append((url, title, body, subtitle))

    monkeypatch.setattr(sys.modules["reporter.dispatch"], "send_push", fake_send_push)
    return calls
