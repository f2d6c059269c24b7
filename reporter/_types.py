"""Value types for a single reporter invocation."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class Invocation:
    """Per-run settings, fixed once the command line has been parsed."""

    command: tuple[str, ...]
    threshold: timedelta
    always: bool = False
    title: str = "Task finished"
    bell: bool = True
    push_url: str = ""


@dataclass(frozen=True)
class RunResult:
    duration: timedelta
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0
