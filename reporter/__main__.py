"""CLI dispatch for python3 -m reporter."""
from __future__ import annotations

from reporter.cli import cli_main

if __name__ == "__main__":
    cli_main()
