"""Command-line entry point for reporter."""
from __future__ import annotations

import argparse
import sys
from importlib import resources
from pathlib import Path

from reporter._log import setup_file_logging
from reporter._types import Invocation
from reporter.formatting import parse_duration
from reporter.runner import notify_only, run_with_notification


def _build_parser() -> argparse.ArgumentParser:
    from reporter.config import ALWAYS, BELL, PUSH_URL, THRESHOLD, TITLE

    parser = argparse.ArgumentParser(
        prog="reporter",
        usage="%(prog)s [flags] -- <command> [args...]",
        description="Run a command and send a notification when it finishes.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--threshold", default=THRESHOLD, metavar="DUR",
        help="minimum duration before a notification is sent (e.g. 5s, 1m30s)",
    )
    parser.add_argument(
        "--always", action="store_true", default=ALWAYS,
        help="send a notification even if the command completes before the threshold",
    )
    parser.add_argument(
        "--title", default=TITLE,
        help="title to display in notifications",
    )
    parser.add_argument(
        "--no-bell", dest="bell", action="store_false", default=BELL,
        help="do not emit a terminal bell alongside the notification",
    )
    parser.add_argument(
        "--push-url", default=PUSH_URL, metavar="URL",
        help="HTTP endpoint for phone push notifications (e.g. ntfy topic URL)",
    )
    parser.add_argument(
        "--notify-only", action="store_true",
        help="skip running a command and just send a notification (used by shell hooks)",
    )
    parser.add_argument(
        "--cmd", default="", metavar="TEXT",
        help="command string to display in notifications (notify-only mode)",
    )
    parser.add_argument(
        "--duration", default="", metavar="DUR",
        help="duration of the already-finished command (notify-only mode)",
    )
    parser.add_argument(
        "--exit", dest="exit_code", type=int, default=0, metavar="N",
        help="exit code of the already-finished command (notify-only mode)",
    )
    parser.add_argument("--version", action="store_true", help="print version and exit")
    parser.add_argument("--config", action="store_true", help="print effective configuration and exit")
    parser.add_argument("--hook-path", action="store_true", help="print the path of the shell hook script and exit")
    parser.add_argument("command", nargs=argparse.REMAINDER, help=argparse.SUPPRESS)
    return parser


def hook_path() -> Path:
    """Filesystem path of the bundled bash/zsh hook."""
    return Path(str(resources.files("reporter") / "shell" / "reporter-auto.sh"))


def _do_version() -> None:
    from reporter import __version__
    print(f"reporter {__version__}")


def _do_config() -> None:
    """Print effective configuration."""
    from reporter.config import ALWAYS, BELL, CONFIG_PATH, LOG_FILE, PUSH_URL, THRESHOLD, TITLE

    print("reporter config")
    print("──────────────────────────────────────")
    print(f"  config_file:  {CONFIG_PATH}{'' if CONFIG_PATH.exists() else ' (missing)'}")
    print(f"  threshold:    {THRESHOLD}")
    print(f"  always:       {ALWAYS}")
    print(f"  title:        {TITLE}")
    print(f"  bell:         {BELL}")
    print(f"  push_url:     {PUSH_URL or '(not set)'}")
    print(f"  log_file:     {LOG_FILE or '(stderr only)'}")
    print(f"  shell_hook:   {hook_path()}")
    print("──────────────────────────────────────")


def main(argv: list[str] | None = None) -> int:
    """Parse flags and route to wrapping or notify-only mode. Returns the exit code."""
    from reporter.config import LOG_FILE

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        _do_version()
        return 0
    if args.config:
        _do_config()
        return 0
    if args.hook_path:
        print(hook_path())
        return 0

    if LOG_FILE:
        setup_file_logging(Path(LOG_FILE).expanduser())

    try:
        threshold = parse_duration(args.threshold)
    except ValueError as e:
        parser.error(f"invalid threshold: {e}")

    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]

    inv = Invocation(
        command=tuple(command),
        threshold=threshold,
        always=args.always,
        title=args.title,
        bell=args.bell,
        push_url=args.push_url,
    )

    if args.notify_only:
        if not args.duration:
            parser.error("--duration is required in notify-only mode")
        try:
            duration = parse_duration(args.duration)
        except ValueError as e:
            parser.error(f"invalid duration: {e}")
        return notify_only(inv, args.cmd or " ".join(command), duration, args.exit_code)

    if not command:
        parser.error("no command given")
    return run_with_notification(inv)


def cli_main() -> None:
    """Console-script entry point."""
    sys.exit(main())
