"""CLI entrypoint that runs a command while holding a lock."""

from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from kvlock.core.errors import AcquisitionFailed
from kvlock.core.manager import LockManager
from kvlock.core.settings import LockSettings
from kvlock.utils.env import get_bool_env
from kvlock.utils.logging import configure_logger, get_logger

EX_TEMPFAIL = 75

logger = get_logger("kvlock", rich=get_bool_env("KVLOCK_RICH_LOGS", default=True))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a command while holding a distributed lock.",
        usage="%(prog)s [--config PATH] [--timeout N] [--max-attempts N] resource -- command ...",
        epilog="Options must come before the resource. Everything after the resource is the command.",
    )
    parser.add_argument("resource", help="Name of the resource to lock")
    parser.add_argument("command", nargs=argparse.REMAINDER, help="Command to run under the lock, after an optional --")
    parser.add_argument("--config", type=Path, default=None, help="Path to lock settings YAML")
    parser.add_argument("--timeout", type=int, default=None, help="Seconds before the lock may be taken over")
    parser.add_argument("--max-attempts", type=int, default=None, help="Acquisition rounds before giving up")
    return parser


def load_settings(config: Optional[Path]) -> LockSettings:
    if config is not None:
        return LockSettings.from_file(config)
    return LockSettings.from_env()


def run(manager: LockManager, resource: str, command: List[str], *, timeout=None, max_attempts=None) -> int:
    try:
        return manager.with_lock(
            resource,
            lambda: subprocess.call(command),
            timeout=timeout,
            max_attempts=max_attempts,
        )
    except AcquisitionFailed as exc:
        logger.error("%s Gave up after %d attempts.", exc, exc.attempts)
        return EX_TEMPFAIL


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    command = args.command[1:] if args.command[:1] == ["--"] else args.command
    if not command:
        logger.error("No command given.")
        return 2

    settings = load_settings(args.config)
    rich = get_bool_env("KVLOCK_RICH_LOGS", default=True)
    configure_logger(logger.name, settings.log_level, rich=rich)
    manager = settings.build_manager(rich=rich)
    return run(manager, args.resource, command, timeout=args.timeout, max_attempts=args.max_attempts)


if __name__ == "__main__":
    sys.exit(main())
