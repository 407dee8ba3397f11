# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Informational commands: config, health."""

import argparse
import os
from pathlib import Path

from ...lib._util.ansi import color, supports_color
from ...lib.core.config import (
    debug_log_path,
    global_config_path,
    global_config_search_paths,
    load_settings,
)
from ...lib.health import wait_for_emulator


def _gray(text: str, enabled: bool) -> str:
    return color(text, "90", enabled)


def _yes_no(value: bool, enabled: bool) -> str:
    return color("yes" if value else "no", "32" if value else "31", enabled)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def register(subparsers) -> None:
    """Register informational subcommands."""
    subparsers.add_parser("config", help="Show config search paths and resolved settings")

    p_health = subparsers.add_parser(
        "health", help="Wait until the LocalStack health endpoint answers"
    )
    p_health.add_argument("--url", help="Health endpoint (default from config)")
    p_health.add_argument(
        "--retries", type=_positive_int, help="Number of checks before giving up (at least 1)"
    )
    p_health.add_argument("--interval", type=float, help="Seconds between checks")


def _print_config() -> None:
    """Display configuration sources, resolved settings and output paths."""
    color_enabled = supports_color()
    print("Configuration (read):")
    gcfg = global_config_path()
    print(
        f"- Global config file: {_gray(str(gcfg), color_enabled)} "
        f"(exists: {_yes_no(gcfg.is_file(), color_enabled)})"
    )
    print("- Global config search order:")
    for p in global_config_search_paths():
        print(f"  • {_gray(str(p), color_enabled)} (exists: {_yes_no(p.is_file(), color_enabled)})")

    settings = load_settings()
    print("Resolved settings:")
    for name, value in vars(settings).items():
        print(f"- {name}: {value}")

    print("Writable locations (write):")
    log_path = debug_log_path()
    print(
        f"- Debug log: {_gray(str(log_path), color_enabled)} "
        f"(exists: {_yes_no(Path(log_path).is_file(), color_enabled)})"
    )

    print("Environment overrides (if set):")
    for var in (
        "AWS_REGION",
        "LSTACKCTL_CONFIG_FILE",
        "LSTACKCTL_CONFIG_DIR",
        "LSTACKCTL_STATE_DIR",
        "XDG_CONFIG_HOME",
    ):
        val = os.environ.get(var)
        if val is not None:
            print(f"- {var}={_gray(val, color_enabled)}")


def dispatch(args) -> int | None:
    """Handle informational commands. Returns the exit status, or None if not handled."""
    if args.cmd == "config":
        _print_config()
        return 0
    if args.cmd == "health":
        settings = load_settings()
        ready = wait_for_emulator(
            args.url or settings.health_url,
            interval=args.interval if args.interval is not None else settings.health_interval,
            retries=args.retries if args.retries is not None else settings.health_retries,
        )
        return 0 if ready else 1
    return None
