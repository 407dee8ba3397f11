# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Delegation to external tools (cloud CLI, container engine).

Every external call in lstackctl goes through one of these helpers:

- ``run_tool``: mandatory step, output goes straight to the terminal,
  non-zero status raises ``DelegateError`` carrying that status.
- ``capture_tool``: same, but stdout is captured and returned.
- ``try_tool`` / ``capture_or``: tolerant steps (shell ``|| true``), failure
  is reported as a value and never raised.

A tool missing from PATH is reported with the shell's status 127.
"""

import shlex
import subprocess

from ._util.ansi import error
from ._util.logging_utils import _log_debug
from .core.errors import DelegateError

COMMAND_NOT_FOUND = 127


def exit_status(returncode: int) -> int:
    """Map a subprocess return code to the status a shell would report.

    A tool killed by signal N has ``returncode == -N``; the shell reports 128+N.
    """
    return 128 - returncode if returncode < 0 else returncode


def _not_found(cmd: list[str]) -> DelegateError:
    error(f"{cmd[0]} not found; please install it or set tools.* in the lstackctl config")
    return DelegateError(cmd, COMMAND_NOT_FOUND)


def run_tool(cmd: list[str], *, input_text: str | None = None) -> None:
    """Run *cmd* with inherited stdout/stderr; raise ``DelegateError`` on failure."""
    _log_debug(f"run: {shlex.join(cmd)}")
    try:
        result = subprocess.run(cmd, input=input_text, text=True, check=False)
    except FileNotFoundError:
        _log_debug(f"run: {cmd[0]} not found")
        raise _not_found(cmd) from None
    _log_debug(f"run: exit {result.returncode}")
    if result.returncode != 0:
        raise DelegateError(cmd, exit_status(result.returncode))


def capture_tool(cmd: list[str]) -> str:
    """Run *cmd* and return its stdout; stderr passes through to the terminal."""
    _log_debug(f"capture: {shlex.join(cmd)}")
    try:
        result = subprocess.run(cmd, stdout=subprocess.PIPE, text=True, check=False)
    except FileNotFoundError:
        _log_debug(f"capture: {cmd[0]} not found")
        raise _not_found(cmd) from None
    _log_debug(f"capture: exit {result.returncode}")
    if result.returncode != 0:
        raise DelegateError(cmd, exit_status(result.returncode))
    return result.stdout


def try_tool(cmd: list[str], *, quiet: bool = True) -> bool:
    """Best-effort call. Returns True on exit status 0.

    With *quiet* the tool's stderr is discarded (``2>/dev/null``).
    """
    _log_debug(f"try: {shlex.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            stderr=subprocess.DEVNULL if quiet else None,
            check=False,
        )
    except FileNotFoundError:
        _log_debug(f"try: {cmd[0]} not found")
        return False
    _log_debug(f"try: exit {result.returncode}")
    return result.returncode == 0


def capture_or(cmd: list[str], default: str) -> str:
    """Return the stripped stdout of *cmd*, or *default* if it fails."""
    _log_debug(f"capture_or: {shlex.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        return default
    if result.returncode != 0:
        _log_debug(f"capture_or: exit {result.returncode}, using {default!r}")
        return default
    return result.stdout.strip()
