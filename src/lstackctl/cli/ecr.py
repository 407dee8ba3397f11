# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""``lstackctl-ecr``: verb dispatcher for the local ECR registry.

``lstackctl-ecr <verb> [args...]``. Unknown or missing verbs print help and
exit 0, a missing required argument exits 1 without calling any tool, and a
failing tool's status becomes the exit status unchanged.
"""

import sys

from ..lib._util.ansi import error
from ..lib._util.logging_utils import _log_debug
from ..lib.core.config import EmulatorSettings
from ..lib.core.errors import DelegateError, UsageError
from ..lib.ecr.commands import DEFAULT_PROG, ECR_COMMANDS, help_text


def dispatch(
    argv: list[str],
    *,
    prog: str = DEFAULT_PROG,
    settings: EmulatorSettings | None = None,
) -> int:
    """Run one verb and return the process exit status."""
    verb = argv[0] if argv else ""
    command = ECR_COMMANDS.get(verb)
    if command is None:
        print(help_text(prog))
        return 0

    _log_debug(f"ecr: {verb} {argv[1:]}")
    try:
        command.invoke(argv[1:], settings=settings, prog=prog)
    except UsageError as e:
        error(e.message)
        print(e.usage, file=sys.stderr)
        return 1
    except DelegateError as e:
        _log_debug(f"ecr: {verb} failed: {e}")
        return e.returncode
    return 0


def main(argv: list[str] | None = None) -> int:
    return dispatch(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    sys.exit(main())
