# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""End-to-end example command."""

from pathlib import Path

from ...lib._util.ansi import error
from ...lib.core.errors import DelegateError, EmulatorNotReady
from ...lib.e2e.workflow import EndToEndRun


def register(subparsers) -> None:
    """Register the ``e2e`` subcommand."""
    p_e2e = subparsers.add_parser(
        "e2e",
        help="Run the end-to-end example: ECR image -> Lambda on S3 upload -> Fargate reader",
    )
    p_e2e.add_argument(
        "--build-dir",
        type=Path,
        default=None,
        help="Where to write the build context and JSON inputs (default: ./build)",
    )
    p_e2e.add_argument(
        "--skip-wait",
        action="store_true",
        help="Do not poll the LocalStack health endpoint before starting",
    )


def dispatch(args) -> int | None:
    """Handle ``e2e``. Returns the exit status, or None if not handled."""
    if args.cmd != "e2e":
        return None
    try:
        EndToEndRun(build_dir=args.build_dir).run(wait=not args.skip_wait)
    except DelegateError as e:
        error(f"Step failed: {e}")
        return e.returncode
    except EmulatorNotReady as e:
        error(str(e))
        return 1
    return 0
