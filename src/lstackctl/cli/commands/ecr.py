"""ECR registry commands, forwarded verbatim to the ``lstackctl-ecr`` dispatcher."""

import argparse

from ...lib.ecr.commands import HELP_VERB
from ..ecr import dispatch as ecr_dispatch
from ._completers import complete_ecr_verbs, set_completer

PROG = "lstackctl ecr"


def register(subparsers) -> None:
    """Register the ``ecr`` subcommand (listing and completion only)."""
    p_ecr = subparsers.add_parser(
        "ecr",
        help=f"Manage the local ECR registry (see '{PROG} {HELP_VERB}')",
        add_help=False,
    )
    _a = p_ecr.add_argument("verb", nargs="?", help="ECR verb (create, list, build-push, ...)")
    set_completer(_a, complete_ecr_verbs)
    p_ecr.add_argument("ecr_args", nargs=argparse.REMAINDER, help="Verb arguments")


def forward(argv: list[str]) -> int:
    """Hand ``lstackctl ecr`` arguments to the dispatcher unparsed.

    Verb validation and help belong to the dispatcher so that both entry
    points share its exit statuses (0 for help, 1 for usage errors).
    """
    return ecr_dispatch(argv, prog=PROG)
