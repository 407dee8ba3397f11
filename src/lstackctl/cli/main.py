#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

import argparse
import sys

from .. import __version__
from .commands import e2e, ecr, info

# Optional: bash completion via argcomplete
try:
    import argcomplete  # type: ignore
except ImportError:  # pragma: no cover - optional dep
    argcomplete = None  # type: ignore

COMMAND_MODULES = (e2e, info)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lstackctl",
        description="lstackctl – operate a local LocalStack emulator (ECR images, example workflows)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Quick start:\n"
            "  1. Check:  lstackctl health\n"
            "  2. Images: lstackctl ecr build-push ./my-app my-repo v1.0.0\n"
            "  3. Demo:   lstackctl e2e\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"lstackctl {__version__}")
    sub = parser.add_subparsers(dest="cmd", required=True)
    ecr.register(sub)
    for module in COMMAND_MODULES:
        module.register(sub)
    return parser


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    # ecr verbs are parsed by the dispatcher, not argparse
    if argv[:1] == ["ecr"]:
        return ecr.forward(argv[1:])

    parser = build_parser()

    # Enable bash completion if argcomplete is present and activated
    if argcomplete is not None:  # pragma: no cover - shell integration
        argcomplete.autocomplete(parser)

    args = parser.parse_args(argv)
    for module in COMMAND_MODULES:
        result = module.dispatch(args)
        if result is not None:
            return result
    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    sys.exit(main())
