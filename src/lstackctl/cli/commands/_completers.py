"""Shared argcomplete completers and helpers for CLI commands."""

from __future__ import annotations

import argparse
from collections.abc import Callable
from typing import Any

from ...lib.ecr.commands import ECR_COMMANDS, HELP_VERB


def complete_ecr_verbs(
    prefix: str, parsed_args: argparse.Namespace, **kwargs: object
) -> list[str]:  # pragma: no cover
    """Return ECR verbs matching *prefix* for argcomplete."""
    verbs = [*ECR_COMMANDS, HELP_VERB]
    return [v for v in verbs if v.startswith(prefix)]


def set_completer(action: argparse.Action, fn: Callable[..., Any]) -> None:
    """Attach an argcomplete completer to *action*, ignoring missing argcomplete."""
    action.completer = fn  # type: ignore[attr-defined]
