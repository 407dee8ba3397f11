# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""The ECR verb table.

A data-driven registry of verbs (``ECR_COMMANDS``) plus the validation and
help text derived from it. ``EcrCommand.invoke`` checks the required
positional arguments before anything is delegated, so a usage error never
leaves a partial side effect behind.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from ..core.config import EmulatorSettings
from ..core.errors import UsageError
from . import operations
from .registry import DEFAULT_TAG

DEFAULT_PROG = "lstackctl-ecr"
HELP_VERB = "help"


@dataclass(frozen=True)
class EcrCommand:
    """Describes one verb of the ECR dispatcher."""

    verb: str
    """Command-line verb (e.g. ``"build-push"``)."""

    summary: str
    """One-line description shown in help."""

    handler: Callable[..., object]
    """Operation called with the positional values and ``settings=``."""

    required: tuple[str, ...] = ()
    """Placeholder names of required positional arguments, in order."""

    optional: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    """``(placeholder, default)`` pairs for trailing optional arguments."""

    example: str = ""
    """Arguments of one example invocation (without prog and verb)."""

    @property
    def signature(self) -> str:
        parts = [self.verb]
        parts.extend(f"<{name}>" for name in self.required)
        parts.extend(f"[{name}]" for name, _ in self.optional)
        return " ".join(parts)

    def usage(self, prog: str = DEFAULT_PROG) -> str:
        return f"Usage: {prog} {self.signature}"

    def missing_message(self) -> str:
        if len(self.required) == 1:
            return f"{self.required[0].replace('-', ' ').capitalize()} required"
        return "Missing required arguments"

    def bind(self, args: list[str], prog: str = DEFAULT_PROG) -> list[str]:
        """Validate *args* and return the full positional list with defaults.

        Missing or empty required values raise ``UsageError``. Missing or
        empty optional values take their default. Surplus values are dropped.
        """
        values = list(args[: len(self.required) + len(self.optional)])
        values += [""] * (len(self.required) + len(self.optional) - len(values))

        if any(not v for v in values[: len(self.required)]):
            raise UsageError(self.missing_message(), self.usage(prog))

        for i, (_, default) in enumerate(self.optional, start=len(self.required)):
            if not values[i]:
                values[i] = default
        return values

    def invoke(
        self,
        args: list[str],
        *,
        settings: EmulatorSettings | None = None,
        prog: str = DEFAULT_PROG,
    ) -> None:
        values = self.bind(args, prog)
        self.handler(*values, settings=settings)


_ALL_COMMANDS: list[EcrCommand] = [
    EcrCommand(
        verb="create",
        summary="Create ECR repository",
        handler=operations.create_repo,
        required=("repository-name",),
        example="lambda-processor",
    ),
    EcrCommand(
        verb="list",
        summary="List all repositories",
        handler=operations.list_repos,
    ),
    EcrCommand(
        verb="list-images",
        summary="List images in repository",
        handler=operations.list_images,
        required=("repository-name",),
        example="lambda-processor",
    ),
    EcrCommand(
        verb="login",
        summary="Authenticate with ECR",
        handler=operations.ecr_login,
    ),
    EcrCommand(
        verb="build-push",
        summary="Build and push image",
        handler=operations.build_push,
        required=("dockerfile-path", "repository-name"),
        optional=(("tag", DEFAULT_TAG),),
        example="./my-app lambda-processor v1.0.0",
    ),
    EcrCommand(
        verb="pull",
        summary="Pull image from ECR",
        handler=operations.pull_image,
        required=("repository-name",),
        optional=(("tag", DEFAULT_TAG),),
        example="lambda-processor v1.0.0",
    ),
    EcrCommand(
        verb="delete-image",
        summary="Delete specific image",
        handler=operations.delete_image,
        required=("repository-name", "tag"),
        example="lambda-processor v1.0.0",
    ),
    EcrCommand(
        verb="delete-repo",
        summary="Delete repository (force=true also deletes its images)",
        handler=operations.delete_repo,
        required=("repository-name",),
        optional=(("force", "false"),),
        example="lambda-processor true",
    ),
    EcrCommand(
        verb="get-uri",
        summary="Get repository URI",
        handler=operations.get_uri,
        required=("repository-name",),
        example="lambda-processor",
    ),
]

ECR_COMMANDS: dict[str, EcrCommand] = {}
"""All dispatchable verbs, keyed by verb. ``help`` is handled by the dispatcher."""

for _c in _ALL_COMMANDS:
    if _c.verb in ECR_COMMANDS or _c.verb == HELP_VERB:
        raise RuntimeError(f"Duplicate ECR verb: {_c.verb!r}")
    ECR_COMMANDS[_c.verb] = _c


def help_text(prog: str = DEFAULT_PROG) -> str:
    """Return the usage summary listing every verb, its arguments and an example."""
    rows = [(c.signature, c.summary) for c in _ALL_COMMANDS]
    rows.append((HELP_VERB, "Show this help"))
    width = max(len(sig) for sig, _ in rows) + 3

    lines = [
        "LocalStack ECR Management Tool",
        "",
        f"Usage: {prog} <command> [options]",
        "",
        "Commands:",
    ]
    lines.extend(f"  {sig.ljust(width)}{summary}" for sig, summary in rows)
    lines += ["", "Examples:"]
    for c in _ALL_COMMANDS:
        lines.append(f"  {prog} {c.verb} {c.example}".rstrip())
    lines.append(f"  {prog} {HELP_VERB}")
    return "\n".join(lines)
