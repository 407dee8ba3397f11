# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Exit-carrying errors raised by the library and turned into statuses by the CLIs.

All are ``SystemExit`` subclasses, so an uncaught one still terminates the
process with the right code.
"""


class UsageError(SystemExit):
    """A required argument is missing or empty. Always exits 1."""

    def __init__(self, message: str, usage: str) -> None:
        super().__init__(1)
        self.message = message
        self.usage = usage

    def __str__(self) -> str:
        return f"{self.message}\n{self.usage}"


class DelegateError(SystemExit):
    """A delegated tool exited non-zero; ``code`` mirrors its status."""

    def __init__(self, cmd: list[str], returncode: int) -> None:
        super().__init__(returncode)
        self.cmd = list(cmd)
        self.returncode = returncode

    def __str__(self) -> str:
        return f"{self.cmd[0] if self.cmd else '?'} exited with status {self.returncode}"


class EmulatorNotReady(SystemExit):
    """The health endpoint never answered within the retry budget. Exits 1."""

    def __init__(self, url: str) -> None:
        super().__init__(1)
        self.url = url

    def __str__(self) -> str:
        return f"LocalStack did not become ready at {self.url}"
