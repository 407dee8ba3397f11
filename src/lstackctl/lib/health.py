# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Fixed-interval polling of the emulator's health endpoint and other checks."""

import time
import urllib.error
import urllib.request
from collections.abc import Callable

from ._util.ansi import status, warn
from ._util.logging_utils import _log_debug


def poll_until(
    check: Callable[[], bool],
    *,
    interval: float,
    retries: int,
    waiting_message: str | None = None,
) -> bool:
    """Call *check* until it returns True or *retries* checks have failed.

    Sleeps *interval* seconds between checks (not after the last one). A
    budget below 1 still makes a single check; the CLI rejects such values.
    """
    attempts = max(1, retries)
    for attempt in range(1, attempts + 1):
        if check():
            return True
        if waiting_message:
            warn(f"{waiting_message} ({attempt}/{attempts})")
        if attempt < attempts:
            time.sleep(interval)
    return False


def is_emulator_ready(url: str, timeout: float = 5.0) -> bool:
    """Return True if a GET of the health *url* answers with a 2xx status."""
    req = urllib.request.Request(url, headers={"User-Agent": "lstackctl"})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:  # nosec B310
            return 200 <= resp.status < 300
    except (urllib.error.URLError, OSError, ValueError) as exc:
        _log_debug(f"health: {url} not ready ({exc})")
        return False


def wait_for_emulator(url: str, *, interval: float, retries: int) -> bool:
    """Block until the emulator is healthy or the retry budget is exhausted."""
    status("INFO", "Waiting for LocalStack to be ready...")
    ready = poll_until(
        lambda: is_emulator_ready(url),
        interval=interval,
        retries=retries,
        waiting_message="Waiting for LocalStack...",
    )
    if ready:
        status("INFO", "LocalStack is ready!")
    return ready
