# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Platform-aware path resolution for config and state directories."""

import os
from pathlib import Path

from platformdirs import user_config_dir, user_state_dir

APP_NAME = "lstackctl"


def config_root() -> Path:
    """
    Base directory for the user's configuration.

    Priority:
      1. LSTACKCTL_CONFIG_DIR
      2. platformdirs user config dir (~/.config/lstackctl on Linux)
    """
    env = os.getenv("LSTACKCTL_CONFIG_DIR")
    if env:
        return Path(env).expanduser()
    return Path(user_config_dir(APP_NAME))


def state_root() -> Path:
    """
    Writable state (debug log, generated build contexts).

    Priority:
      1. LSTACKCTL_STATE_DIR
      2. platformdirs user state dir (~/.local/state/lstackctl on Linux)
    """
    env = os.getenv("LSTACKCTL_STATE_DIR")
    if env:
        return Path(env).expanduser()
    return Path(user_state_dir(APP_NAME))
