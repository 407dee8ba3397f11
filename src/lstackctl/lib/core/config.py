# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

import os
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml  # pip install pyyaml

from .paths import config_root, state_root as _state_root_base

DEFAULT_ENDPOINT = "localhost:4566"
DEFAULT_REGISTRY_DOMAIN = "localhost.localstack.cloud:4566"
DEFAULT_REGION = "us-east-1"
DEFAULT_HEALTH_URL = "http://localhost:4566/_localstack/health"


@dataclass(frozen=True)
class EmulatorSettings:
    """Where the emulator lives and which tools talk to it."""

    endpoint: str = DEFAULT_ENDPOINT
    """Registry login endpoint (``docker login`` target)."""

    registry_domain: str = DEFAULT_REGISTRY_DOMAIN
    """Host part of pushed/pulled image references."""

    region: str = DEFAULT_REGION
    health_url: str = DEFAULT_HEALTH_URL
    aws_cli: str = "awslocal"
    container_engine: str = "docker"
    health_interval: float = 2.0
    health_retries: int = 30


# ---------- Global config file ----------


def global_config_search_paths() -> list[Path]:
    """Return the ordered list of paths that will be checked for global config.

    - If LSTACKCTL_CONFIG_FILE is set, only that single path is considered.
    - Otherwise, check in order:
        1) <user config dir>/config.yml (honours XDG_CONFIG_HOME)
        2) sys.prefix/etc/lstackctl/config.yml
        3) /etc/lstackctl/config.yml
    """
    env_file = os.environ.get("LSTACKCTL_CONFIG_FILE")
    if env_file:
        return [Path(env_file).expanduser().resolve()]

    user_cfg = config_root() / "config.yml"
    sp_cfg = Path(sys.prefix) / "etc" / "lstackctl" / "config.yml"
    etc_cfg = Path("/etc/lstackctl/config.yml")
    return [user_cfg, sp_cfg, etc_cfg]


def global_config_path() -> Path:
    """Global config file path: the first existing search path.

    An explicit LSTACKCTL_CONFIG_FILE is returned even if missing, to make the
    override visible. If nothing exists, the last candidate is returned.
    """
    candidates = global_config_search_paths()
    if len(candidates) == 1:
        return candidates[0]

    for c in candidates:
        if c.is_file():
            return c.resolve()
    return candidates[-1]


def load_global_config() -> dict[str, Any]:
    cfg_path = global_config_path()
    if not cfg_path.is_file():
        return {}
    data = yaml.safe_load(cfg_path.read_text())
    return data if isinstance(data, dict) else {}


def get_global_section(key: str) -> dict[str, Any]:
    """Return a top-level section from the global config, defaulting to ``{}``.

    If the value under *key* is not a dict (e.g. ``emulator: "oops"``),
    returns ``{}`` so callers can use ``.get()`` unconditionally.
    """
    value = load_global_config().get(key, {})
    if not isinstance(value, dict):
        return {}
    return value


# ---------- Path resolution ----------


def _resolve_path(
    env_var: str | None,
    config_key: tuple[str, str] | None,
    default: Callable[[], Path],
) -> Path:
    """Resolve a path: env var -> global config -> computed default."""
    if env_var:
        env = os.environ.get(env_var)
        if env:
            return Path(env).expanduser().resolve()

    if config_key:
        try:
            val = get_global_section(config_key[0]).get(config_key[1])
            if val:
                return Path(val).expanduser().resolve()
        except (OSError, yaml.YAMLError):
            pass

    return default().resolve()


def state_root() -> Path:
    """Writable state directory.

    Precedence:
    - Environment variable LSTACKCTL_STATE_DIR
    - Global config ``paths.state_root``
    - Platform default from ``paths.state_root()``
    """
    return _resolve_path("LSTACKCTL_STATE_DIR", ("paths", "state_root"), _state_root_base)


def debug_log_path() -> Path:
    return state_root() / "lstackctl.log"


# ---------- Emulator settings ----------


def _or_default(value: Any, default: Any) -> Any:
    """Treat a missing or null config value as unset; 0 stays a real value."""
    return default if value is None else value


def load_settings() -> EmulatorSettings:
    """Resolve emulator settings: environment -> global config -> defaults.

    ``AWS_REGION`` overrides ``emulator.region`` the same way the AWS CLI
    itself would pick it up.
    """
    emulator = get_global_section("emulator")
    tools = get_global_section("tools")
    health = get_global_section("health")
    defaults = EmulatorSettings()

    region = os.environ.get("AWS_REGION") or emulator.get("region") or defaults.region

    return EmulatorSettings(
        endpoint=str(emulator.get("endpoint") or defaults.endpoint),
        registry_domain=str(emulator.get("registry_domain") or defaults.registry_domain),
        region=str(region),
        health_url=str(emulator.get("health_url") or defaults.health_url),
        aws_cli=str(tools.get("aws_cli") or defaults.aws_cli),
        container_engine=str(tools.get("container_engine") or defaults.container_engine),
        health_interval=float(_or_default(health.get("interval"), defaults.health_interval)),
        health_retries=int(_or_default(health.get("retries"), defaults.health_retries)),
    )
