# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Image reference conventions for the emulator's ECR registry."""

DEFAULT_TAG = "latest"


def local_image(repo_name: str, tag: str = DEFAULT_TAG) -> str:
    """Return the engine-local image name ``<repo>:<tag>``."""
    return f"{repo_name}:{tag}"


def registry_image(registry_domain: str, repo_name: str, tag: str = DEFAULT_TAG) -> str:
    """Return the fully qualified ``<domain>/<repo>:<tag>`` reference used for push/pull."""
    return f"{registry_domain}/{local_image(repo_name, tag)}"


def lambda_function_arn(region: str, account_id: str, function_name: str) -> str:
    return f"arn:aws:lambda:{region}:{account_id}:function:{function_name}"


def iam_role_arn(account_id: str, role_name: str) -> str:
    return f"arn:aws:iam::{account_id}:role/{role_name}"
