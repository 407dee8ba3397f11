# SPDX-FileCopyrightText: 2026 Jiri Vyskocil
# SPDX-License-Identifier: Apache-2.0

"""Packaged resource templates with ``{{VAR}}`` token replacement."""

from importlib import resources


def render_resource(rel_path: str, variables: dict | None = None) -> str:
    """Read ``lstackctl/resources/<rel_path>`` and replace ``{{KEY}}`` tokens.

    Uses the importlib.resources Traversable API so it works from wheels too.
    """
    content = (resources.files("lstackctl") / "resources" / rel_path).read_text(
        encoding="utf-8"
    )
    for k, v in (variables or {}).items():
        content = content.replace(f"{{{{{k}}}}}", str(v))
    return content
