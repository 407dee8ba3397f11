"""lstackctl package.

Modules:
- lstackctl.cli: CLI entry points (lstackctl, lstackctl-ecr)
- lstackctl.lib.core: Settings, paths, error types
- lstackctl.lib.ecr: Local ECR registry operations and the verb table
- lstackctl.lib.e2e: End-to-end example workflow
- lstackctl.lib._util: Internal helpers (colour, debug log, templates)
"""

__all__ = ["cli", "lib"]

# Version information - single source of truth using importlib.metadata
try:
    from importlib.metadata import version

    __version__ = version("lstackctl")
except Exception:
    # Fallback for development mode when package is not installed
    try:
        import tomllib
        from pathlib import Path

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
                __version__ = pyproject_data["tool"]["poetry"]["version"]
        else:
            __version__ = "unknown"
    except Exception:
        __version__ = "unknown"
