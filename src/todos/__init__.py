"""In-memory ToDos list."""

from __future__ import annotations

import importlib.metadata
from pathlib import Path

import tomli

__all__ = ["__version__"]


def _get_version() -> str:
    """Get version from pyproject.toml or importlib.metadata.

    First tries to read from pyproject.toml for development installs.
    Falls back to importlib.metadata for installed packages.

    Returns:
        Version string.
    """
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject_path.exists():
        try:
            with open(pyproject_path, "rb") as f:
                pyproject = tomli.load(f)
            if pyproject.get("project", {}).get("name") == "todos":
                return pyproject["project"]["version"]
        except (OSError, tomli.TOMLDecodeError, KeyError):
            pass  # Fall through to importlib.metadata

    try:
        return importlib.metadata.version("todos")
    except importlib.metadata.PackageNotFoundError:
        # Last resort fallback
        return "0.0.0-unknown"


__version__ = _get_version()
