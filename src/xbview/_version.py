"""Version lookup for xbview."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DIST_NAME = "xbview"

# Source checkout layout: <root>/pyproject.toml, <root>/src/xbview/_version.py
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _source_tree_version(pyproject: Path) -> str | None:
    """Version from a checkout's pyproject.toml, if it belongs to xbview."""
    try:
        project = tomllib.loads(pyproject.read_text(encoding="utf-8")).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return None
    if project.get("name") != DIST_NAME:
        return None
    return project.get("version")


def get_version(pyproject: Path = _PYPROJECT) -> str:
    """Version from the checkout's pyproject.toml, else from installed metadata."""
    version = _source_tree_version(pyproject)
    if version:
        return version
    try:
        return _metadata_version(DIST_NAME)
    except PackageNotFoundError:
        return "0.0.0"
