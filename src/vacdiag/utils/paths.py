"""Path helpers for vacdiag settings."""

from __future__ import annotations

from pathlib import Path


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from start directory to find a directory holding .vacdiag/."""
    current = (start or Path.cwd()).resolve()
    for directory in [current, *current.parents]:
        if (directory / ".vacdiag").is_dir():
            return directory
    return None


def get_user_settings_path() -> Path:
    """Get user-level settings.json path."""
    return Path.home() / ".vacdiag" / "settings.json"


def get_project_settings_path(project_root: Path) -> Path:
    """Get project-level settings.json path."""
    return project_root / ".vacdiag" / "settings.json"
