"""vacdiag configuration management.

Loads and merges settings from project and user-level settings.json files.
The completion service API key is read from the environment only.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from vacdiag.utils.paths import (
    get_project_settings_path,
    get_user_settings_path,
)


API_KEY_ENV = "GROQ_API_KEY"
DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"

DEFAULT_SETTINGS: dict[str, Any] = {
    "model": DEFAULT_MODEL,
    "base_url": DEFAULT_BASE_URL,
    "temperature": 0.3,
    "max_tokens": 600,
    "top_p": 0.9,
    "timeout": 10.0,
    "top_k": 2,
    "corpus_path": None,
}


@dataclass
class VacDiagSettings:
    """Merged vacdiag settings."""

    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    temperature: float = 0.3
    max_tokens: int = 600
    top_p: float = 0.9
    timeout: float = 10.0
    top_k: int = 2
    corpus_path: str | None = None
    api_key: str | None = None

    def to_dict(self) -> dict[str, Any]:
        # api_key is never persisted
        return {
            "model": self.model,
            "base_url": self.base_url,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
            "timeout": self.timeout,
            "top_k": self.top_k,
            "corpus_path": self.corpus_path,
        }


def load_json_file(path: Path) -> dict[str, Any]:
    """Load a JSON file, returning empty dict if not found or invalid."""
    if not path.exists():
        return {}
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return {}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base, returning new dict.

    - Dicts are recursively merged
    - Lists are replaced (not appended)
    - Scalars are replaced
    """
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(project_root: Path | None = None) -> VacDiagSettings:
    """Load and merge settings from user + project levels.

    Precedence: project settings override user settings override defaults.
    """
    merged = dict(DEFAULT_SETTINGS)

    user_settings = load_json_file(get_user_settings_path())
    if user_settings:
        merged = deep_merge(merged, user_settings)

    if project_root is not None:
        project_settings = load_json_file(get_project_settings_path(project_root))
        if project_settings:
            merged = deep_merge(merged, project_settings)

    return VacDiagSettings(
        model=merged.get("model", DEFAULT_MODEL),
        base_url=merged.get("base_url", DEFAULT_BASE_URL),
        temperature=merged.get("temperature", 0.3),
        max_tokens=merged.get("max_tokens", 600),
        top_p=merged.get("top_p", 0.9),
        timeout=merged.get("timeout", 10.0),
        top_k=merged.get("top_k", 2),
        corpus_path=merged.get("corpus_path"),
        api_key=os.environ.get(API_KEY_ENV) or None,
    )


def save_settings(settings: VacDiagSettings, path: Path) -> None:
    """Save settings to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(settings.to_dict(), indent=2) + "\n",
        encoding="utf-8",
    )


def validate_settings(settings: VacDiagSettings) -> list[str]:
    """Validate settings, returning list of error messages (empty if valid)."""
    errors = []

    if not isinstance(settings.model, str) or not settings.model:
        errors.append("model must be a non-empty string")

    if not isinstance(settings.max_tokens, int) or settings.max_tokens < 1:
        errors.append("max_tokens must be a positive integer")

    if not isinstance(settings.temperature, (int, float)) or not (0.0 <= settings.temperature <= 2.0):
        errors.append("temperature must be a float between 0.0 and 2.0")

    if not isinstance(settings.top_p, (int, float)) or not (0.0 < settings.top_p <= 1.0):
        errors.append("top_p must be a float in (0.0, 1.0]")

    if not isinstance(settings.timeout, (int, float)) or settings.timeout <= 0:
        errors.append("timeout must be a positive number of seconds")

    if not isinstance(settings.top_k, int) or settings.top_k < 1:
        errors.append("top_k must be a positive integer")

    return errors
