"""Configuration: default paths, constants, and config loading (global + project overrides)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

# Directory name inside a project for readkit settings
READKIT_DIR = ".readkit"
CONFIG_FILENAME = "config.json"

DEFAULT_URL = "http://www.brainjar.com/java/host/test.html"
ON_ERROR_POLICIES = ("halt", "continue")


def _global_config_dir() -> Path:
    return Path.home() / ".readkit"


def global_config_path() -> Path:
    """Path to global config file (~/.readkit/config.json)."""
    return _global_config_dir() / CONFIG_FILENAME


def default_config() -> dict[str, Any]:
    """Built-in defaults; global and project files are merged on top."""
    return {
        "resources": {
            "directory": "resources",
            "bundled_package": "readkit.data",
        },
        "demo": {
            "files": {
                "primary": "file1.txt",
                "binary": "file2.txt",
                "channel": "file3.txt",
            },
            "url": DEFAULT_URL,
            "on_error": "halt",
        },
        "http": {
            "timeout": None,
        },
        "logging": {
            "level": "INFO",
            "file": None,
        },
        "ignore": {
            "builtin_patterns": ["__pycache__/", ".*"],
            "additional_patterns": [],
        },
    }


def _load_json(path: Path) -> dict[str, Any] | None:
    """Load JSON from path; return None if file missing or invalid."""
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
    except (json.JSONDecodeError, OSError):
        return None
    return data if isinstance(data, dict) else None


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into base recursively. Mutates base; returns base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def load_global_config() -> dict[str, Any]:
    """Load global config from ~/.readkit/config.json. Returns defaults if missing."""
    data = _load_json(global_config_path())
    if data is None:
        return default_config()
    return _deep_merge(default_config(), data)


def project_config_path(project_root: Path) -> Path:
    """Path to project-local config (<project>/.readkit/config.json)."""
    return project_root / READKIT_DIR / CONFIG_FILENAME


def load_config(project_root: Path | None = None) -> dict[str, Any]:
    """
    Load merged configuration: defaults + global (~/.readkit/config.json) + project overrides.

    If project_root is None, only global config (and defaults) are used.
    """
    merged = load_global_config()
    if project_root is not None:
        project_data = _load_json(project_config_path(project_root.resolve()))
        if project_data is not None:
            _deep_merge(merged, project_data)
    return merged


def save_config(path: Path, data: dict[str, Any]) -> None:
    """Write config dict as indented JSON, creating the parent directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def resolve_path(path: Path) -> Path:
    """Resolve path to absolute, normalized."""
    return path.resolve()


def find_project_root(path: Path) -> Path | None:
    """
    Walk upward from path looking for a directory that contains .readkit.
    Returns that directory if found, else None.
    """
    resolved = path.resolve()
    if resolved.is_file():
        resolved = resolved.parent
    current = resolved
    while True:
        if (current / READKIT_DIR).is_dir():
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def project_root_or_cwd(path: Path) -> Path:
    """Initialized project containing path, else path itself (its parent for files)."""
    root = find_project_root(path)
    if root is not None:
        return root
    resolved = path.resolve()
    return resolved.parent if resolved.is_file() else resolved
