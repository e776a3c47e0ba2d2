"""Initialize a readkit project (.readkit directory with an empty project config)."""

from __future__ import annotations

import sys
from pathlib import Path

from readkit.config import READKIT_DIR, project_config_path, save_config


def run(args) -> None:
    """Run the init command: create .readkit/config.json under the given directory."""
    project_root = getattr(args, "path", Path(".")).resolve()
    if not project_root.is_dir():
        print("Error: Path is not an existing directory.", file=sys.stderr)
        sys.exit(1)

    config_path = project_config_path(project_root)
    if config_path.is_file():
        print(f"Already initialized: {project_root.as_posix()}")
        return
    save_config(config_path, {})
    print(f"Initialized readkit project at {project_root.as_posix()}")
    print(f"  {project_root / READKIT_DIR}/")
