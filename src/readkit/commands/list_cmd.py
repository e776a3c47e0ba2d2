"""List the resources the readers can see."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from readkit.config import load_config, project_root_or_cwd
from readkit.resolver import ResourceResolver
from readkit.utils.ignore import build_spec, filter_names, load_patterns


def run(args: Namespace) -> None:
    """Print bundled and local resource names, skipping ignored ones."""
    path: Path = getattr(args, "path", Path("."))
    project_root = project_root_or_cwd(path)
    config = load_config(project_root)
    spec = build_spec([p for p, _ in load_patterns(project_root, config)])
    resolver = ResourceResolver.from_config(config, project_root)

    bundled = filter_names(resolver.list_bundled(), spec)
    print(f"Bundled ({resolver.bundled_package}):")
    for name in bundled:
        print(f"  {name}")
    if not bundled:
        print("  (none)")

    local = filter_names(resolver.list_local(), spec)
    print(f"Local ({resolver.resource_dir.as_posix()}):")
    for name in local:
        print(f"  {name}")
    if not local:
        print("  (none)")
