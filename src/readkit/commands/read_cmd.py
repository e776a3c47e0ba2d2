"""Run a single reader by number."""

from __future__ import annotations

import sys
from argparse import Namespace
from pathlib import Path

from readkit.config import load_config, project_root_or_cwd
from readkit.resolver import ResourceResolver
from readkit.runner import DEFAULT_FILES, banner, execute_step, get_step


def run(args: Namespace) -> None:
    """Read NAME (or the step's configured default input) with reader N and print the result."""
    try:
        step = get_step(args.number)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    path: Path = getattr(args, "path", Path("."))
    project_root = project_root_or_cwd(path)
    config = load_config(project_root)
    demo_cfg = config.get("demo") or {}

    target = getattr(args, "name", None)
    if not target:
        if step.source == "url":
            target = demo_cfg.get("url")
        else:
            files = demo_cfg.get("files") or {}
            target = files.get(step.source) or DEFAULT_FILES[step.source]

    resolver = ResourceResolver.from_config(config, project_root)
    timeout = (config.get("http") or {}).get("timeout")
    print(banner(step.number))
    try:
        value = execute_step(step, resolver, target, timeout=timeout)
    except Exception as e:
        print(e)
        return
    print(value)
