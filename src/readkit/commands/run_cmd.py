"""Run all ten readers in order (the demo)."""

from __future__ import annotations

import sys
from argparse import Namespace
from pathlib import Path

from readkit.config import load_config, project_root_or_cwd
from readkit.resolver import ResourceResolver
from readkit.runner import run_demo


def run(args: Namespace) -> None:
    """Run the demo with settings from config; --keep-going and --url override it."""
    path: Path = getattr(args, "path", Path("."))
    project_root = project_root_or_cwd(path)
    config = load_config(project_root)
    demo_cfg = config.get("demo") or {}
    http_cfg = config.get("http") or {}

    on_error = "continue" if getattr(args, "keep_going", False) else demo_cfg.get("on_error", "halt")
    url = getattr(args, "url", None) or demo_cfg.get("url")

    resolver = ResourceResolver.from_config(config, project_root)
    run_demo(
        resolver,
        files=demo_cfg.get("files") or {},
        url=url,
        on_error=on_error,
        timeout=http_cfg.get("timeout"),
        out=sys.stdout,
    )
