"""Show or edit configuration (CLI command)."""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from collections.abc import Callable
from pathlib import Path
from typing import Any

from readkit.config import (
    ON_ERROR_POLICIES,
    find_project_root,
    global_config_path,
    load_config,
    project_config_path,
    save_config,
)


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _parse_value(raw: str) -> Any:
    """JSON when it parses (3, true, null, "x"), else the raw string."""
    raw = raw.strip()
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _validate(key: str, value: Any) -> None:
    if key == "demo.on_error" and value not in ON_ERROR_POLICIES:
        _fail(f"demo.on_error must be one of: {', '.join(ON_ERROR_POLICIES)}.")
    if key == "http.timeout" and value is not None and not isinstance(value, (int, float)):
        _fail("http.timeout must be a number of seconds or null.")


def _edit_file(path: Path, key: str, edit: Callable[[Any], Any]) -> Any:
    """
    Apply edit to the value at dotted key in the JSON file at path and save it.
    Missing or unreadable files start empty. Returns the new value.
    """
    data: dict[str, Any] = {}
    if path.is_file():
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            loaded = None
        if isinstance(loaded, dict):
            data = loaded

    *parents, leaf = key.split(".")
    node = data
    for part in parents:
        if not isinstance(node.get(part), dict):
            node[part] = {}
        node = node[part]
    node[leaf] = edit(node.get(leaf))
    save_config(path, data)
    return node[leaf]


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def run(args: Namespace) -> None:
    """Show merged settings, or set a value / add to or remove from a list (global or project-local)."""
    set_key = getattr(args, "set_key", None)
    add_key = getattr(args, "add_key", None)
    remove_key = getattr(args, "remove_key", None)
    show = getattr(args, "show", False)
    if not (show or set_key or add_key or remove_key):
        _fail("specify --show, --set KEY=VALUE, --add KEY VALUE, or --remove KEY VALUE.")

    project_root = find_project_root(Path(getattr(args, "path", Path("."))).resolve())
    if getattr(args, "global_", False) or project_root is None:
        target, label = global_config_path(), "global"
    else:
        target, label = project_config_path(project_root), f"project ({project_root.as_posix()})"

    if set_key:
        key, sep, raw = set_key.partition("=")
        key = key.strip()
        if not sep or not key:
            _fail("--set requires KEY=VALUE (e.g. demo.on_error=continue).")
        value = _parse_value(raw)
        _validate(key, value)
        _edit_file(target, key, lambda _old: value)
        print(f"Set {key} = {json.dumps(value)} in {label} config.")

    for pair, adding in ((add_key, True), (remove_key, False)):
        if not pair:
            continue
        key, item = pair[0].strip(), pair[1].strip()
        if not key:
            _fail(f"empty key in --{'add' if adding else 'remove'} KEY VALUE.")
        if adding:
            _edit_file(target, key, lambda old: _as_list(old) + [item])
            print(f"Added {json.dumps(item)} to {key} in {label} config.")
        else:
            _edit_file(target, key, lambda old: [x for x in _as_list(old) if x != item])
            print(f"Removed {json.dumps(item)} from {key} in {label} config.")

    if show:
        source_note = "defaults + global"
        if project_root is not None:
            source_note += f" + project ({project_root.as_posix()})"
        print(f"# Config: {source_note}")
        print(json.dumps(load_config(project_root), indent=2))
