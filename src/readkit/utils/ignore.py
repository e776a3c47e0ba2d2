"""Ignore pattern support for resource listing: .readkitignore plus builtin and additional patterns."""

from __future__ import annotations

from pathlib import Path

from pathspec import GitIgnoreSpec, PathSpec

READKITIGNORE = ".readkitignore"


def parse_ignore_file(path: Path) -> list[str]:
    """
    Read a gitignore-style file and return non-empty pattern lines (strip comments and blanks).
    """
    if not path.is_file():
        return []
    patterns: list[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        s = line.strip()
        if not s or s.startswith("#"):
            continue
        patterns.append(s)
    return patterns


def load_patterns(project_root: Path, config: dict) -> list[tuple[str, str]]:
    """
    Build combined pattern list from config and the project's .readkitignore.

    Returns list of (pattern, source) where source is 'builtin', 'file', or 'additional'.
    """
    ignore_cfg = config.get("ignore", {}) or {}
    builtin = list(ignore_cfg.get("builtin_patterns", []) or [])
    additional = list(ignore_cfg.get("additional_patterns", []) or [])

    result: list[tuple[str, str]] = [(p, "builtin") for p in builtin]
    for p in parse_ignore_file(Path(project_root).resolve() / READKITIGNORE):
        result.append((p, "file"))
    for p in additional:
        result.append((p, "additional"))
    return result


def build_spec(patterns: list[str]) -> PathSpec:
    """Build a PathSpec from pattern strings (gitignore-style)."""
    return GitIgnoreSpec.from_lines(patterns)


def is_ignored(name: str, spec: PathSpec) -> bool:
    """
    Return True if a resource name (posix path relative to its resource root) is ignored.
    Also tries every parent directory so directory-only patterns (e.g. "drafts/") match.
    """
    if spec.match_file(name):
        return True
    parts = name.split("/")
    for i in range(1, len(parts)):
        if spec.match_file("/".join(parts[:i]) + "/"):
            return True
    return False


def filter_names(names: list[str], spec: PathSpec) -> list[str]:
    """Names not matched by spec, order preserved."""
    return [n for n in names if not is_ignored(n, spec)]
