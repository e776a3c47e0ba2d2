"""Shared fixtures: keep tests away from the real ~/.readkit and reset logging handlers."""

from __future__ import annotations

import logging
import sys
import uuid
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch):
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr("readkit.config._global_config_dir", lambda: home / ".readkit")
    yield home / ".readkit"
    logger = logging.getLogger("readkit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def bundled_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[str, Path]:
    """An importable throwaway package for bundled-resource tests. Returns (name, directory)."""
    name = f"readkit_fixture_{uuid.uuid4().hex}"
    root = tmp_path / "site"
    pkg_dir = root / name
    pkg_dir.mkdir(parents=True)
    (pkg_dir / "__init__.py").write_text("")
    monkeypatch.syspath_prepend(str(root))
    yield name, pkg_dir
    sys.modules.pop(name, None)
