"""Resource resolution: bundled package data and a project-local resource directory."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from importlib.resources import as_file, files
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_BUNDLED_PACKAGE = "readkit.data"
DEFAULT_RESOURCE_DIR = "resources"


class ResourceNotFoundError(FileNotFoundError):
    """Raised when a bundled resource does not exist in its package."""

    def __init__(self, name: str, package: str) -> None:
        super().__init__(f"Resource not found: {name} (package {package})")
        self.name = name
        self.package = package


class ResourceResolver:
    """
    Maps logical filenames to readable locations.

    Bundled resources live inside an importable package and are located with
    importlib.resources; local resources live in a plain directory on disk.
    The resolver never opens anything itself, so readers keep control of how
    a resource is read.
    """

    def __init__(
        self,
        resource_dir: Path | str = DEFAULT_RESOURCE_DIR,
        bundled_package: str = DEFAULT_BUNDLED_PACKAGE,
    ) -> None:
        self.resource_dir = Path(resource_dir)
        self.bundled_package = bundled_package

    @classmethod
    def from_config(cls, config: dict[str, Any], project_root: Path) -> ResourceResolver:
        """Build a resolver from the 'resources' config section; relative dirs hang off project_root."""
        res_cfg = config.get("resources") or {}
        directory = Path(res_cfg.get("directory") or DEFAULT_RESOURCE_DIR).expanduser()
        if not directory.is_absolute():
            directory = project_root / directory
        return cls(
            resource_dir=directory,
            bundled_package=res_cfg.get("bundled_package") or DEFAULT_BUNDLED_PACKAGE,
        )

    def bundled(self, name: str) -> Traversable:
        """Return the bundled resource for name. Raises ResourceNotFoundError if absent."""
        resource = files(self.bundled_package).joinpath(name)
        if not resource.is_file():
            raise ResourceNotFoundError(name, self.bundled_package)
        return resource

    @contextmanager
    def bundled_path(self, name: str) -> Iterator[Path]:
        """Yield an absolute filesystem path for a bundled resource (extracted if zipped)."""
        with as_file(self.bundled(name)) as path:
            yield path.resolve()

    def local(self, name: str) -> Path:
        """Path of name under the local resource directory. Existence is not checked."""
        return self.resource_dir / name

    def list_bundled(self) -> list[str]:
        """Names of data files in the bundled package (module files excluded), sorted."""
        root = files(self.bundled_package)
        return sorted(
            entry.name
            for entry in root.iterdir()
            if entry.is_file() and not entry.name.endswith((".py", ".pyc"))
        )

    def list_local(self) -> list[str]:
        """Posix paths of files under the local resource directory, relative to it, sorted."""
        if not self.resource_dir.is_dir():
            logger.debug("Resource directory missing: %s", self.resource_dir)
            return []
        return sorted(
            p.relative_to(self.resource_dir).as_posix()
            for p in self.resource_dir.rglob("*")
            if p.is_file()
        )


_default_resolver: ResourceResolver | None = None


def default_resolver() -> ResourceResolver:
    """Resolver with default locations (./resources relative to the current directory)."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = ResourceResolver()
    return _default_resolver
