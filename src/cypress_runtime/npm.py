"""npm dependency handling — folds suite package.json files into one manifest.

Every suite may ship a package.json declaring the npm packages its support
and plugin code needs. NpmProjectManager merges their ``dependencies`` and
``devDependencies`` into a single package.json and can run ``npm install``
on the result.

Key class: NpmProjectManager.
"""

from __future__ import annotations

import copy
import json
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Any

from .filesystem import Filesystem

logger = logging.getLogger(__name__)

_DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")

_BASE_MANIFEST: dict[str, Any] = {
    "name": "cypress-runtime-workspace",
    "private": True,
    "dependencies": {},
    "devDependencies": {},
}


def _read_manifest(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return data


class NpmProjectManager:
    """Owns the shared package.json the workspace's npm dependencies live in."""

    def __init__(
        self,
        package_dir: Path,
        npm_command: str = "npm",
        filesystem: Filesystem | None = None,
    ) -> None:
        self.package_dir = Path(package_dir)
        self.npm_command = npm_command
        self._fs = filesystem or Filesystem()

    @property
    def package_json(self) -> Path:
        return self.package_dir / "package.json"

    def ensure_initiated(self) -> None:
        """Start a fresh shared manifest, dropping previously merged dependencies."""
        self._write(copy.deepcopy(_BASE_MANIFEST))
        logger.info("Initialized npm manifest at %s", self.package_json)

    def merge(self, manifest_path: Path) -> None:
        """Fold one suite manifest into the shared one.

        The first declaration of a package wins; a later, different version is
        reported and ignored. Merging the same manifest twice changes nothing.
        """
        manifest_path = Path(manifest_path)
        incoming = _read_manifest(manifest_path)

        if self.package_json.is_file():
            shared = _read_manifest(self.package_json)
        else:
            shared = copy.deepcopy(_BASE_MANIFEST)

        added = 0
        for section in _DEPENDENCY_SECTIONS:
            packages = incoming.get(section) or {}
            target = shared.setdefault(section, {})
            for package, version in packages.items():
                existing = target.get(package)
                if existing is None:
                    target[package] = version
                    added += 1
                elif existing != version:
                    logger.warning(
                        "Ignoring %s@%s from %s: %s already requires %s",
                        package,
                        version,
                        manifest_path,
                        self.package_json.name,
                        existing,
                    )

        self._write(shared)
        logger.info("Merged %s (%d new packages)", manifest_path, added)

    def install(self) -> None:
        """Run ``npm install`` in the package directory."""
        npm = shutil.which(self.npm_command)
        if not npm:
            raise RuntimeError(f"npm executable not found: {self.npm_command}")

        logger.info("Running %s install in %s", self.npm_command, self.package_dir)
        subprocess.run([npm, "install"], cwd=self.package_dir, check=True)

    def _write(self, manifest: dict[str, Any]) -> None:
        self._fs.dump_file(self.package_json, json.dumps(manifest, indent=2) + "\n")
