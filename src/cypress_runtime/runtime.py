"""Cypress runtime workspace — collects test suites into one runner directory.

Layout under the workspace root:
  - cypress.json, plugins.js, support.js: generated on every (re)build
  - suites/<name>: symlink to each suite's source tree
  - integration/<name>: symlink to each suite's specs
  - integration/common/<name>: symlink to each suite's shared step definitions
  - support/<name>, plugins/<name>: copies of each suite's support/plugin code

Key class: CypressRuntime.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol

from .capabilities import (
    INTEGRATION_DIR,
    MANIFEST_FILE,
    PLUGINS_DIR,
    STEPS_DIR,
    SUPPORT_DIR,
    probe_suite,
)
from .filesystem import Filesystem
from .loaders import generate_plugin_loader, generate_support_loader

logger = logging.getLogger(__name__)

# Directories wiped by initiate(); generated files are overwritten instead.
_RESET_DIRS = ["integration", "suites", "support", "plugins"]

_SUITE_NAME_RE = re.compile(r"^[\w\-.]+$")


def is_valid_suite_name(name: object) -> bool:
    """True for a non-empty single path segment made of word chars, "-" and "."."""
    return (
        isinstance(name, str)
        and bool(_SUITE_NAME_RE.match(name))
        and name not in (".", "..")
    )


class RuntimeOptions(Protocol):
    def get_cypress_json(self) -> str: ...


class ManifestMerger(Protocol):
    def merge(self, manifest_path: Path) -> None: ...


class CypressRuntime:
    """Builds and owns one Cypress runtime workspace."""

    def __init__(
        self,
        cypress_root: Path,
        npm_project_manager: ManifestMerger,
        filesystem: Filesystem | None = None,
    ) -> None:
        self.cypress_root = Path(cypress_root)
        self.npm_project_manager = npm_project_manager
        self._fs = filesystem or Filesystem()
        self._suites: list[str] = []
        self._support: list[str] = []
        self._plugins: list[str] = []

    @property
    def suites(self) -> tuple[str, ...]:
        return tuple(self._suites)

    @property
    def support(self) -> tuple[str, ...]:
        return tuple(self._support)

    @property
    def plugins(self) -> tuple[str, ...]:
        return tuple(self._plugins)

    def initiate(self, options: RuntimeOptions) -> None:
        """Reset the workspace to an empty runtime with no suites.

        Destroys any previous suite links and copies under the root.
        """
        root = self.cypress_root
        if not self._fs.exists(root):
            self._fs.mkdir(root)

        for dirname in _RESET_DIRS:
            self._fs.remove(root / dirname)

        self._fs.mkdir(root / "integration")
        self._fs.mkdir(root / "integration" / "common")
        self._fs.mkdir(root / "suites")

        self._suites = []
        self._support = []
        self._plugins = []

        self._fs.dump_file(root / "cypress.json", options.get_cypress_json())
        self._write_plugins_js()
        self._write_support_js()
        logger.info("Initialized Cypress runtime at %s", root)

    def add_suite(self, name: str, path: Path) -> bool:
        """Register a suite directory under ``name``.

        Returns:
            False if ``path`` does not exist (nothing is touched), True otherwise.

        Raises:
            ValueError: If ``name`` is not a single path segment or was
                already registered since the last initiate().
        """
        path = Path(path)
        if not self._fs.exists(path):
            logger.warning("Suite %s not found at %s", name, path)
            return False

        if not is_valid_suite_name(name):
            raise ValueError(f"Invalid suite name: {name!r}")
        if name in self._suites:
            raise ValueError(f"Suite already registered: {name}")

        path = path.absolute()
        root = self.cypress_root
        caps = probe_suite(path, self._fs)
        self._suites.append(name)

        self._fs.symlink(path, root / "suites" / name)

        if caps.has_integration:
            self._fs.symlink(path / INTEGRATION_DIR, root / "integration" / name)

        if caps.has_shared_steps:
            self._fs.symlink(path / STEPS_DIR, root / "integration" / "common" / name)

        if caps.has_support:
            self._support.append(name)
            self._fs.mirror(path / SUPPORT_DIR, root / "support" / name)
            self._write_support_js()

        if caps.has_plugins:
            self._plugins.append(name)
            self._fs.mirror(path / PLUGINS_DIR, root / "plugins" / name)
            self._write_plugins_js()

        if caps.has_manifest:
            self.npm_project_manager.merge(path / MANIFEST_FILE)

        logger.info(
            "Added suite %s from %s (%s)",
            name,
            path,
            ", ".join(caps.labels()) or "no contributions",
        )
        return True

    def _write_plugins_js(self) -> None:
        self._fs.dump_file(
            self.cypress_root / "plugins.js", generate_plugin_loader(self._plugins)
        )

    def _write_support_js(self) -> None:
        self._fs.dump_file(
            self.cypress_root / "support.js", generate_support_loader(self._support)
        )
