"""Suite capability detection.

A suite directory may contribute any subset of: specs (integration/), shared
step definitions (steps/), support code (support/index.js), plugin code
(plugins/index.js) and npm dependencies (package.json). probe_suite() checks
each one and returns a SuiteCapabilities record the runtime dispatches on.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .filesystem import Filesystem

INTEGRATION_DIR = "integration"
STEPS_DIR = "steps"
SUPPORT_DIR = "support"
PLUGINS_DIR = "plugins"
ENTRY_FILE = "index.js"
MANIFEST_FILE = "package.json"

# (attribute, label) in display order
_LABELS = [
    ("has_integration", "integration"),
    ("has_shared_steps", "steps"),
    ("has_support", "support"),
    ("has_plugins", "plugins"),
    ("has_manifest", "dependencies"),
]


@dataclass(frozen=True)
class SuiteCapabilities:
    """What a single suite directory contributes to the workspace."""

    has_integration: bool = False
    has_shared_steps: bool = False
    has_support: bool = False
    has_plugins: bool = False
    has_manifest: bool = False

    @property
    def is_empty(self) -> bool:
        return not any(getattr(self, attr) for attr, _ in _LABELS)

    def labels(self) -> list[str]:
        return [label for attr, label in _LABELS if getattr(self, attr)]


def probe_suite(path: Path, filesystem: Filesystem | None = None) -> SuiteCapabilities:
    """Inspect a suite directory. Each check is independent of the others."""
    fs = filesystem or Filesystem()
    path = Path(path)
    return SuiteCapabilities(
        has_integration=fs.exists(path / INTEGRATION_DIR),
        has_shared_steps=fs.exists(path / STEPS_DIR),
        has_support=fs.exists(path / SUPPORT_DIR / ENTRY_FILE),
        has_plugins=fs.exists(path / PLUGINS_DIR / ENTRY_FILE),
        has_manifest=fs.exists(path / MANIFEST_FILE),
    )
