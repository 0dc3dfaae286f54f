"""Root conftest — isolates the environment before any cypress_runtime import.

load_settings() reads CYPRESS_RUNTIME_DIR and CYPRESS_BASE_URL, so values
from the developer's shell must not leak into tests.
"""

import json
import os
import tempfile
from pathlib import Path

import pytest

# Force-set (not setdefault) to prevent real env vars from leaking into tests
os.environ["CYPRESS_RUNTIME_DIR"] = tempfile.mkdtemp(prefix="cypress-runtime-test-")
os.environ.pop("CYPRESS_BASE_URL", None)


@pytest.fixture
def make_suite(tmp_path: Path):
    """Build a suite directory under tmp_path/src/<name> with the given parts.

    Parts: "integration", "steps", "support", "plugins", "package.json".
    """

    def _make(name: str, *parts: str, dependencies: dict | None = None) -> Path:
        suite = tmp_path / "src" / name
        suite.mkdir(parents=True)
        if "integration" in parts:
            (suite / "integration").mkdir()
            (suite / "integration" / f"{name}.feature").write_text("Feature: x\n")
        if "steps" in parts:
            (suite / "steps").mkdir()
            (suite / "steps" / "common.js").write_text("// steps\n")
        if "support" in parts:
            (suite / "support").mkdir()
            (suite / "support" / "index.js").write_text(f"// support {name}\n")
            (suite / "support" / "commands.js").write_text("// commands\n")
        if "plugins" in parts:
            (suite / "plugins").mkdir()
            (suite / "plugins" / "index.js").write_text(
                "module.exports = (on, config) => {};\n"
            )
        if "package.json" in parts:
            (suite / "package.json").write_text(
                json.dumps({"name": name, "dependencies": dependencies or {}})
            )
        return suite

    return _make
