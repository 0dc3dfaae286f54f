"""Runtime settings — reads .env + cypress-runtime.toml to produce RuntimeSettings.

Key entities:
  - SuiteConfig: one [[suites]] entry (name + resolved path).
  - RuntimeSettings: frozen dataclass with everything a build needs.
  - load_settings(): parse .env + cypress-runtime.toml → RuntimeSettings.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .options import DEFAULT_BASE_URL, CypressOptions
from .runtime import is_valid_suite_name

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "cypress-runtime.toml"


def runtime_dir() -> Path:
    """Config directory: CYPRESS_RUNTIME_DIR env var, else the current directory."""
    configured = os.environ.get("CYPRESS_RUNTIME_DIR", "")
    if configured:
        return Path(configured).expanduser()
    return Path.cwd()


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SuiteConfig:
    name: str
    path: Path


@dataclass(frozen=True)
class RuntimeSettings:
    """Resolved configuration for one workspace build.

    All paths are absolute; relative paths in the TOML file are resolved
    against the config directory.
    """

    config_dir: Path
    workspace_dir: Path
    base_url: str = DEFAULT_BASE_URL
    npm_command: str = "npm"
    install: bool = False
    cypress_extra: dict[str, Any] = field(default_factory=dict)
    suites: tuple[SuiteConfig, ...] = ()

    @property
    def settings_file(self) -> Path:
        return self.config_dir / SETTINGS_FILE_NAME

    def options(self) -> CypressOptions:
        return CypressOptions(base_url=self.base_url, extra=self.cypress_extra)


# ---------------------------------------------------------------------------
# load_settings
# ---------------------------------------------------------------------------


def load_settings(config_dir: Path | None = None) -> RuntimeSettings:
    """Read .env + cypress-runtime.toml and return RuntimeSettings.

    Args:
        config_dir: Override for the config directory.
                    Defaults to ``runtime_dir()``.

    Raises:
        FileNotFoundError: If the settings file does not exist.
        ValueError: If the suites list is missing or malformed.
    """
    if config_dir is None:
        config_dir = runtime_dir()
    config_dir = config_dir.absolute()

    # Load .env files (local cwd first, then config_dir)
    local_env = Path(".env")
    config_env = config_dir / ".env"
    if local_env.is_file():
        load_dotenv(local_env)
    if config_env.is_file():
        load_dotenv(config_env)

    toml_path = config_dir / SETTINGS_FILE_NAME
    if not toml_path.is_file():
        raise FileNotFoundError(f"Settings file not found: {toml_path}")

    with open(toml_path, "rb") as f:
        raw = tomllib.load(f)

    global_section = raw.get("global", {})
    suites_list = raw.get("suites", [])
    if not suites_list:
        raise ValueError(
            f"{SETTINGS_FILE_NAME} must contain at least one [[suites]] entry."
        )

    suites = _build_suites(config_dir, suites_list)

    workspace = global_section.get("workspace", ".cypress")
    base_url = os.getenv("CYPRESS_BASE_URL") or global_section.get(
        "base_url", DEFAULT_BASE_URL
    )

    return RuntimeSettings(
        config_dir=config_dir,
        workspace_dir=_resolve(config_dir, workspace),
        base_url=str(base_url),
        npm_command=str(global_section.get("npm_command", "npm")),
        install=bool(global_section.get("install", False)),
        cypress_extra=dict(raw.get("cypress", {})),
        suites=suites,
    )


def _build_suites(config_dir: Path, suites_list: Any) -> tuple[SuiteConfig, ...]:
    """Validate [[suites]] entries, keeping their declared order."""
    seen: set[str] = set()
    results: list[SuiteConfig] = []
    if not isinstance(suites_list, list):
        raise ValueError("'suites' must be an array of tables ([[suites]]).")

    for entry in suites_list:
        if not isinstance(entry, dict):
            raise ValueError("Each [[suites]] entry must be a table.")
        name = entry.get("name")
        if not name:
            raise ValueError("Each [[suites]] entry must have a 'name' field.")
        if not is_valid_suite_name(name):
            raise ValueError(
                f"Invalid suite name {name!r}: use letters, digits, '_', '-' or '.'."
            )
        path = entry.get("path")
        if not path:
            raise ValueError(f"Suite '{name}': missing 'path' field.")
        if not isinstance(path, str):
            raise ValueError(f"Suite '{name}': 'path' must be a string.")
        if name in seen:
            raise ValueError(f"Suite '{name}' is declared more than once.")
        seen.add(name)
        results.append(SuiteConfig(name=name, path=_resolve(config_dir, path)))
    return tuple(results)


def _resolve(config_dir: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = config_dir / path
    return path
