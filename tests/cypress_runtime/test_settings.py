"""Tests for settings.py — RuntimeSettings and load_settings."""

import os
from pathlib import Path

import pytest

from cypress_runtime.options import DEFAULT_BASE_URL
from cypress_runtime.settings import (
    SETTINGS_FILE_NAME,
    SuiteConfig,
    load_settings,
    runtime_dir,
)


def _write(config_dir: Path, content: str) -> None:
    (config_dir / SETTINGS_FILE_NAME).write_text(content)


class TestRuntimeDir:
    def test_env_var(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("CYPRESS_RUNTIME_DIR", str(tmp_path))
        assert runtime_dir().resolve() == tmp_path.resolve()

    def test_falls_back_to_cwd(self, monkeypatch, tmp_path: Path):
        monkeypatch.delenv("CYPRESS_RUNTIME_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        assert runtime_dir().resolve() == tmp_path.resolve()


class TestLoadSettings:
    def test_minimal(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("CYPRESS_BASE_URL", raising=False)
        _write(tmp_path, '[[suites]]\nname = "core"\npath = "tests/core"\n')
        settings = load_settings(tmp_path)
        assert settings.workspace_dir == tmp_path / ".cypress"
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.npm_command == "npm"
        assert settings.install is False
        assert settings.suites == (SuiteConfig("core", tmp_path / "tests" / "core"),)

    def test_full(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("CYPRESS_BASE_URL", raising=False)
        _write(
            tmp_path,
            """\
[global]
workspace = "/srv/cypress"
base_url = "http://site.test"
npm_command = "pnpm"
install = true

[cypress]
defaultCommandTimeout = 10000

[[suites]]
name = "b"
path = "/abs/b"

[[suites]]
name = "a"
path = "rel/a"
""",
        )
        settings = load_settings(tmp_path)
        assert settings.workspace_dir == Path("/srv/cypress")
        assert settings.base_url == "http://site.test"
        assert settings.npm_command == "pnpm"
        assert settings.install is True
        assert [s.name for s in settings.suites] == ["b", "a"]
        assert settings.suites[0].path == Path("/abs/b")
        assert settings.suites[1].path == tmp_path / "rel" / "a"

        options = settings.options().to_dict()
        assert options["baseUrl"] == "http://site.test"
        assert options["defaultCommandTimeout"] == 10000

    def test_base_url_from_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CYPRESS_BASE_URL", "http://env.test")
        _write(tmp_path, '[global]\nbase_url = "http://toml.test"\n[[suites]]\nname = "a"\npath = "a"\n')
        assert load_settings(tmp_path).base_url == "http://env.test"

    def test_base_url_from_dotenv(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("CYPRESS_BASE_URL", raising=False)
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("CYPRESS_BASE_URL=http://dotenv.test\n")
        _write(tmp_path, '[[suites]]\nname = "a"\npath = "a"\n')
        try:
            assert load_settings(tmp_path).base_url == "http://dotenv.test"
        finally:
            os.environ.pop("CYPRESS_BASE_URL", None)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="Settings file not found"):
            load_settings(tmp_path)

    def test_no_suites(self, tmp_path: Path):
        _write(tmp_path, "[global]\n")
        with pytest.raises(ValueError, match="at least one"):
            load_settings(tmp_path)

    def test_suite_without_name(self, tmp_path: Path):
        _write(tmp_path, '[[suites]]\npath = "a"\n')
        with pytest.raises(ValueError, match="'name'"):
            load_settings(tmp_path)

    def test_suite_without_path(self, tmp_path: Path):
        _write(tmp_path, '[[suites]]\nname = "a"\n')
        with pytest.raises(ValueError, match="missing 'path'"):
            load_settings(tmp_path)

    def test_duplicate_suite(self, tmp_path: Path):
        _write(
            tmp_path,
            '[[suites]]\nname = "a"\npath = "x"\n[[suites]]\nname = "a"\npath = "y"\n',
        )
        with pytest.raises(ValueError, match="more than once"):
            load_settings(tmp_path)

    def test_default_config_dir(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CYPRESS_RUNTIME_DIR", str(tmp_path))
        _write(tmp_path, '[[suites]]\nname = "a"\npath = "a"\n')
        settings = load_settings()
        assert settings.config_dir == tmp_path
        assert settings.settings_file == tmp_path / SETTINGS_FILE_NAME

    def test_non_string_name(self, tmp_path: Path):
        _write(tmp_path, '[[suites]]\nname = 7\npath = "a"\n')
        with pytest.raises(ValueError, match="Invalid suite name 7"):
            load_settings(tmp_path)

    @pytest.mark.parametrize("name", ["a/b", "..", "my suite"])
    def test_name_not_a_path_segment(self, tmp_path: Path, name: str):
        _write(tmp_path, f'[[suites]]\nname = "{name}"\npath = "a"\n')
        with pytest.raises(ValueError, match="Invalid suite name"):
            load_settings(tmp_path)

    def test_non_string_path(self, tmp_path: Path):
        _write(tmp_path, '[[suites]]\nname = "a"\npath = 7\n')
        with pytest.raises(ValueError, match="'path' must be a string"):
            load_settings(tmp_path)

    def test_suites_written_as_table(self, tmp_path: Path):
        _write(tmp_path, '[suites]\nname = "a"\npath = "a"\n')
        with pytest.raises(ValueError, match="array of tables"):
            load_settings(tmp_path)

    def test_suites_array_of_strings(self, tmp_path: Path):
        _write(tmp_path, 'suites = ["a", "b"]\n')
        with pytest.raises(ValueError, match="must be a table"):
            load_settings(tmp_path)
