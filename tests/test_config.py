"""Tests for dtsgen.config -- precedence, project config, atomic writes, data dir."""

from __future__ import annotations

import json
import os
import stat
from pathlib import Path

import pytest

from dtsgen.config import (
    atomic_write,
    get_data_dir,
    load_project_config,
    resolve_config,
)
from dtsgen.exceptions import ConfigError


def _write_project_config(directory: Path, data: object) -> None:
    (directory / "dtsgen.json").write_text(json.dumps(data), encoding="utf-8")


# ---------------------------------------------------------------------------
# resolve_config
# ---------------------------------------------------------------------------


@pytest.mark.usefixtures("isolated_config")
class TestResolveConfig:
    def test_defaults(self) -> None:
        config = resolve_config()
        assert config.source_dir == "JvTypeGen/output/json"
        assert config.descriptor_suffix == ".json"
        assert config.declaration_suffix == ".d.ts"
        assert config.fail_fast is False

    def test_project_config_overrides_defaults(self, isolated_config: Path) -> None:
        _write_project_config(isolated_config, {"source_dir": "from-project", "fail_fast": True})
        config = resolve_config()
        assert config.source_dir == "from-project"
        assert config.fail_fast is True

    def test_env_overrides_project(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_project_config(isolated_config, {"source_dir": "from-project"})
        monkeypatch.setenv("DTSGEN_SOURCE_DIR", "from-env")
        monkeypatch.setenv("DTSGEN_DECLARATION_SUFFIX", ".ts")
        config = resolve_config()
        assert config.source_dir == "from-env"
        assert config.declaration_suffix == ".ts"

    def test_cli_overrides_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DTSGEN_SOURCE_DIR", "from-env")
        monkeypatch.setenv("DTSGEN_DESCRIPTOR_SUFFIX", ".yaml")
        config = resolve_config(cli_source_dir="from-cli", cli_descriptor_suffix=".yml")
        assert config.source_dir == "from-cli"
        assert config.descriptor_suffix == ".yml"

    def test_none_cli_values_do_not_override(self, isolated_config: Path) -> None:
        _write_project_config(isolated_config, {"fail_fast": True})
        assert resolve_config(cli_fail_fast=None).fail_fast is True

    def test_cli_false_overrides_project_fail_fast(self, isolated_config: Path) -> None:
        _write_project_config(isolated_config, {"fail_fast": True})
        assert resolve_config(cli_fail_fast=False).fail_fast is False

    def test_unknown_project_key_rejected(self, isolated_config: Path) -> None:
        _write_project_config(isolated_config, {"sourceDir": "typo"})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()

    def test_identical_suffixes_rejected(self) -> None:
        with pytest.raises(ConfigError, match="overwrite"):
            resolve_config(cli_declaration_suffix=".json")

    def test_empty_suffix_rejected(self) -> None:
        with pytest.raises(ConfigError, match="must not be empty"):
            resolve_config(cli_descriptor_suffix="")


# ---------------------------------------------------------------------------
# load_project_config
# ---------------------------------------------------------------------------


class TestLoadProjectConfig:
    def test_missing_returns_none(self, tmp_path: Path) -> None:
        assert load_project_config(tmp_path) is None

    def test_loads_object(self, tmp_path: Path) -> None:
        _write_project_config(tmp_path, {"source_dir": "x"})
        assert load_project_config(tmp_path) == {"source_dir": "x"}

    def test_invalid_json(self, tmp_path: Path) -> None:
        (tmp_path / "dtsgen.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config(tmp_path)

    def test_non_object(self, tmp_path: Path) -> None:
        _write_project_config(tmp_path, ["source_dir"])
        with pytest.raises(ConfigError, match="JSON object"):
            load_project_config(tmp_path)


# ---------------------------------------------------------------------------
# atomic_write
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        path = tmp_path / "out.d.ts"
        atomic_write(path, "export class A {\n}\n")
        assert path.read_bytes() == b"export class A {\n}\n"

    def test_replaces_existing(self, tmp_path: Path) -> None:
        path = tmp_path / "out.d.ts"
        path.write_text("old")
        atomic_write(path, "new")
        assert path.read_text() == "new"

    def test_keeps_mode_of_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "out.d.ts"
        path.write_text("old")
        path.chmod(0o640)
        atomic_write(path, "new")
        assert stat.S_IMODE(path.stat().st_mode) == 0o640

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        atomic_write(tmp_path / "out.d.ts", "data")
        assert [p.name for p in tmp_path.iterdir()] == ["out.d.ts"]

    def test_failure_cleans_up_and_keeps_original(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "out.d.ts"
        path.write_text("original")

        def _boom(src: str, dst: object) -> None:
            raise OSError("rename failed")

        monkeypatch.setattr("dtsgen.config.os.replace", _boom)
        with pytest.raises(OSError, match="rename failed"):
            atomic_write(path, "new")

        assert path.read_text() == "original"
        assert [p.name for p in tmp_path.iterdir()] == ["out.d.ts"]

    def test_missing_parent_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            atomic_write(tmp_path / "no" / "such" / "dir.d.ts", "x")


# ---------------------------------------------------------------------------
# get_data_dir
# ---------------------------------------------------------------------------


class TestDataDir:
    def test_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("dtsgen.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
        path = get_data_dir()
        assert path == tmp_path / "xdg" / "dtsgen"
        assert path.is_dir()

    def test_non_xdg_uses_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("dtsgen.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr("dtsgen.config.Path.home", lambda: tmp_path)
        assert get_data_dir() == tmp_path / ".dtsgen"
        assert os.path.isdir(tmp_path / ".dtsgen")
