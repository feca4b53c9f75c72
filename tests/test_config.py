"""Tests for the configuration module."""

from pathlib import Path

import pytest

from dagiter import ConfigError, SiblingOrder, TraversalMode
from dagiter._cli.config import DagIterConfig, find_pyproject_toml, get_config, load_config


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in current directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        assert find_pyproject_toml(tmp_path) == pyproject.resolve()

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in parent directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        subdir = tmp_path / "graphs" / "nested"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir) == pyproject.resolve()


class TestLoadConfig:
    """Tests for loading [tool.dagiter]."""

    def _write(self, tmp_path: Path, content: str) -> Path:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(content)
        return pyproject

    def test_no_section_gives_defaults(self, tmp_path: Path) -> None:
        config = load_config(self._write(tmp_path, "[project]\nname = 'test'\n"))

        assert config == DagIterConfig()

    def test_all_keys(self, tmp_path: Path) -> None:
        pyproject = self._write(
            tmp_path,
            """
[tool.dagiter]
mode = "bfs"
sibling-order = "discovery"
check-cycles = true
""",
        )

        config = load_config(pyproject)

        assert config.mode is TraversalMode.BFS
        assert config.sibling_order is SiblingOrder.DISCOVERY
        assert config.check_cycles is True

    def test_mode_is_case_insensitive(self, tmp_path: Path) -> None:
        config = load_config(self._write(tmp_path, '[tool.dagiter]\nmode = "DFS"\n'))

        assert config.mode is TraversalMode.DFS

    def test_invalid_mode(self, tmp_path: Path) -> None:
        pyproject = self._write(tmp_path, '[tool.dagiter]\nmode = "random"\n')

        with pytest.raises(ConfigError, match="Expected one of: 'dfs', 'bfs'"):
            load_config(pyproject)

    def test_mode_must_be_string(self, tmp_path: Path) -> None:
        pyproject = self._write(tmp_path, "[tool.dagiter]\nmode = 1\n")

        with pytest.raises(ConfigError, match="expected string"):
            load_config(pyproject)

    def test_check_cycles_must_be_bool(self, tmp_path: Path) -> None:
        pyproject = self._write(tmp_path, '[tool.dagiter]\ncheck-cycles = "yes"\n')

        with pytest.raises(ConfigError, match="expected boolean"):
            load_config(pyproject)

    def test_unknown_key(self, tmp_path: Path) -> None:
        pyproject = self._write(tmp_path, "[tool.dagiter]\nweights = true\n")

        with pytest.raises(ConfigError, match="Unknown \\[tool.dagiter\\] keys: weights"):
            load_config(pyproject)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        pyproject = self._write(tmp_path, "[tool.dagiter\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)


def test_get_config_reads_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.dagiter]\nmode = "bfs"\n')
    monkeypatch.chdir(tmp_path)

    assert get_config().mode is TraversalMode.BFS
