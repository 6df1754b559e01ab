"""Unit tests for ConfigFileLoader."""

from pathlib import Path

import pytest

from layout_linter.domain.config import ConfigurationError
from layout_linter.infrastructure.config_file_loader import ConfigFileLoader


class TestConfigFileLoader:
    """Test discovery and loading of [tool.layout-linter]."""

    def test_finds_nearest_pyproject(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'demo'\n")
        nested = tmp_path / "src" / "pkg"
        nested.mkdir(parents=True)
        assert ConfigFileLoader.find_pyproject(nested) == (tmp_path / "pyproject.toml").resolve()

    def test_reads_tool_section(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[tool.layout-linter]\npreset = "recommended"\n\n'
            "[tool.layout-linter.block-padding]\nrootBlockPadding = 1\n"
        )
        config = ConfigFileLoader.load_config_from_fs(tmp_path)
        assert config == {"preset": "recommended", "block-padding": {"rootBlockPadding": 1}}

    def test_missing_section(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.other]\nkey = 1\n")
        assert ConfigFileLoader.load_config_from_fs(tmp_path) == {}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.layout-linter\n")
        with pytest.raises(ConfigurationError):
            ConfigFileLoader.load_config_from_fs(tmp_path)

    def test_section_must_be_a_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[tool]\nlayout-linter = "on"\n')
        with pytest.raises(ConfigurationError, match="must be a table"):
            ConfigFileLoader.load_config_from_fs(tmp_path)
