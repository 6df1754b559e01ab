"""Unit tests for LayoutContainer."""

from pathlib import Path

import pytest

from layout_linter.domain.config import ConfigurationError
from layout_linter.infrastructure.di.container import LayoutContainer
from layout_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from layout_linter.interface.telemetry import ProjectTelemetry


@pytest.fixture(autouse=True)
def isolated_container(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    LayoutContainer.reset()
    yield
    LayoutContainer.reset()


class TestLayoutContainer:
    """Test default wiring and configuration loading."""

    def test_default_wiring(self) -> None:
        container = LayoutContainer()
        assert isinstance(container.get_telemetry_port(), ProjectTelemetry)
        assert isinstance(container.get_filesystem_gateway(), FileSystemGateway)
        assert container.get_config_loader().is_enabled("block-padding")

    def test_reads_project_configuration(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[tool.layout-linter]\ndisable = ["block-padding"]\n')
        container = LayoutContainer()
        assert not container.get_config_loader().is_enabled("block-padding")

    def test_invalid_configuration_raises(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.layout-linter.block-padding]\nrootBlockPadding = -1\n")
        with pytest.raises(ConfigurationError):
            LayoutContainer()

    def test_get_instance_is_shared(self) -> None:
        assert LayoutContainer.get_instance() is LayoutContainer.get_instance()

    def test_unknown_dependency(self) -> None:
        with pytest.raises(ValueError, match="not registered"):
            LayoutContainer().get("Nope")
