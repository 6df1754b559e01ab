from typing import TYPE_CHECKING, Any, Optional, cast

from layout_linter.domain.config import ConfigurationLoader
from layout_linter.infrastructure.config_file_loader import ConfigFileLoader
from layout_linter.infrastructure.gateways.astroid_gateway import AstroidGateway
from layout_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from layout_linter.interface.reporters import TerminalLayoutReporter
from layout_linter.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from layout_linter.domain.protocols import AstroidProtocol, FileSystemProtocol, TelemetryPort
    from layout_linter.interface.reporters import LayoutReporter


class LayoutContainer:
    """Dependency Injection Container for the layout linter."""

    _instance: Optional["LayoutContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Wire the production gateways, telemetry, reporter and loaded configuration."""
        # Raises ConfigurationError on an invalid [tool.layout-linter] table.
        config_loader = ConfigurationLoader.from_tool_section(ConfigFileLoader.load_config_from_fs())
        self.register_singleton("ConfigurationLoader", config_loader)

        telemetry = ProjectTelemetry("LAYOUT", "cyan")
        self.register_singleton("TelemetryPort", telemetry)
        self.register_singleton("AstroidGateway", AstroidGateway())
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("LayoutReporter", TerminalLayoutReporter())

    def register_singleton(self, key: str, instance: Any) -> None:
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Look up a registered dependency; the typed get_* accessors wrap this."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_astroid_gateway(self) -> "AstroidProtocol":
        return cast("AstroidProtocol", self.get("AstroidGateway"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_reporter(self) -> "LayoutReporter":
        return cast("LayoutReporter", self.get("LayoutReporter"))

    @classmethod
    def get_instance(cls) -> "LayoutContainer":
        """Process-wide container used by the pylint plugin."""
        if cls._instance is None:
            cls._instance = LayoutContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the process-wide container so the next call reloads configuration."""
        cls._instance = None
