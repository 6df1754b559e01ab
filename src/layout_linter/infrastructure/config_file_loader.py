"""Load [tool.layout-linter] from pyproject.toml. Infrastructure I/O only."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from layout_linter.domain.config import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

logger = logging.getLogger(__name__)

TOOL_KEY = "layout-linter"


class ConfigFileLoader:
    """
    Loads config from pyproject.toml. No top-level functions.
    """

    @staticmethod
    def find_pyproject(start: Path | None = None) -> Path | None:
        """Nearest pyproject.toml walking up from ``start`` (default: cwd)."""
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if config_file.is_file():
                return config_file
        return None

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        """
        Return the [tool.layout-linter] table, or an empty dict.

        A pyproject.toml that cannot be parsed raises ConfigurationError;
        an unreadable one is skipped with a warning.
        """
        config_file = ConfigFileLoader.find_pyproject(start)
        if config_file is None:
            return {}
        try:
            with config_file.open("rb") as f:
                data = toml_lib.load(f)
        except toml_lib.TOMLDecodeError as exc:
            raise ConfigurationError(f"{config_file}: {exc}") from exc
        except OSError as exc:
            logger.warning("Could not read %s: %s", config_file, exc)
            return {}
        tool_section = data.get("tool", {}) or {}
        section = tool_section.get(TOOL_KEY, {}) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"{config_file}: [tool.{TOOL_KEY}] must be a table")
        logger.debug("Loaded layout configuration from %s", config_file)
        return section
