"""Console telemetry: progress and status lines on stderr, mirrored to logging."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger("layout_linter")


class ProjectTelemetry:
    """TelemetryPort implementation using a rich console."""

    def __init__(self, project: str, color: str = "cyan", console: Console | None = None) -> None:
        self.project = project
        self.color = color
        self.console = console or Console(stderr=True, highlight=False)

    def _prefix(self) -> str:
        return f"[bold {self.color}][{self.project}][/]"

    def handshake(self) -> None:
        """Announce the tool once per command."""
        from layout_linter import __version__

        self.console.print(f"{self._prefix()} layout-linter {__version__}")

    def step(self, message: str) -> None:
        logger.info(message)
        self.console.print(f"{self._prefix()} {escape(message)}")

    def warning(self, message: str) -> None:
        logger.warning(message)
        self.console.print(f"{self._prefix()} [yellow]{escape(message)}[/]")

    def error(self, message: str) -> None:
        logger.error(message)
        self.console.print(f"{self._prefix()} [red]{escape(message)}[/]")
