"""Ports implemented by Infrastructure and Interface; use cases depend only on these."""

from __future__ import annotations

from typing import Protocol

import astroid


class TelemetryPort(Protocol):
    """Progress and status output of a CLI run."""

    def handshake(self) -> None: ...
    def step(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...


class FileSystemProtocol(Protocol):
    """File discovery and text I/O for the check and fix runs."""

    def glob_python_files(self, path: str) -> list[str]:
        """Python files under ``path``, or ``path`` itself when it is a .py file."""
        ...

    def exists(self, path: str) -> bool: ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Decoded file content with LF line endings."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None: ...

    def relative_path(self, path: str) -> str:
        """Path as shown in reports: relative to the working directory when possible."""
        ...


class AstroidProtocol(Protocol):
    """Builds astroid trees from source text."""

    def parse_source(self, source: str, path: str) -> astroid.nodes.Module:
        """Parse source text; raises astroid.AstroidSyntaxError on invalid code."""
        ...
