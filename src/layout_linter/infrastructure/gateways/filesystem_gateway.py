"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from pathlib import Path

from layout_linter.domain.protocols import FileSystemProtocol

EXCLUDED_DIRS = frozenset({".git", ".hg", ".tox", ".nox", ".venv", "venv", "__pycache__", "build", "dist"})


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def glob_python_files(self, path: str) -> list[str]:
        """Get all Python files in path (recursive if directory)."""
        path_obj = Path(path).resolve()
        if path_obj.is_dir():
            return [
                str(p)
                for p in path_obj.glob("**/*.py")
                if not EXCLUDED_DIRS.intersection(p.relative_to(path_obj).parts[:-1])
            ]
        return [str(path_obj)] if path_obj.suffix == ".py" else []

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file; line endings are normalised to LF."""
        return Path(path).read_text(encoding=encoding)

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        Path(path).write_text(content, encoding=encoding)

    def relative_path(self, path: str) -> str:
        """Return path relative to cwd for messages; fallback to absolute."""
        try:
            return str(Path(path).resolve().relative_to(Path.cwd()))
        except ValueError:
            return path
