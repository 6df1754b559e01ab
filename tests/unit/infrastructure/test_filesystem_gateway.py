"""Unit tests for FileSystemGateway."""

from pathlib import Path

from layout_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway


class TestFileSystemGateway:
    """Test file discovery and text I/O."""

    def test_glob_skips_excluded_directories(self, tmp_path: Path) -> None:
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "mod.py").write_text("x = 1\n")
        (tmp_path / ".venv" / "lib").mkdir(parents=True)
        (tmp_path / ".venv" / "lib" / "dep.py").write_text("x = 1\n")
        (tmp_path / "__pycache__").mkdir()
        (tmp_path / "__pycache__" / "cached.py").write_text("x = 1\n")
        (tmp_path / "notes.txt").write_text("not python\n")

        files = FileSystemGateway().glob_python_files(str(tmp_path))

        assert [Path(f).relative_to(tmp_path.resolve()).as_posix() for f in files] == ["pkg/mod.py"]

    def test_single_file(self, tmp_path: Path) -> None:
        target = tmp_path / "mod.py"
        target.write_text("x = 1\n")
        assert FileSystemGateway().glob_python_files(str(target)) == [str(target.resolve())]
        assert FileSystemGateway().glob_python_files(str(tmp_path / "notes.txt")) == []

    def test_read_normalises_line_endings(self, tmp_path: Path) -> None:
        target = tmp_path / "mod.py"
        target.write_bytes(b"x = 1\r\ny = 2\r\n")
        assert FileSystemGateway().read_text(str(target)) == "x = 1\ny = 2\n"

    def test_write_and_exists(self, tmp_path: Path) -> None:
        gateway = FileSystemGateway()
        target = tmp_path / "out.py"
        assert not gateway.exists(str(target))
        gateway.write_text(str(target), "x = 1\n")
        assert gateway.exists(str(target))
        assert target.read_text() == "x = 1\n"

    def test_relative_path_outside_cwd(self, tmp_path: Path, monkeypatch) -> None:
        work = tmp_path / "work"
        work.mkdir()
        monkeypatch.chdir(work)
        outside = str(tmp_path / "elsewhere.py")
        gateway = FileSystemGateway()
        assert gateway.relative_path(str(work / "a.py")) == "a.py"
        assert gateway.relative_path(outside) == outside
