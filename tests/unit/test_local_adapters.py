from pathlib import Path

from tinyfy.editor.local import FileDocument, LocalFileSystem, LogNotifier, syntax_for_path
from tinyfy.editor.models import FileStat, Notification


class TestLocalFileSystem:
    def test_stat_returns_size(self, tmp_path: Path) -> None:
        path = tmp_path / "app.js"
        path.write_bytes(b"12345")

        stat = LocalFileSystem().stat(str(path))

        assert isinstance(stat, FileStat)
        assert stat.size == 5

    def test_stat_missing_file_returns_none(self, tmp_path: Path) -> None:
        assert LocalFileSystem().stat(str(tmp_path / "missing.js")) is None

    def test_stat_below_a_file_returns_none(self, tmp_path: Path) -> None:
        path = tmp_path / "app.js"
        path.write_bytes(b"x")

        assert LocalFileSystem().stat(str(path / "nested.js")) is None

    def test_write_then_read(self, tmp_path: Path) -> None:
        fs = LocalFileSystem()
        target = str(tmp_path / "out.min.js")

        fs.write_bytes(target, b"let a=1;")

        assert fs.read_bytes(target) == b"let a=1;"


class TestFileDocument:
    def test_syntax_from_extension(self, tmp_path: Path) -> None:
        assert FileDocument(tmp_path / "app.js").syntax == "javascript"
        assert FileDocument(tmp_path / "site.SCSS").syntax == "scss"
        assert FileDocument(tmp_path / "notes.txt").syntax is None

    def test_explicit_syntax_wins(self, tmp_path: Path) -> None:
        assert FileDocument(tmp_path / "app.txt", syntax="javascript").syntax == "javascript"

    def test_virtual_buffer_has_no_path(self) -> None:
        document = FileDocument(None)
        assert document.path is None
        assert document.text == ""

    def test_select_offset_is_recorded(self, tmp_path: Path) -> None:
        document = FileDocument(tmp_path / "app.js")

        document.select_offset(12)

        assert document.selected_offset == 12


class TestSyntaxForPath:
    def test_known_extensions(self) -> None:
        assert syntax_for_path(Path("a.js")) == "javascript"
        assert syntax_for_path(Path("a.less")) == "less"

    def test_module_scripts_are_not_watched(self) -> None:
        assert syntax_for_path(Path("a.mjs")) is None


class TestLogNotifier:
    def test_does_not_raise(self) -> None:
        LogNotifier().notify(
            Notification(id="dependency-error", title="T", body="B", url="https://example.com")
        )
