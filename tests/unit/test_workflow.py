"""Tests for the fetch, edit, upload session."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from s3edit.core.exceptions import EditorError, FilesystemError, StorageError
from s3edit.editor import Editor
from s3edit.models.locator import parse_s3_path
from s3edit.workflow import TEMP_PREFIX, EditSession, temporary_copy
from tests.fakes import MemoryObjectStore

LOCATOR = parse_s3_path("s3://my-bucket/configs/app.yaml")


class FailingPutStore(MemoryObjectStore):
    def put(self, bucket, key, data, content_type):
        raise StorageError("upload refused")


@pytest.fixture
def editor_writes(monkeypatch):
    """Replace the editor with one that records the file and writes new content."""
    seen: dict = {}

    def install(new_content: bytes | None = None, returncode: int = 0):
        def fake_run(cmd, check):
            path = Path(cmd[1])
            seen["cmd"] = cmd
            seen["path"] = path
            seen["before"] = path.read_bytes()
            if new_content is not None:
                path.write_bytes(new_content)
            if returncode:
                raise subprocess.CalledProcessError(returncode, cmd)
            return subprocess.CompletedProcess(cmd, 0)

        monkeypatch.setattr(subprocess, "run", fake_run)
        return seen

    return install


class TestTemporaryCopy:
    def test_writes_and_removes(self, tmp_path):
        with temporary_copy(b"hello", "app.yaml", str(tmp_path)) as path:
            assert path.read_bytes() == b"hello"
            assert path.name.startswith(TEMP_PREFIX)
            assert path.name.endswith("-app.yaml")
        assert not path.exists()

    def test_removes_on_error(self, tmp_path):
        with pytest.raises(RuntimeError):
            with temporary_copy(b"x", "f", str(tmp_path)) as path:
                raise RuntimeError("boom")
        assert not path.exists()
        assert list(tmp_path.iterdir()) == []

    def test_cleanup_tolerates_missing_file(self, tmp_path):
        with temporary_copy(b"x", "f", str(tmp_path)) as path:
            path.unlink()
        assert list(tmp_path.iterdir()) == []

    def test_unique_names(self, tmp_path):
        with temporary_copy(b"a", "same.txt", str(tmp_path)) as first:
            with temporary_copy(b"b", "same.txt", str(tmp_path)) as second:
                assert first != second

    def test_create_failure_raises_filesystem_error(self, tmp_path):
        with pytest.raises(FilesystemError):
            with temporary_copy(b"x", "f", str(tmp_path / "missing-dir")):
                pass


class TestEditSession:
    def test_round_trip(self, tmp_path, editor_writes, capsys):
        seen = editor_writes(b"a: 2\n")
        store = MemoryObjectStore({("my-bucket", "configs/app.yaml"): b"a: 1\n"})

        content_type = EditSession(store, editor=Editor.VIM, temp_dir=str(tmp_path)).run(LOCATOR)

        assert seen["cmd"][0] == "vim"
        assert seen["before"] == b"a: 1\n"
        assert store.puts == [("my-bucket", "configs/app.yaml", b"a: 2\n", content_type)]
        assert content_type.startswith("text/plain")
        assert capsys.readouterr().out.strip().endswith("File saved successfully.")
        assert list(tmp_path.iterdir()) == []

    def test_prompts_when_no_editor_given(self, tmp_path, editor_writes):
        seen = editor_writes(b"x")
        answers = iter(["emacs", "nano"])
        store = MemoryObjectStore({("my-bucket", "configs/app.yaml"): b""})

        EditSession(store, read_line=lambda _: next(answers), temp_dir=str(tmp_path)).run(LOCATOR)

        assert seen["cmd"][0] == "nano"

    def test_unchanged_content_still_uploaded(self, tmp_path, editor_writes):
        editor_writes(None)
        store = MemoryObjectStore({("my-bucket", "configs/app.yaml"): b"same\n"})
        EditSession(store, editor=Editor.VI, temp_dir=str(tmp_path)).run(LOCATOR)
        assert store.puts[0][2] == b"same\n"

    def test_content_type_sniffed_not_from_extension(self, tmp_path, editor_writes):
        editor_writes(b"<html><body>hi</body></html>")
        store = MemoryObjectStore({("my-bucket", "configs/app.yaml"): b""})
        EditSession(store, editor=Editor.VI, temp_dir=str(tmp_path)).run(LOCATOR)
        assert store.content_types[("my-bucket", "configs/app.yaml")] == "text/html; charset=utf-8"

    def test_fetch_failure_aborts_before_editor(self, tmp_path, editor_writes):
        seen = editor_writes(b"x")
        with pytest.raises(StorageError):
            EditSession(MemoryObjectStore(), editor=Editor.VI, temp_dir=str(tmp_path)).run(LOCATOR)
        assert seen == {}
        assert list(tmp_path.iterdir()) == []

    def test_editor_failure_removes_temp_and_skips_upload(self, tmp_path, editor_writes):
        editor_writes(b"half-edited", returncode=1)
        store = MemoryObjectStore({("my-bucket", "configs/app.yaml"): b"a: 1\n"})
        with pytest.raises(EditorError):
            EditSession(store, editor=Editor.VI, temp_dir=str(tmp_path)).run(LOCATOR)
        assert store.puts == []
        assert list(tmp_path.iterdir()) == []

    def test_upload_failure_removes_temp(self, tmp_path, editor_writes, capsys):
        editor_writes(b"a: 2\n")
        store = FailingPutStore({("my-bucket", "configs/app.yaml"): b"a: 1\n"})
        with pytest.raises(StorageError, match="upload refused"):
            EditSession(store, editor=Editor.VI, temp_dir=str(tmp_path)).run(LOCATOR)
        assert list(tmp_path.iterdir()) == []
        assert "File saved successfully." not in capsys.readouterr().out


class TestTemporaryCopyNames:
    def test_long_leaf_keeps_only_extension(self, tmp_path):
        leaf = "a" * 250 + ".txt"
        with temporary_copy(b"x", leaf, str(tmp_path)) as path:
            assert path.name.startswith(TEMP_PREFIX)
            assert path.name.endswith(".txt")
            assert len(path.name) < 100
        assert not path.exists()

    def test_long_extension_dropped(self, tmp_path):
        with temporary_copy(b"x", "a." + "b" * 250, str(tmp_path)) as path:
            assert path.read_bytes() == b"x"

    def test_session_with_long_leaf(self, tmp_path, editor_writes):
        editor_writes(b"edited\n")
        locator = parse_s3_path("s3://b/dir/" + "a" * 250 + ".txt")
        store = MemoryObjectStore({("b", locator.key): b"orig\n"})
        EditSession(store, editor=Editor.VI, temp_dir=str(tmp_path)).run(locator)
        assert store.puts[0][2] == b"edited\n"
        assert list(tmp_path.iterdir()) == []


class TestCleanupFailure:
    @pytest.fixture
    def unlink_fails(self, monkeypatch):
        def failing_unlink(self, missing_ok=False):
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "unlink", failing_unlink)

    def test_original_error_wins_over_cleanup_error(self, tmp_path, unlink_fails, caplog):
        with pytest.raises(EditorError):
            with temporary_copy(b"x", "f", str(tmp_path)):
                raise EditorError("vi", "Editor vi exited with status 1", returncode=1)
        assert "Could not remove" in caplog.text

    def test_interrupt_survives_cleanup_error(self, tmp_path, unlink_fails):
        with pytest.raises(KeyboardInterrupt):
            with temporary_copy(b"x", "f", str(tmp_path)):
                raise KeyboardInterrupt

    def test_cleanup_error_raised_on_success(self, tmp_path, unlink_fails):
        with pytest.raises(FilesystemError, match="Could not remove"):
            with temporary_copy(b"x", "f", str(tmp_path)):
                pass


def test_reread_failure_raises_filesystem_error(tmp_path, monkeypatch):
    def deleting_editor(cmd, check):
        Path(cmd[1]).unlink()
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr(subprocess, "run", deleting_editor)
    store = MemoryObjectStore({("my-bucket", "configs/app.yaml"): b"a: 1\n"})
    with pytest.raises(FilesystemError, match="Could not read"):
        EditSession(store, editor=Editor.VI, temp_dir=str(tmp_path)).run(LOCATOR)
    assert store.puts == []
