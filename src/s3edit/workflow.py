"""Edit session: fetch, edit locally, upload back to the same key."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Callable

from s3edit.core.exceptions import FilesystemError
from s3edit.core.protocols import IObjectStore
from s3edit.editor import Editor, launch_editor, prompt_editor
from s3edit.models.locator import Locator
from s3edit.sniff import detect_content_type

logger = logging.getLogger(__name__)

TEMP_PREFIX = "S3Edit-"
SUCCESS_MESSAGE = "File saved successfully."

# Leaves longer than this keep only their extension in the temp file name.
MAX_SUFFIX_LEN = 64


def _temp_suffix(file_name: str) -> str:
    if not file_name:
        return ""
    if len(file_name) <= MAX_SUFFIX_LEN:
        return f"-{file_name}"
    ext = Path(file_name).suffix
    return ext if len(ext) <= MAX_SUFFIX_LEN else ""


def _remove(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        raise FilesystemError(f"Could not remove {path}: {exc}") from exc


@contextmanager
def temporary_copy(data: bytes, file_name: str = "", directory: str | None = None) -> Iterator[Path]:
    """Write ``data`` to a fresh temp file and remove it on exit.

    The file name ends with ``file_name`` (or just its extension, for long
    names) so editors can pick syntax from the extension. Removal tolerates a
    file that is already gone. A removal failure while another error is
    propagating is logged, not raised.
    """
    try:
        fd, name = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=_temp_suffix(file_name), dir=directory)
    except OSError as exc:
        raise FilesystemError(f"Could not create temporary file: {exc}") from exc

    path = Path(name)
    try:
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
        except OSError as exc:
            raise FilesystemError(f"Could not write {path}: {exc}") from exc
        logger.debug("Wrote %d bytes to %s", len(data), path)
        yield path
    except BaseException:
        try:
            _remove(path)
        except FilesystemError as cleanup_exc:
            logger.warning("%s", cleanup_exc)
        raise
    _remove(path)


class EditSession:
    """One fetch, edit, upload round trip for a single object."""

    def __init__(
        self,
        store: IObjectStore,
        editor: Editor | None = None,
        read_line: Callable[[str], str] | None = None,
        temp_dir: str | None = None,
    ) -> None:
        self._store = store
        self._editor = editor
        self._read_line = read_line
        self._temp_dir = temp_dir

    def run(self, locator: Locator) -> str:
        """Run the session. Returns the content type the object was saved with."""
        original = self._store.get(locator.bucket, locator.key)
        logger.info("Fetched %s (%d bytes)", locator.url, len(original))

        with temporary_copy(original, locator.file_name, self._temp_dir) as path:
            editor = self._editor or prompt_editor(self._read_line)
            launch_editor(editor, path)
            try:
                edited = path.read_bytes()
            except OSError as exc:
                raise FilesystemError(f"Could not read {path}: {exc}") from exc

        content_type = detect_content_type(edited)
        logger.info("Uploading %s (%d bytes, %s)", locator.url, len(edited), content_type)
        self._store.put(locator.bucket, locator.key, edited, content_type)

        print(SUCCESS_MESSAGE)
        return content_type
