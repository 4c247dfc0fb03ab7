"""s3edit exception hierarchy."""

from __future__ import annotations


class S3EditError(Exception):
    """Base exception for all s3edit errors."""


class InvalidLocator(S3EditError):
    """Argument is not a usable s3://bucket/key path."""

    def __init__(self, s3_path: str) -> None:
        self.s3_path = s3_path
        super().__init__(f"Invalid S3 path: {s3_path}")


class StorageError(S3EditError):
    """Fetching or uploading the object failed."""


class FilesystemError(S3EditError):
    """Temporary file could not be created, written, read or removed."""


class EditorError(S3EditError):
    """Editor could not be launched or exited unsuccessfully."""

    def __init__(self, editor: str, message: str, returncode: int | None = None) -> None:
        self.editor = editor
        self.returncode = returncode
        super().__init__(message)
