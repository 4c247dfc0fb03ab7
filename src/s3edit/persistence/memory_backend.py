"""In-memory backend for unit tests: dict-backed fake."""

from __future__ import annotations

from s3edit.core.exceptions import StorageError


class MemoryObjectStore:
    """Dict-backed IObjectStore for unit tests.

    Records every ``put`` so tests can assert on the uploaded content type.
    """

    def __init__(self, objects: dict[tuple[str, str], bytes] | None = None) -> None:
        self._objects: dict[tuple[str, str], bytes] = dict(objects or {})
        self.content_types: dict[tuple[str, str], str] = {}
        self.puts: list[tuple[str, str, bytes, str]] = []

    def get(self, bucket: str, key: str) -> bytes:
        try:
            return self._objects[(bucket, key)]
        except KeyError as exc:
            raise StorageError(f"No such object s3://{bucket}/{key}") from exc

    def put(self, bucket: str, key: str, data: bytes, content_type: str) -> None:
        self._objects[(bucket, key)] = data
        self.content_types[(bucket, key)] = content_type
        self.puts.append((bucket, key, data, content_type))
