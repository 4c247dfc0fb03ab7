"""Protocol interfaces for s3edit collaborators.

Structural typing, no inheritance required, easy to fake in tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IObjectStore(Protocol):
    """Object storage: one GET and one PUT per edit session."""

    def get(self, bucket: str, key: str) -> bytes: ...

    def put(self, bucket: str, key: str, data: bytes, content_type: str) -> None: ...
