"""Shared test doubles: re-export the memory backend."""

from __future__ import annotations

from s3edit.persistence.memory_backend import MemoryObjectStore

__all__ = ["MemoryObjectStore"]
