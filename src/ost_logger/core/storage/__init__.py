"""Pluggable record storage backends."""

from __future__ import annotations

from .base import StorageBackend
from .file import FileBackend, default_cache_dir
from .memory import InMemoryBackend

__all__ = [
    "FileBackend",
    "InMemoryBackend",
    "StorageBackend",
    "default_cache_dir",
]
