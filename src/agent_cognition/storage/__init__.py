# agent_cognition/storage/__init__.py
"""Storage adapters for persisted agent memory."""

from .base import StorageAdapter, StorageKeys
from .file import FileStorage
from .memory import InMemoryStorage

__all__ = [
    "StorageAdapter",
    "StorageKeys",
    "FileStorage",
    "InMemoryStorage",
]
