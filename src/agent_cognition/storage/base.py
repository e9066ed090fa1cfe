# agent_cognition/storage/base.py
"""
Storage adapter protocol.

Core code persists opaque serialized records through this protocol;
platform code implements it. No transactional guarantees across keys.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class StorageKeys:
    """Keys used for agent storage."""

    SELF = "memory/self"
    CORE = "memory/core"
    PROJECT_PREFIX = "memory/projects/"
    VITALS = "vitals/current"
    VITALS_HISTORY = "vitals/history"
    BUDGET = "budget/current"

    @classmethod
    def project(cls, project_id: str) -> str:
        return f"{cls.PROJECT_PREFIX}{project_id}"


@runtime_checkable
class StorageAdapter(Protocol):
    """Protocol for async key/value storage."""

    async def read(self, key: str) -> str | None:
        """Return the stored data, or None if the key does not exist."""
        ...

    async def write(self, key: str, data: str) -> None: ...

    async def delete(self, key: str) -> None:
        """Delete a key. Deleting a missing key is not an error."""
        ...

    async def list(self, prefix: str) -> list[str]:
        """All keys starting with prefix."""
        ...

    async def exists(self, key: str) -> bool: ...

    async def size(self, key: str) -> int:
        """Size of the stored data in bytes (0 when missing)."""
        ...

    async def total_size(self) -> int: ...
