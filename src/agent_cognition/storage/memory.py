# agent_cognition/storage/memory.py
"""In-memory storage adapter for testing and development. Not persistent."""

from __future__ import annotations

from pydantic import BaseModel, Field


class InMemoryStorage(BaseModel):
    """Keeps every key in a dict of UTF-8 strings."""

    data: dict[str, str] = Field(default_factory=dict)

    async def read(self, key: str) -> str | None:
        return self.data.get(key)

    async def write(self, key: str, data: str) -> None:
        self.data[key] = data

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)

    async def list(self, prefix: str) -> list[str]:
        return sorted(k for k in self.data if k.startswith(prefix))

    async def exists(self, key: str) -> bool:
        return key in self.data

    async def size(self, key: str) -> int:
        value = self.data.get(key)
        return len(value.encode("utf-8")) if value else 0

    async def total_size(self) -> int:
        return sum(len(v.encode("utf-8")) for v in self.data.values())

    def clear(self) -> None:
        self.data.clear()
