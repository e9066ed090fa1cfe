# tests/test_storage.py
"""Tests for the in-memory and file storage adapters."""

import pytest

from agent_cognition.exceptions import StorageError
from agent_cognition.storage import FileStorage, InMemoryStorage, StorageAdapter, StorageKeys


@pytest.fixture(params=["memory", "file"])
def adapter(request, tmp_path):
    if request.param == "memory":
        return InMemoryStorage()
    return FileStorage("agent-1", base_dir=tmp_path)


class TestStorageAdapters:
    """Behaviour shared by every adapter."""

    def test_satisfies_protocol(self, adapter):
        assert isinstance(adapter, StorageAdapter)

    @pytest.mark.asyncio
    async def test_read_missing_is_none(self, adapter):
        assert await adapter.read("memory/self") is None
        assert await adapter.exists("memory/self") is False
        assert await adapter.size("memory/self") == 0

    @pytest.mark.asyncio
    async def test_write_then_read(self, adapter):
        await adapter.write("memory/core", '{"skills": []}')

        assert await adapter.read("memory/core") == '{"skills": []}'
        assert await adapter.exists("memory/core") is True

    @pytest.mark.asyncio
    async def test_size_counts_utf8_bytes(self, adapter):
        await adapter.write("memory/self", "héllo")
        assert await adapter.size("memory/self") == 6

    @pytest.mark.asyncio
    async def test_list_by_prefix(self, adapter):
        await adapter.write(StorageKeys.project("b"), "{}")
        await adapter.write(StorageKeys.project("a"), "{}")
        await adapter.write(StorageKeys.CORE, "{}")

        assert await adapter.list(StorageKeys.PROJECT_PREFIX) == ["memory/projects/a", "memory/projects/b"]

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, adapter):
        await adapter.write("vitals/current", "{}")
        await adapter.delete("vitals/current")
        await adapter.delete("vitals/current")

        assert await adapter.read("vitals/current") is None

    @pytest.mark.asyncio
    async def test_total_size(self, adapter):
        await adapter.write("a", "12345")
        await adapter.write("b/c", "123")
        assert await adapter.total_size() == 8


class TestFileStorage:
    """File layout specifics."""

    @pytest.mark.asyncio
    async def test_layout_and_no_temp_files(self, tmp_path):
        storage = FileStorage("ada", base_dir=tmp_path)
        await storage.write("memory/core", "{}")

        assert (tmp_path / "ada" / "memory" / "core.json").read_text() == "{}"
        assert list(tmp_path.rglob("*.tmp")) == []

    @pytest.mark.asyncio
    async def test_traversal_is_stripped(self, tmp_path):
        storage = FileStorage("ada", base_dir=tmp_path)
        await storage.write("../../escape", "x")

        assert (tmp_path / "ada" / "escape.json").exists()
        assert not (tmp_path.parent / "escape.json").exists()

    @pytest.mark.asyncio
    async def test_empty_key_rejected(self, tmp_path):
        storage = FileStorage("ada", base_dir=tmp_path)
        with pytest.raises(StorageError):
            await storage.write("..", "x")
