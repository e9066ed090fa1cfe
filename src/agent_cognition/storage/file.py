# agent_cognition/storage/file.py
"""
File-system storage adapter.

Each key is stored as ``<base_path>/<key>.json``. Blocking file I/O runs in
a worker thread so callers stay async.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path, PurePosixPath

from agent_cognition.config import AGENT_HOME
from agent_cognition.exceptions import StorageError

logger = logging.getLogger(__name__)

FILE_SUFFIX = ".json"
TEMP_SUFFIX = ".tmp"


class FileStorage:
    """Stores agent data under ``<root>/<agent_id>/``."""

    def __init__(self, agent_id: str, base_dir: Path | str | None = None) -> None:
        root = Path(base_dir) if base_dir is not None else AGENT_HOME
        self.base_path = root / agent_id

    def _path(self, key: str) -> Path:
        # Drop empty, "." and ".." parts so a key can never escape base_path
        parts = [p for p in PurePosixPath(key).parts if p not in ("", ".", "..", "/")]
        if not parts:
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.base_path.joinpath(*parts[:-1], parts[-1] + FILE_SUFFIX)

    # ------------------------------------------------------------------
    # Blocking helpers (run in a thread)
    # ------------------------------------------------------------------

    @staticmethod
    def _read_sync(path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    @staticmethod
    def _write_sync(path: Path, data: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp = path.with_name(path.name + TEMP_SUFFIX)
        temp.write_text(data, encoding="utf-8")
        os.replace(temp, path)

    def _list_sync(self, prefix: str) -> list[str]:
        if not self.base_path.exists():
            return []
        keys = []
        for path in self.base_path.rglob(f"*{FILE_SUFFIX}"):
            key = path.relative_to(self.base_path).as_posix()[: -len(FILE_SUFFIX)]
            if key.startswith(prefix):
                keys.append(key)
        return sorted(keys)

    # ------------------------------------------------------------------
    # StorageAdapter
    # ------------------------------------------------------------------

    async def read(self, key: str) -> str | None:
        return await asyncio.to_thread(self._read_sync, self._path(key))

    async def write(self, key: str, data: str) -> None:
        try:
            await asyncio.to_thread(self._write_sync, self._path(key), data)
        except OSError as e:
            raise StorageError(f"Failed to write {key}: {e}") from e
        logger.debug(f"Wrote {key} ({len(data)} chars)")

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._path(key).unlink, missing_ok=True)

    async def list(self, prefix: str) -> list[str]:
        return await asyncio.to_thread(self._list_sync, prefix)

    async def exists(self, key: str) -> bool:
        return await asyncio.to_thread(self._path(key).exists)

    async def size(self, key: str) -> int:
        path = self._path(key)
        try:
            return (await asyncio.to_thread(path.stat)).st_size
        except FileNotFoundError:
            return 0

    async def total_size(self) -> int:
        keys = await self.list("")
        sizes = [await self.size(k) for k in keys]
        return sum(sizes)
