# agent_cognition/memory/store.py
"""
Memory store: budgeted persistence for the three memory domains.

- self: identity, values, curiosity, style
- core: skills and patterns (the consolidator's domain)
- projects: one record per project id

Every budgeted write is serialized once and its UTF-8 byte length checked
against the budget before anything reaches storage. An over-budget write
raises MemoryBudgetExceededError and writes nothing.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from agent_cognition.exceptions import (
    MemoryBudgetExceededError,
    MemoryEntryNotFoundError,
    SelfMemoryNotInitializedError,
)
from agent_cognition.models import (
    AgentSelf,
    CoreMemory,
    CoreSection,
    FinancialBudget,
    MemoryBudget,
    MemoryEntry,
    MemoryUsage,
    ProjectMemory,
    Vitals,
)
from agent_cognition.storage import StorageAdapter, StorageKeys

logger = logging.getLogger(__name__)


def encode_record(record: BaseModel) -> str:
    """Serialized form used for both persistence and budget checks."""
    return record.model_dump_json(indent=2)


def serialized_size(record: BaseModel) -> int:
    """Byte size of a record as it would be persisted."""
    return len(encode_record(record).encode("utf-8"))


class MemoryStore:
    """Reads and writes agent memory through a storage adapter."""

    def __init__(self, storage: StorageAdapter, budget: MemoryBudget | None = None) -> None:
        self.storage = storage
        self._budget = budget or MemoryBudget()

    async def _write_budgeted(self, key: str, record: BaseModel, section: str, limit: int) -> None:
        data = encode_record(record)
        size = len(data.encode("utf-8"))
        if size > limit:
            raise MemoryBudgetExceededError(section, size, limit)
        await self.storage.write(key, data)

    # =========================================================================
    # Self memory (the ego)
    # =========================================================================

    async def get_self(self) -> AgentSelf | None:
        data = await self.storage.read(StorageKeys.SELF)
        if not data:
            return None
        return AgentSelf.model_validate_json(data)

    async def save_self(self, agent_self: AgentSelf) -> None:
        await self._write_budgeted(StorageKeys.SELF, agent_self, "self", self._budget.self_max_bytes)

    async def update_self(self, **changes: Any) -> AgentSelf:
        current = await self.get_self()
        if current is None:
            raise SelfMemoryNotInitializedError()
        updated = current.model_copy(update=changes)
        await self.save_self(updated)
        return updated

    # =========================================================================
    # Core memory (skills and patterns)
    # =========================================================================

    async def get_core(self) -> CoreMemory:
        data = await self.storage.read(StorageKeys.CORE)
        if not data:
            return CoreMemory()
        return CoreMemory.model_validate_json(data)

    async def save_core(self, core: CoreMemory) -> None:
        await self._write_budgeted(StorageKeys.CORE, core, "core", self._budget.core_max_bytes)

    async def add_core_entry(
        self,
        section: CoreSection,
        content: str,
        tags: list[str] | None = None,
        confidence: float = 0.5,
    ) -> MemoryEntry:
        """Append a new entry to a core section and persist."""
        core = await self.get_core()
        entry = MemoryEntry(content=content, tags=list(dict.fromkeys(tags or [])), confidence=confidence)
        core.section(section).append(entry)
        await self.save_core(core)
        logger.debug(f"Added core entry {entry.id} to {section.value}")
        return entry

    async def update_core_entry(self, section: CoreSection, entry_id: str, **changes: Any) -> MemoryEntry:
        core = await self.get_core()
        entry = core.find(section, entry_id)
        if entry is None:
            raise MemoryEntryNotFoundError(section.value, entry_id)
        for field, value in changes.items():
            setattr(entry, field, value)
        await self.save_core(core)
        return entry

    async def touch_core_entry(self, section: CoreSection, entry_id: str) -> None:
        """Record an access on an entry; missing entries are ignored."""
        core = await self.get_core()
        entry = core.find(section, entry_id)
        if entry is not None:
            entry.touch()
            await self.save_core(core)

    # =========================================================================
    # Project memory (context specific)
    # =========================================================================

    async def get_project(self, project_id: str) -> ProjectMemory | None:
        data = await self.storage.read(StorageKeys.project(project_id))
        if not data:
            return None
        return ProjectMemory.model_validate_json(data)

    async def save_project(self, project: ProjectMemory) -> None:
        key = StorageKeys.project(project.project_id)
        if not await self.storage.exists(key):
            count = len(await self.list_projects())
            if count >= self._budget.max_projects:
                raise MemoryBudgetExceededError("projects", count + 1, self._budget.max_projects)
        await self._write_budgeted(key, project, "project", self._budget.project_max_bytes)

    async def get_or_create_project(self, project_id: str) -> ProjectMemory:
        project = await self.get_project(project_id)
        if project is None:
            project = ProjectMemory(project_id=project_id)
            await self.save_project(project)
        return project

    async def list_projects(self) -> list[str]:
        keys = await self.storage.list(StorageKeys.PROJECT_PREFIX)
        return [k.removeprefix(StorageKeys.PROJECT_PREFIX) for k in keys]

    async def delete_project(self, project_id: str) -> None:
        await self.storage.delete(StorageKeys.project(project_id))

    # =========================================================================
    # Budget and size
    # =========================================================================

    async def get_memory_usage(self) -> MemoryUsage:
        projects = {
            project_id: await self.storage.size(StorageKeys.project(project_id))
            for project_id in await self.list_projects()
        }
        return MemoryUsage(
            self_bytes=await self.storage.size(StorageKeys.SELF),
            core_bytes=await self.storage.size(StorageKeys.CORE),
            projects=projects,
        )

    def get_budget(self) -> MemoryBudget:
        return self._budget.model_copy()

    def is_over_budget(self, usage: MemoryUsage) -> bool:
        return usage.self_bytes > self._budget.self_max_bytes or usage.core_bytes > self._budget.core_max_bytes

    # =========================================================================
    # Vitals and financial budget (not byte-budgeted)
    # =========================================================================

    async def get_vitals(self) -> Vitals:
        data = await self.storage.read(StorageKeys.VITALS)
        if not data:
            return Vitals()
        return Vitals.model_validate_json(data)

    async def save_vitals(self, vitals: Vitals) -> None:
        await self.storage.write(StorageKeys.VITALS, encode_record(vitals))

    async def get_financial_budget(self) -> FinancialBudget:
        data = await self.storage.read(StorageKeys.BUDGET)
        if not data:
            return FinancialBudget()
        return FinancialBudget.model_validate_json(data)

    async def save_financial_budget(self, budget: FinancialBudget) -> None:
        await self.storage.write(StorageKeys.BUDGET, encode_record(budget))
