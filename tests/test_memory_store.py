# tests/test_memory_store.py
"""
Tests for the memory store.

Covers:
- Self memory round trip and partial updates
- Core entry management
- Project memory and the project cap
- Byte budget enforcement
- Vitals and financial budget persistence
"""

import pytest

from agent_cognition.exceptions import (
    MemoryBudgetExceededError,
    MemoryEntryNotFoundError,
    SelfMemoryNotInitializedError,
)
from agent_cognition.memory import MemoryStore, serialized_size
from agent_cognition.models import (
    AgentSelf,
    CoreMemory,
    CoreSection,
    FinancialBudget,
    MemoryBudget,
    MemoryEntry,
    ProjectMemory,
    Vitals,
)
from agent_cognition.storage import InMemoryStorage, StorageKeys


# ============================================================================
# Self memory
# ============================================================================


class TestSelfMemory:
    """Tests for self memory."""

    @pytest.mark.asyncio
    async def test_missing_self_is_none(self, store):
        assert await store.get_self() is None

    @pytest.mark.asyncio
    async def test_save_and_load(self, store):
        await store.save_self(AgentSelf(identity="Ada, a careful reviewer"))
        loaded = await store.get_self()
        assert loaded.identity == "Ada, a careful reviewer"

    @pytest.mark.asyncio
    async def test_update_requires_existing_self(self, store):
        with pytest.raises(SelfMemoryNotInitializedError):
            await store.update_self(values="Be kind")

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(self, store):
        await store.save_self(AgentSelf(identity="Ada"))
        updated = await store.update_self(values="Be kind")

        assert updated.identity == "Ada"
        assert (await store.get_self()).values == "Be kind"


# ============================================================================
# Core memory
# ============================================================================


class TestCoreMemory:
    """Tests for core entries."""

    @pytest.mark.asyncio
    async def test_empty_core_by_default(self, store):
        core = await store.get_core()
        assert core.entry_count == 0

    @pytest.mark.asyncio
    async def test_add_entry_dedupes_tags(self, store):
        entry = await store.add_core_entry(CoreSection.SKILLS, "Writes tests first", tags=["tdd", "tdd", "python"])

        core = await store.get_core()
        assert core.find(CoreSection.SKILLS, entry.id).tags == ["tdd", "python"]

    @pytest.mark.asyncio
    async def test_update_entry(self, store):
        entry = await store.add_core_entry(CoreSection.PATTERNS, "old")
        await store.update_core_entry(CoreSection.PATTERNS, entry.id, content="new")

        core = await store.get_core()
        assert core.find(CoreSection.PATTERNS, entry.id).content == "new"

    @pytest.mark.asyncio
    async def test_update_missing_entry_raises(self, store):
        with pytest.raises(MemoryEntryNotFoundError):
            await store.update_core_entry(CoreSection.PATTERNS, "nope", content="x")

    @pytest.mark.asyncio
    async def test_touch_records_access(self, store):
        entry = await store.add_core_entry(CoreSection.SKILLS, "skill")
        await store.touch_core_entry(CoreSection.SKILLS, entry.id)
        await store.touch_core_entry(CoreSection.SKILLS, "missing")

        core = await store.get_core()
        touched = core.find(CoreSection.SKILLS, entry.id)
        assert touched.access_count == 1
        assert touched.last_accessed_at >= entry.last_accessed_at


# ============================================================================
# Budgets
# ============================================================================


class TestBudgets:
    """Byte budget enforcement."""

    @pytest.mark.asyncio
    async def test_over_budget_write_raises_and_writes_nothing(self):
        storage = InMemoryStorage()
        store = MemoryStore(storage, MemoryBudget(core_max_bytes=200))
        core = CoreMemory(skills=[MemoryEntry(content="x" * 500)])

        with pytest.raises(MemoryBudgetExceededError) as exc_info:
            await store.save_core(core)

        assert exc_info.value.section == "core"
        assert exc_info.value.size == serialized_size(core)
        assert await storage.read(StorageKeys.CORE) is None

    @pytest.mark.asyncio
    async def test_write_at_exact_budget_succeeds(self):
        core = CoreMemory(patterns=[MemoryEntry(content="fits")])
        store = MemoryStore(InMemoryStorage(), MemoryBudget(core_max_bytes=serialized_size(core)))

        await store.save_core(core)

        assert (await store.get_core()) == core

    @pytest.mark.asyncio
    async def test_usage_and_over_budget(self, store):
        await store.save_self(AgentSelf())
        await store.save_core(CoreMemory())
        await store.save_project(ProjectMemory(project_id="p1"))

        usage = await store.get_memory_usage()

        assert usage.self_bytes == len((await store.storage.read(StorageKeys.SELF)).encode("utf-8"))
        assert set(usage.projects) == {"p1"}
        assert usage.total == usage.self_bytes + usage.core_bytes + usage.projects["p1"]
        assert store.is_over_budget(usage) is False

    def test_get_budget_returns_copy(self, store):
        budget = store.get_budget()
        budget.core_max_bytes = 1
        assert store.get_budget().core_max_bytes != 1


# ============================================================================
# Projects
# ============================================================================


class TestProjects:
    """Project memory."""

    @pytest.mark.asyncio
    async def test_get_or_create(self, store):
        created = await store.get_or_create_project("alpha")
        again = await store.get_or_create_project("alpha")

        assert created.project_id == again.project_id == "alpha"
        assert await store.list_projects() == ["alpha"]

    @pytest.mark.asyncio
    async def test_project_cap(self):
        store = MemoryStore(InMemoryStorage(), MemoryBudget(max_projects=2))
        await store.save_project(ProjectMemory(project_id="a"))
        await store.save_project(ProjectMemory(project_id="b"))

        with pytest.raises(MemoryBudgetExceededError):
            await store.save_project(ProjectMemory(project_id="c"))

        # Rewriting an existing project is still allowed at the cap
        await store.save_project(ProjectMemory(project_id="a"))

    @pytest.mark.asyncio
    async def test_delete_project(self, store):
        await store.save_project(ProjectMemory(project_id="gone"))
        await store.delete_project("gone")
        assert await store.get_project("gone") is None


# ============================================================================
# Vitals and financial budget
# ============================================================================


class TestStatePersistence:
    """Vitals and financial budget records."""

    @pytest.mark.asyncio
    async def test_defaults_when_missing(self, store):
        assert (await store.get_vitals()).waking.current == Vitals().waking.capacity
        assert await store.get_financial_budget() == FinancialBudget()

    @pytest.mark.asyncio
    async def test_round_trip(self, store, vitals, budget):
        budget.record_spend(1.25)
        await store.save_vitals(vitals)
        await store.save_financial_budget(budget)

        assert await store.get_vitals() == vitals
        loaded = await store.get_financial_budget()
        assert loaded.spent_this_month == pytest.approx(1.25)
        assert loaded.remaining_this_month == pytest.approx(98.75)

    def test_negative_spend_rejected(self, budget):
        with pytest.raises(ValueError):
            budget.record_spend(-1)
