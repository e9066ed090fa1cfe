# agent_cognition/vitals/history.py
"""
Vitals history: one record per wake/sleep cycle.

Stored as a JSON list under ``vitals/history``, newest first and capped.
"""

from __future__ import annotations

import logging
from datetime import datetime

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from agent_cognition.memory import MemoryStore
from agent_cognition.models import FinancialBudget, Vitals
from agent_cognition.storage import StorageKeys

logger = logging.getLogger(__name__)

MAX_HISTORY_CYCLES = 200


class VitalsCycle(BaseModel):
    wake: datetime
    sleep: datetime
    before_sleep: dict[str, float] = Field(default_factory=dict)
    after_sleep: dict[str, float] = Field(default_factory=dict)
    models_used: dict[str, int] = Field(default_factory=dict)
    budget: dict[str, float] = Field(default_factory=dict)


_history_adapter = TypeAdapter(list[VitalsCycle])


def _emotional_snapshot(vitals: Vitals) -> dict[str, float]:
    return vitals.emotional.model_dump()


def build_vitals_cycle(
    before: Vitals,
    after: Vitals,
    models_used: dict[str, int],
    budget: FinancialBudget,
) -> VitalsCycle:
    """Record the emotional state on either side of a sleep."""
    return VitalsCycle(
        wake=before.waking.last_wake,
        sleep=after.waking.last_sleep,
        before_sleep=_emotional_snapshot(before),
        after_sleep=_emotional_snapshot(after),
        models_used=dict(models_used),
        budget={
            "spent_today": budget.spent_today,
            "spent_this_month": budget.spent_this_month,
            "total_balance": budget.total_balance,
        },
    )


async def load_history(store: MemoryStore) -> list[VitalsCycle]:
    """Stored cycles, newest first. A corrupt history reads as empty."""
    data = await store.storage.read(StorageKeys.VITALS_HISTORY)
    if not data:
        return []
    try:
        return _history_adapter.validate_json(data)
    except ValidationError as e:
        logger.warning(f"Ignoring unreadable vitals history: {e}")
        return []


async def record_cycle(store: MemoryStore, cycle: VitalsCycle) -> None:
    history = await load_history(store)
    history.insert(0, cycle)
    payload = _history_adapter.dump_json(history[:MAX_HISTORY_CYCLES], indent=2).decode("utf-8")
    await store.storage.write(StorageKeys.VITALS_HISTORY, payload)
