# agent_cognition/vitals/sleep.py
"""
Sleep manager: the waking/sleeping cycle.

Energy drains with work; fatigue is the drained fraction amplified by
stress. Sleep runs a memory consolidation, then restores energy, halves
stress and pulls mood toward an optimistic baseline.

The manager mutates the shared Vitals object in place. Callers that replace
the object (e.g. after reloading from storage) must call ``sync_vitals``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime

from pydantic import BaseModel, Field

from agent_cognition.constants import (
    FATIGUE_SLEEP_THRESHOLD,
    FATIGUE_STRESS_FACTOR,
    MOOD_BASELINE,
    SLEEP_STRESS_DECAY,
    TOKENS_PER_ENERGY_UNIT,
)
from agent_cognition.memory import ConsolidationResult, MemoryConsolidator
from agent_cognition.models import Vitals, utc_now

logger = logging.getLogger(__name__)


class SleepCycleReport(BaseModel):
    """Summary of one completed sleep."""

    timestamp: datetime = Field(default_factory=utc_now)
    duration_ms: float
    initial_stress: float
    final_stress: float
    memories_consolidated: int = Field(description="summarized + merged")
    consolidation: ConsolidationResult


def energy_for_tokens(tokens: int) -> float:
    """Energy units charged for a number of consumed tokens."""
    return tokens / TOKENS_PER_ENERGY_UNIT


class SleepManager:
    """Owns fatigue arithmetic and the sleep cycle for one agent."""

    def __init__(self, consolidator: MemoryConsolidator, vitals: Vitals) -> None:
        self.consolidator = consolidator
        self.vitals = vitals
        self._lock = asyncio.Lock()
        self._completed = 0
        self._last_report: SleepCycleReport | None = None

    @property
    def is_sleeping(self) -> bool:
        return self._lock.locked()

    def sync_vitals(self, vitals: Vitals) -> None:
        """Rebind the shared vitals handle."""
        self.vitals = vitals

    # ------------------------------------------------------------------
    # Energy and fatigue
    # ------------------------------------------------------------------

    def consume_energy(self, amount: float) -> None:
        waking = self.vitals.waking
        waking.current = max(0.0, waking.current - amount)

    def _drained(self) -> float:
        waking = self.vitals.waking
        return 1 - waking.current / waking.capacity

    def get_fatigue(self) -> float:
        """
        Drained fraction compounded by stress.

        Not clamped: full drain under maximal stress reads 1.5.
        """
        return self._drained() * (1 + self.vitals.emotional.stress * FATIGUE_STRESS_FACTOR)

    def should_sleep(self) -> bool:
        return self.get_fatigue() > FATIGUE_SLEEP_THRESHOLD

    def should_warn(self) -> bool:
        return self._drained() >= self.vitals.waking.threshold_warn

    def should_critical(self) -> bool:
        return self._drained() >= self.vitals.waking.threshold_critical

    # ------------------------------------------------------------------
    # Sleep
    # ------------------------------------------------------------------

    async def sleep(self) -> SleepCycleReport:
        """
        Consolidate memory, then recover.

        Concurrent callers share one cycle: a caller that waited on an
        in-flight sleep gets that sleep's report. If consolidation raises,
        vitals are left untouched and the error propagates.
        """
        generation = self._completed
        async with self._lock:
            if self._completed != generation and self._last_report is not None:
                return self._last_report

            started = time.perf_counter()
            initial_stress = self.vitals.emotional.stress

            logger.info(f"Sleeping (fatigue={self.get_fatigue():.2f}, stress={initial_stress:.2f})")
            result = await self.consolidator.consolidate()

            waking = self.vitals.waking
            emotional = self.vitals.emotional
            waking.current = waking.capacity
            emotional.stress = max(0.0, emotional.stress * SLEEP_STRESS_DECAY)
            emotional.mood = (emotional.mood + MOOD_BASELINE) / 2
            now = utc_now()
            waking.last_sleep = now
            waking.last_wake = now

            report = SleepCycleReport(
                timestamp=now,
                duration_ms=(time.perf_counter() - started) * 1000,
                initial_stress=initial_stress,
                final_stress=emotional.stress,
                memories_consolidated=result.memories_touched,
                consolidation=result,
            )
            self._last_report = report
            self._completed += 1

        logger.info(f"Awake: stress {report.initial_stress:.2f} -> {report.final_stress:.2f}")
        return report
