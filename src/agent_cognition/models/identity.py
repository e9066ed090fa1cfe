# agent_cognition/models/identity.py
"""Identity, vitals and financial budget models.

- BirthTraits: immutable personality weights (the soul)
- Vitals: waking energy and emotional state (shared, mutated in place)
- FinancialBudget: external spending constraint, not identity
"""

from __future__ import annotations

import random
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

# Default waking capacity in energy units
DEFAULT_WAKING_CAPACITY = 100_000.0

BIRTH_TRAIT_NAMES = ("creativity", "empathy", "curiosity", "humor", "patience")
NEUTRAL_TRAIT_WEIGHT = 0.5


def utc_now() -> datetime:
    return datetime.now(UTC)


class PresenceStatus(str, Enum):
    """What the agent is currently doing."""

    ONLINE = "online"
    SLEEPING = "sleeping"  # Consolidating memory
    EXPLORING = "exploring"  # Proactive curiosity
    OFFLINE = "offline"


# =============================================================================
# Soul
# =============================================================================


class BirthTraits(BaseModel):
    """
    Personality weights assigned at creation.

    Loaded once at startup and never changed for the lifetime of the process.
    """

    model_config = {"frozen": True}

    self_influence: dict[str, float] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utc_now)
    public_key_fingerprint: str | None = None

    def trait(self, name: str) -> float:
        """Weight for a trait; missing or zero weights read as neutral (0.5)."""
        return self.self_influence.get(name) or NEUTRAL_TRAIT_WEIGHT

    @classmethod
    def generate(cls, rng: random.Random | None = None) -> BirthTraits:
        """Create random birth traits for a new agent."""
        rng = rng or random.Random()
        return cls(self_influence={name: rng.random() for name in BIRTH_TRAIT_NAMES})


# =============================================================================
# Vitals
# =============================================================================


class WakingState(BaseModel):
    """Energy available before the agent needs to sleep."""

    capacity: float = Field(default=DEFAULT_WAKING_CAPACITY, gt=0)
    current: float = Field(default=DEFAULT_WAKING_CAPACITY, ge=0)
    threshold_warn: float = Field(default=0.7, ge=0, le=1)
    threshold_critical: float = Field(default=0.9, ge=0, le=1)
    last_sleep: datetime = Field(default_factory=utc_now)
    last_wake: datetime = Field(default_factory=utc_now)


class EmotionalState(BaseModel):
    """Emotional vector. Each value is intended in [0, 1]; clamped by writers."""

    stress: float = 0.3
    mood: float = 0.7
    joy: float = 0.5
    curiosity_satisfaction: float = 0.5


class Vitals(BaseModel):
    """
    Process-wide mutable runtime state.

    A single instance is shared by reference between the agentic loop
    (frustration path) and the sleep manager (sleep path).
    """

    waking: WakingState = Field(default_factory=WakingState)
    emotional: EmotionalState = Field(default_factory=EmotionalState)


# =============================================================================
# Budget
# =============================================================================


class BudgetAllocation(BaseModel):
    """How the agent prefers to split its spending."""

    work: float = 0.5
    curiosity: float = 0.3
    joy: float = 0.2


class FinancialBudget(BaseModel):
    """
    Spending state in currency units.

    Spend counters only grow. ``spent_this_month <= total_balance`` is a
    target, not enforced: callers observe a negative remaining amount.
    """

    total_balance: float = 0.0
    daily_limit: float = 5.0
    monthly_limit: float | None = 100.0
    spent_today: float = 0.0
    spent_this_month: float = 0.0
    allocation: BudgetAllocation = Field(default_factory=BudgetAllocation)
    warn_at: float | None = 0.5
    hard_stop_at: float | None = 2.0

    @property
    def remaining_this_month(self) -> float:
        return self.total_balance - self.spent_this_month

    @property
    def remaining_today(self) -> float:
        return self.daily_limit - self.spent_today

    def record_spend(self, amount: float) -> None:
        """Charge a completed spend to both counters."""
        if amount < 0:
            raise ValueError(f"Spend amount must be non-negative, got {amount}")
        self.spent_today += amount
        self.spent_this_month += amount


class AgentState(BaseModel):
    """Everything the model selector needs to know about the agent right now."""

    traits: BirthTraits = Field(default_factory=BirthTraits)
    vitals: Vitals = Field(default_factory=Vitals)
    budget: FinancialBudget = Field(default_factory=FinancialBudget)
