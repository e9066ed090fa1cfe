# agent_cognition/llm/selector.py
"""
Model selector: decides which LLM backend to call.

Selection is a pure function of the agent state and the model catalog:
1. Filter (hard constraints): context window and affordability
2. Score (soft ranking):
   - Nature (60%): birth traits
   - Nurture (30%): current vitals and budget pressure
   - Entropy (10%): reproducible pseudo-randomness from a digest

Usage::

    selector = ModelSelector(state, provider.list_models())
    result = selector.select_model(TaskComplexity.MEDIUM, "Summarize the thread")
    response = await provider.complete(CompletionRequest(model=result.primary, ...))
"""

from __future__ import annotations

import hashlib
import logging
from datetime import datetime

from pydantic import BaseModel, Field

from agent_cognition.constants import (
    BUDGET_CRITICAL_THRESHOLD,
    BUDGET_LOW_THRESHOLD,
    HIGH_COMPLEXITY_MIN_CONTEXT,
    SELECTION_ESTIMATE_TOKENS,
    SELECTION_WEIGHT_ENTROPY,
    SELECTION_WEIGHT_NATURE,
    SELECTION_WEIGHT_NURTURE,
)
from agent_cognition.exceptions import NoModelsAvailableError
from agent_cognition.models import (
    AgentState,
    BirthTraits,
    Model,
    ModelTier,
    TaskComplexity,
    Vitals,
)

logger = logging.getLogger(__name__)

MAX_UINT32 = 0xFFFFFFFF
ENTROPY_TASK_PREFIX_CHARS = 20

# =============================================================================
# Models
# =============================================================================


class SelectionResult(BaseModel):
    """Outcome of one selection call. Never persisted."""

    primary: str
    chain: list[str] = Field(default_factory=list)
    reason: str
    model: Model


class ModelScore(BaseModel):
    """Per-model score breakdown."""

    model: Model
    score: float
    nature: float
    nurture: float
    entropy: float


# =============================================================================
# Helpers
# =============================================================================


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def estimate_selection_cost(model: Model) -> float:
    """Cost of a request under the flat token assumption."""
    return (model.input_cost_per_1k + model.output_cost_per_1k) / 1000 * SELECTION_ESTIMATE_TOKENS


def cheapest_model(models: list[Model]) -> Model:
    """Lowest-cost catalog entry, for background work such as consolidation."""
    if not models:
        raise NoModelsAvailableError()
    return min(models, key=estimate_selection_cost)


def compute_entropy(model_id: str, task_description: str, last_wake: datetime, mood: float) -> float:
    """
    Deterministic value in [0, 1] for a model/task/state combination.

    Identical inputs always produce the identical value.
    """
    payload = "|".join(
        [
            model_id,
            task_description[:ENTROPY_TASK_PREFIX_CHARS],
            last_wake.isoformat(),
            f"{mood:.4f}",
        ]
    )
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
    return int(digest[:8], 16) / MAX_UINT32


# =============================================================================
# Selector
# =============================================================================


class ModelSelector:
    """Chooses a backend for a task given the full agent state."""

    def __init__(self, state: AgentState, available_models: list[Model]) -> None:
        self.state = state
        self.available_models = available_models

    def select_model(
        self,
        complexity: TaskComplexity | str,
        task_description: str = "task",
    ) -> SelectionResult:
        complexity = TaskComplexity(complexity)
        budget_remaining = self.state.budget.remaining_this_month

        candidates = self.filter_by_constraints(self.available_models, complexity, budget_remaining)

        if not candidates:
            if not self.available_models:
                raise NoModelsAvailableError()
            cheapest = min(self.available_models, key=lambda m: m.input_cost_per_1k)
            logger.warning(
                f"No model passed constraints (remaining={budget_remaining:.4f}); "
                f"forced fallback to {cheapest.id}"
            )
            return SelectionResult(
                primary=cheapest.id,
                chain=[cheapest.id],
                reason="Budget critical - forced fallback to cheapest",
                model=cheapest,
            )

        scored = self.score_models(candidates, task_description, budget_remaining)
        top = scored[0]
        logger.debug(f"Selected {top.model.id} from {[s.model.id for s in scored]}")

        return SelectionResult(
            primary=top.model.id,
            chain=[s.model.id for s in scored],
            reason=f"Score: {top.score:.2f} (Nature: {top.nature:.2f})",
            model=top.model,
        )

    def score_models(
        self,
        models: list[Model],
        task_description: str,
        budget_remaining: float | None = None,
    ) -> list[ModelScore]:
        """Score models and return them highest first (stable for ties)."""
        if budget_remaining is None:
            budget_remaining = self.state.budget.remaining_this_month
        vitals = self.state.vitals

        scored: list[ModelScore] = []
        for model in models:
            nature = self.score_nature(model, self.state.traits)
            nurture = self.score_nurture(model, vitals, budget_remaining)
            entropy = compute_entropy(
                model.id,
                task_description,
                vitals.waking.last_wake,
                vitals.emotional.mood,
            )
            total = (
                nature * SELECTION_WEIGHT_NATURE
                + nurture * SELECTION_WEIGHT_NURTURE
                + entropy * SELECTION_WEIGHT_ENTROPY
            )
            scored.append(ModelScore(model=model, score=total, nature=nature, nurture=nurture, entropy=entropy))

        return sorted(scored, key=lambda s: s.score, reverse=True)

    # ------------------------------------------------------------------
    # Hard constraints
    # ------------------------------------------------------------------

    @staticmethod
    def filter_by_constraints(
        models: list[Model],
        complexity: TaskComplexity,
        budget_remaining: float,
    ) -> list[Model]:
        survivors: list[Model] = []
        for model in models:
            if complexity == TaskComplexity.HIGH and model.max_context < HIGH_COMPLEXITY_MIN_CONTEXT:
                continue

            if budget_remaining < estimate_selection_cost(model):
                # Keep at least one usable model under financial stress
                if model.tier == ModelTier.FREE:
                    survivors.append(model)
                elif budget_remaining < BUDGET_CRITICAL_THRESHOLD and model.tier == ModelTier.CHEAP:
                    survivors.append(model)
                continue

            survivors.append(model)
        return survivors

    # ------------------------------------------------------------------
    # Nature - traits
    # ------------------------------------------------------------------

    @staticmethod
    def score_nature(model: Model, traits: BirthTraits) -> float:
        score = 0.5

        curiosity = traits.trait("curiosity")
        if curiosity > 0.7:
            if model.has_strength("reasoning") or model.tier == ModelTier.EXPENSIVE:
                score += 0.3
        elif curiosity < 0.3:
            if model.tier in (ModelTier.CHEAP, ModelTier.STANDARD):
                score += 0.2

        if traits.trait("patience") < 0.4 and model.has_strength("speed"):
            score += 0.3

        if traits.trait("empathy") > 0.7 and model.has_strength("nuance", "creative"):
            score += 0.2

        return _clamp(score)

    # ------------------------------------------------------------------
    # Nurture - state
    # ------------------------------------------------------------------

    @staticmethod
    def score_nurture(model: Model, vitals: Vitals, budget_remaining: float) -> float:
        score = 0.5
        emotional = vitals.emotional

        if emotional.mood > 0.8 and model.has_strength("creative"):
            score += 0.2

        if emotional.stress > 0.7:
            if model.has_strength("coding", "reasoning"):
                score += 0.3
            if model.tier == ModelTier.CHEAP:
                score -= 0.2

        if budget_remaining < BUDGET_LOW_THRESHOLD:
            if model.tier in (ModelTier.CHEAP, ModelTier.FREE):
                score += 0.4
            if model.tier == ModelTier.EXPENSIVE:
                score -= 0.4

        return _clamp(score)
