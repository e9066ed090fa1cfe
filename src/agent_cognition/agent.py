# agent_cognition/agent.py
"""
CognitiveAgent: wires selector, loop, sleep and curiosity together.

The agent is the single owner of the shared Vitals object. Message handling,
sleep and consolidation all run under one asyncio.Lock, so a consolidation
never interleaves with a loop run against the same vitals and core memory.

Usage::

    store = MemoryStore(FileStorage("ada"))
    agent = CognitiveAgent(store, OpenAIProvider(), traits=BirthTraits.generate())
    await agent.initialize()
    result = await agent.handle_message("Hello!")
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import Sequence

from agent_cognition.agentic import AgenticLoopResult, LoopStatus, run_agentic_loop
from agent_cognition.config import DEFAULT_MAX_FRUSTRATION, DEFAULT_MAX_STEPS, DEFAULT_MODEL
from agent_cognition.curiosity import CuriosityConfig, CuriosityExplorer, ExplorationResult
from agent_cognition.llm import LLMProvider, ModelSelector, ToolExecutor, cheapest_model
from agent_cognition.memory import ConsolidationConfig, ConsolidationResult, MemoryConsolidator, MemoryStore
from agent_cognition.models import (
    AgentSelf,
    AgentState,
    BirthTraits,
    FinancialBudget,
    PresenceStatus,
    TaskComplexity,
    ToolDefinition,
    Vitals,
)
from agent_cognition.vitals import (
    SleepCycleReport,
    SleepManager,
    build_vitals_cycle,
    energy_for_tokens,
    record_cycle,
)

logger = logging.getLogger(__name__)


def build_system_prompt(agent_self: AgentSelf) -> str:
    """Render the agent's self memory as a system prompt."""
    style = agent_self.style
    favorites = " ".join(style.favorite_emoji)
    if style.emoji_usage == "minimal":
        emoji_note = "Use emoji sparingly."
    elif style.emoji_usage == "expressive":
        emoji_note = f"Use emoji freely to express yourself. Your favorites: {favorites}"
    else:
        emoji_note = f"Use emoji moderately. Your favorites: {favorites}"

    return (
        f"You are {agent_self.identity}\n\n"
        f"Your values: {agent_self.values}\n\n"
        f"Your communication style: {style.tone}\n"
        f"{emoji_note}\n\n"
        "Your current goals:\n"
        f"- Short term: {agent_self.goals.short}\n"
        f"- Long term: {agent_self.goals.long}\n\n"
        "Respond naturally as yourself. Be genuine."
    )


class CognitiveAgent:
    """One agent: memory, vitals, budget and the processes that act on them."""

    def __init__(
        self,
        store: MemoryStore,
        llm: LLMProvider,
        traits: BirthTraits | None = None,
        *,
        consolidation_config: ConsolidationConfig | None = None,
        curiosity_config: CuriosityConfig | None = None,
        max_steps: int = DEFAULT_MAX_STEPS,
        max_frustration: int = DEFAULT_MAX_FRUSTRATION,
    ) -> None:
        self.store = store
        self.llm = llm
        self.traits = traits or BirthTraits()
        self.max_steps = max_steps
        self.max_frustration = max_frustration

        self.vitals = Vitals()
        self.budget = FinancialBudget()
        # Background work runs on the cheapest model the provider serves
        models = llm.list_models()
        background_model = cheapest_model(models).id if models else DEFAULT_MODEL
        self.consolidator = MemoryConsolidator(store, llm, consolidation_config, model=background_model)
        self.sleep_manager = SleepManager(self.consolidator, self.vitals)
        self.curiosity = CuriosityExplorer(
            store,
            llm,
            self._available_credits,
            curiosity_config or CuriosityConfig(model=background_model),
        )

        self._lock = asyncio.Lock()
        self._status = PresenceStatus.OFFLINE
        self._models_used: Counter[str] = Counter()

    @property
    def status(self) -> PresenceStatus:
        return self._status

    async def initialize(self) -> None:
        """Load persisted vitals and budget, then come online."""
        self.vitals = await self.store.get_vitals()
        self.budget = await self.store.get_financial_budget()
        self.sleep_manager.sync_vitals(self.vitals)
        self._status = PresenceStatus.ONLINE
        logger.info("Agent initialized")

    async def initialize_self(self, agent_self: AgentSelf) -> None:
        """First-time setup of self memory."""
        await self.store.save_self(agent_self)

    async def shutdown(self) -> None:
        async with self._lock:
            await self._persist()
            self._status = PresenceStatus.OFFLINE

    async def _available_credits(self) -> float:
        return self.budget.remaining_this_month

    async def _persist(self) -> None:
        await self.store.save_vitals(self.vitals)
        await self.store.save_financial_budget(self.budget)

    # =========================================================================
    # Messages
    # =========================================================================

    async def handle_message(
        self,
        text: str,
        complexity: TaskComplexity | str = TaskComplexity.MEDIUM,
        tools: Sequence[ToolDefinition] = (),
        tool_executor: ToolExecutor | None = None,
    ) -> AgenticLoopResult:
        """Answer one message, then pay for it in money and energy."""
        self.curiosity.record_activity()

        async with self._lock:
            agent_self = await self.store.get_self()
            if agent_self is None:
                logger.debug("No self memory yet, answering with defaults")
                agent_self = AgentSelf()

            selector = ModelSelector(
                AgentState(traits=self.traits, vitals=self.vitals, budget=self.budget),
                self.llm.list_models(),
            )
            selection = selector.select_model(complexity, text)
            logger.debug(f"Model {selection.primary}: {selection.reason}")

            result = await run_agentic_loop(
                self.llm,
                selection.primary,
                build_system_prompt(agent_self),
                text,
                tools=tools,
                tool_executor=tool_executor,
                max_steps=self.max_steps,
                max_frustration=self.max_frustration,
                budget=self.budget,
                vitals=self.vitals,
                sleep_manager=self.sleep_manager,
            )

            if result.iterations > 0:
                self._models_used[selection.primary] += 1
            self.budget.record_spend(result.cost)
            self.sleep_manager.consume_energy(energy_for_tokens(result.usage.total_tokens))
            await self._persist()

            if result.status == LoopStatus.FATIGUED or self.sleep_manager.should_sleep():
                try:
                    await self._sleep()
                except Exception as e:
                    # The answer is already paid for; keep it and stay awake
                    logger.error(f"Sleep after message failed: {e}")

            return result

    # =========================================================================
    # Sleep and consolidation
    # =========================================================================

    async def _sleep(self) -> SleepCycleReport:
        previous = self._status
        self._status = PresenceStatus.SLEEPING
        before = self.vitals.model_copy(deep=True)
        try:
            report = await self.sleep_manager.sleep()
        finally:
            self._status = previous

        await self._persist()
        await record_cycle(self.store, build_vitals_cycle(before, self.vitals, dict(self._models_used), self.budget))
        self._models_used.clear()
        return report

    async def run_sleep_cycle(self) -> SleepCycleReport:
        """
        Scheduled full sleep: consolidate and recover.

        Raises whatever consolidation raises; vitals are then left untouched.
        """
        async with self._lock:
            return await self._sleep()

    async def run_consolidation(self) -> ConsolidationResult | None:
        """Scheduled consolidation without touching vitals. Failures are logged."""
        async with self._lock:
            previous = self._status
            self._status = PresenceStatus.SLEEPING
            logger.info("Starting memory consolidation")
            try:
                return await self.consolidator.consolidate()
            except Exception as e:
                logger.error(f"Memory consolidation failed: {e}")
                return None
            finally:
                self._status = previous

    # =========================================================================
    # Curiosity
    # =========================================================================

    async def check_curiosity(self) -> ExplorationResult | None:
        """Explore one question if idle and able to."""
        if self._lock.locked() or not await self.curiosity.can_explore():
            return None

        async with self._lock:
            question = await self.curiosity.select_question()
            if question is None:
                return None

            previous = self._status
            self._status = PresenceStatus.EXPLORING
            logger.info(f"Exploring: {question.question}")
            try:
                result = await self.curiosity.explore(question)
            finally:
                self._status = previous

            self.budget.record_spend(result.credits_spent)
            await self.store.save_financial_budget(self.budget)
            return result
