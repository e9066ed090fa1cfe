# agent_cognition/curiosity/explorer.py
"""
Curiosity explorer: proactive exploration while idle.

When the agent has been idle long enough and has credits to spare, it picks
its most interesting unexplored question, reasons through it, and keeps any
confident insight as a core pattern.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta

from pydantic import BaseModel, Field

from agent_cognition.config import DEFAULT_MODEL
from agent_cognition.exceptions import ExplorationBudgetError, SelfMemoryNotInitializedError
from agent_cognition.llm.provider import LLMProvider
from agent_cognition.memory import MemoryStore
from agent_cognition.models import (
    AgentSelf,
    CompletionRequest,
    CoreSection,
    CuriosityFinding,
    CuriosityQuestion,
    Message,
    MessageRole,
    utc_now,
)

logger = logging.getLogger(__name__)

CURIOSITY_TAGS = ["curiosity", "self-exploration"]
MAX_RECENT_FINDINGS = 10
MAX_QUESTIONS = 50
NOT_SAVED = "not saved (low confidence)"

CreditsFn = Callable[[], Awaitable[float]]


class CuriosityConfig(BaseModel):
    idle_threshold: timedelta = Field(default=timedelta(minutes=10))
    min_credits: float = Field(default=1.0, description="Minimum credits to start exploring")
    max_credits_per_session: float = Field(default=5.0)
    save_confidence_threshold: float = 0.7
    model: str = DEFAULT_MODEL


class ExplorationResult(BaseModel):
    question: str
    finding: str = ""
    saved_to: str | None = None
    credits_spent: float = 0.0
    success: bool = False


class CuriosityExplorer:
    """Idle-time question exploration for one agent."""

    def __init__(
        self,
        store: MemoryStore,
        llm: LLMProvider,
        credits_fn: CreditsFn,
        config: CuriosityConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.llm = llm
        self.credits_fn = credits_fn
        self.config = config or CuriosityConfig()
        self._clock = clock or utc_now
        self._last_activity = self._clock()
        self._exploring = False
        self._credits_spent = 0.0

    @property
    def is_exploring(self) -> bool:
        return self._exploring

    def record_activity(self) -> None:
        """Reset the idle timer."""
        self._last_activity = self._clock()

    def is_idle(self) -> bool:
        return self._clock() - self._last_activity >= self.config.idle_threshold

    async def can_explore(self) -> bool:
        if self._exploring:
            return False
        if await self.credits_fn() < self.config.min_credits:
            return False
        return self.is_idle()

    async def select_question(self) -> CuriosityQuestion | None:
        """Highest-interest unexplored question, if any."""
        agent_self = await self.store.get_self()
        if agent_self is None:
            return None
        open_questions = [q for q in agent_self.curiosity.questions if q.explored_at is None]
        if not open_questions:
            return None
        return max(open_questions, key=lambda q: q.interest)

    # ------------------------------------------------------------------
    # Exploration
    # ------------------------------------------------------------------

    async def _ask(self, system_prompt: str, user_message: str, max_tokens: int) -> str:
        if self._credits_spent >= self.config.max_credits_per_session:
            raise ExplorationBudgetError(f"Session credit cap reached ({self._credits_spent:.4f})")
        response = await self.llm.complete(
            CompletionRequest(
                model=self.config.model,
                system_prompt=system_prompt,
                messages=[Message(role=MessageRole.USER, content=user_message)],
                max_tokens=max_tokens,
            )
        )
        self._credits_spent += response.cost
        return response.text.strip()

    async def _assess_confidence(self, finding: str) -> float:
        response = await self._ask(
            "Rate the quality and generalizability of this insight from 0.0 to 1.0. Output only the number.",
            finding,
            max_tokens=10,
        )
        try:
            score = float(response)
        except ValueError:
            return 0.5
        return min(1.0, max(0.0, score))

    async def _reason(self, agent_self: AgentSelf, question: str) -> str:
        plan = await self._ask(
            f"You are {agent_self.identity}. You have a question you want to explore.\n"
            f"Your values: {agent_self.values}\n"
            f"Your style: {agent_self.style.tone}\n\n"
            "Generate a brief exploration plan (2-3 steps) to answer this question through reasoning.",
            f"Question: {question}",
            max_tokens=200,
        )
        exploration = await self._ask(
            f"You are {agent_self.identity}. You are exploring a question that fascinates you.\n"
            f"Your values: {agent_self.values}\n\n"
            "Think through this question carefully. Share your insights and what you learned.",
            f"Question: {question}\n\nExploration plan: {plan}\n\nNow explore this question and share your findings.",
            max_tokens=500,
        )
        return await self._ask(
            "Extract the key insight from this exploration as a single, concise statement that could be remembered.",
            exploration,
            max_tokens=100,
        )

    async def explore(self, question: CuriosityQuestion) -> ExplorationResult:
        """
        Reason through a question and record what was learned.

        Failures are logged and reported as ``success=False``.
        """
        self._exploring = True
        self._credits_spent = 0.0
        try:
            agent_self = await self.store.get_self()
            if agent_self is None:
                raise SelfMemoryNotInitializedError()

            finding = await self._reason(agent_self, question.question)
            confidence = await self._assess_confidence(finding)

            saved_to: str | None = None
            if confidence > self.config.save_confidence_threshold:
                entry = await self.store.add_core_entry(
                    CoreSection.PATTERNS,
                    finding,
                    tags=CURIOSITY_TAGS,
                    confidence=confidence,
                )
                saved_to = f"core/{CoreSection.PATTERNS.value}/{entry.id}"

            now = self._clock()
            for q in agent_self.curiosity.questions:
                if q.question == question.question:
                    q.explored_at = now

            found = CuriosityFinding(
                question=question.question,
                finding=finding,
                saved_to=saved_to or NOT_SAVED,
                found_at=now,
            )
            agent_self.curiosity.recent_findings = [
                found,
                *agent_self.curiosity.recent_findings[: MAX_RECENT_FINDINGS - 1],
            ]
            await self.store.save_self(agent_self)

            logger.info(f"Explored {question.question!r} (confidence={confidence:.2f}, saved={saved_to is not None})")
            return ExplorationResult(
                question=question.question,
                finding=finding,
                saved_to=saved_to,
                credits_spent=self._credits_spent,
                success=True,
            )
        except Exception as e:
            logger.error(f"Exploration of {question.question!r} failed: {e}")
            return ExplorationResult(question=question.question, credits_spent=self._credits_spent)
        finally:
            self._exploring = False

    async def add_question(self, question: str, interest: float) -> None:
        """Add a question unless an equal one (ignoring case) exists."""
        agent_self = await self.store.get_self()
        if agent_self is None:
            raise SelfMemoryNotInitializedError()

        questions = agent_self.curiosity.questions
        if any(q.question.lower() == question.lower() for q in questions):
            return

        questions.append(
            CuriosityQuestion(
                question=question,
                interest=min(1.0, max(0.0, interest)),
                added_at=self._clock(),
            )
        )
        agent_self.curiosity.questions = sorted(questions, key=lambda q: q.interest, reverse=True)[:MAX_QUESTIONS]
        await self.store.save_self(agent_self)
