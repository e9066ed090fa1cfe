# tests/test_explorer.py
"""
Tests for the curiosity explorer.

Covers:
- Idle detection and exploration gating
- Question selection and bookkeeping
- Exploration outcomes (saved, not saved, failed)
"""

from datetime import timedelta

import pytest
from support import ScriptedLLM

from agent_cognition.curiosity import CuriosityConfig, CuriosityExplorer
from agent_cognition.exceptions import SelfMemoryNotInitializedError
from agent_cognition.models import AgentSelf, CompletionResponse, CuriosityQuestion, utc_now


class FakeClock:
    def __init__(self):
        self.now = utc_now()

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def _credits(amount: float):
    async def credits():
        return amount

    return credits


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def agent_self():
    return AgentSelf(identity="Ada, a curious engineer")


def _explorer(store, llm, clock, credits=10.0, **config):
    return CuriosityExplorer(store, llm, _credits(credits), CuriosityConfig(**config), clock=clock)


# ============================================================================
# Gating
# ============================================================================


class TestGating:
    """Tests for idle detection and can_explore."""

    def test_idle_after_threshold(self, store, llm, clock):
        explorer = _explorer(store, llm, clock)
        assert explorer.is_idle() is False

        clock.advance(minutes=10)
        assert explorer.is_idle() is True

        explorer.record_activity()
        assert explorer.is_idle() is False

    @pytest.mark.asyncio
    async def test_can_explore_requires_credits(self, store, llm, clock):
        poor = _explorer(store, llm, clock, credits=0.5)
        funded = _explorer(store, llm, clock, credits=5.0)
        assert await funded.can_explore() is False

        clock.advance(minutes=30)
        assert await poor.can_explore() is False
        assert await funded.can_explore() is True


# ============================================================================
# Questions
# ============================================================================


class TestQuestions:
    """Tests for question selection and add_question."""

    @pytest.mark.asyncio
    async def test_select_highest_interest_unexplored(self, store, llm, clock, agent_self):
        agent_self.curiosity.questions = [
            CuriosityQuestion(question="low", interest=0.2),
            CuriosityQuestion(question="done", interest=0.99, explored_at=utc_now()),
            CuriosityQuestion(question="high", interest=0.8),
        ]
        await store.save_self(agent_self)

        question = await _explorer(store, llm, clock).select_question()

        assert question.question == "high"

    @pytest.mark.asyncio
    async def test_select_without_self_is_none(self, store, llm, clock):
        assert await _explorer(store, llm, clock).select_question() is None

    @pytest.mark.asyncio
    async def test_add_question_dedupes_and_clamps(self, store, llm, clock, agent_self):
        await store.save_self(agent_self)
        explorer = _explorer(store, llm, clock)

        await explorer.add_question("Why is the sky blue?", 1.7)
        await explorer.add_question("why is the SKY blue?", 0.1)

        questions = (await store.get_self()).curiosity.questions
        assert len(questions) == 1
        assert questions[0].interest == 1.0

    @pytest.mark.asyncio
    async def test_add_question_keeps_top_fifty(self, store, llm, clock, agent_self):
        await store.save_self(agent_self)
        explorer = _explorer(store, llm, clock)

        for i in range(55):
            await explorer.add_question(f"question {i}", i / 100)

        questions = (await store.get_self()).curiosity.questions
        assert len(questions) == 50
        assert questions[0].question == "question 54"
        assert "question 0" not in {q.question for q in questions}

    @pytest.mark.asyncio
    async def test_add_question_requires_self(self, store, llm, clock):
        with pytest.raises(SelfMemoryNotInitializedError):
            await _explorer(store, llm, clock).add_question("anything", 0.5)


# ============================================================================
# Exploration
# ============================================================================


class TestExplore:
    """Tests for CuriosityExplorer.explore."""

    @pytest.mark.asyncio
    async def test_confident_finding_is_saved(self, store, clock, agent_self):
        question = CuriosityQuestion(question="How do caches fail?", interest=0.9)
        agent_self.curiosity.questions = [question]
        await store.save_self(agent_self)
        llm = ScriptedLLM(["plan", "long exploration", "Caches fail when cold", "0.9"])

        result = await _explorer(store, llm, clock).explore(question)

        assert result.success is True
        assert result.finding == "Caches fail when cold"
        assert result.saved_to.startswith("core/patterns/")

        core = await store.get_core()
        assert core.patterns[0].content == "Caches fail when cold"
        assert core.patterns[0].tags == ["curiosity", "self-exploration"]
        assert core.patterns[0].confidence == pytest.approx(0.9)

        saved_self = await store.get_self()
        assert saved_self.curiosity.questions[0].explored_at == clock.now
        assert saved_self.curiosity.recent_findings[0].finding == "Caches fail when cold"

    @pytest.mark.asyncio
    async def test_low_confidence_is_not_saved(self, store, clock, agent_self):
        question = CuriosityQuestion(question="Is tea better than coffee?")
        agent_self.curiosity.questions = [question]
        await store.save_self(agent_self)
        llm = ScriptedLLM(["plan", "exploration", "It depends", "not sure"])

        result = await _explorer(store, llm, clock).explore(question)

        assert result.success is True
        assert result.saved_to is None
        assert (await store.get_core()).patterns == []
        finding = (await store.get_self()).curiosity.recent_findings[0]
        assert finding.saved_to == "not saved (low confidence)"

    @pytest.mark.asyncio
    async def test_keeps_last_ten_findings(self, store, clock, agent_self):
        await store.save_self(agent_self)
        explorer = _explorer(store, ScriptedLLM(responder=lambda request: "0.1"), clock)

        for i in range(12):
            await explorer.explore(CuriosityQuestion(question=f"q{i}"))

        findings = (await store.get_self()).curiosity.recent_findings
        assert len(findings) == 10
        assert findings[0].question == "q11"

    @pytest.mark.asyncio
    async def test_missing_self_reports_failure(self, store, llm, clock):
        result = await _explorer(store, llm, clock).explore(CuriosityQuestion(question="?"))

        assert result.success is False
        assert result.finding == ""
        assert llm.requests == []

    @pytest.mark.asyncio
    async def test_credit_cap_stops_exploration(self, store, clock, agent_self):
        await store.save_self(agent_self)
        llm = ScriptedLLM(responder=lambda request: CompletionResponse(text="0.9", cost=0.02))
        explorer = _explorer(store, llm, clock, max_credits_per_session=0.01)

        result = await explorer.explore(CuriosityQuestion(question="expensive"))

        assert result.success is False
        assert result.credits_spent == pytest.approx(0.02)
        assert len(llm.requests) == 1
        assert explorer.is_exploring is False
