# tests/support.py
"""Test doubles and builders shared by the test modules."""

from collections.abc import Callable
from datetime import timedelta

from agent_cognition.models import (
    CompletionRequest,
    CompletionResponse,
    CostEstimate,
    MemoryEntry,
    Model,
    ModelTier,
    TokenUsage,
    ToolCall,
    utc_now,
)


# ---------------------------------------------------------------------------
# Scripted provider
# ---------------------------------------------------------------------------


class ScriptedLLM:
    """
    LLMProvider test double.

    Replies come from ``responses`` in order (str, CompletionResponse or an
    exception to raise), or from ``responder`` when one is given.
    """

    def __init__(
        self,
        responses: list | None = None,
        responder: Callable[[CompletionRequest], object] | None = None,
        models: list[Model] | None = None,
        estimate: float = 0.0,
    ):
        self.responses = list(responses or [])
        self.responder = responder
        self.models = models if models is not None else list(CATALOG)
        self.estimate = estimate
        self.requests: list[CompletionRequest] = []
        self.estimate_calls = 0

    @property
    def id(self) -> str:
        return "scripted"

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        self.requests.append(request)
        if self.responder is not None:
            reply = self.responder(request)
        elif self.responses:
            reply = self.responses.pop(0)
        else:
            reply = ""

        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, str):
            return CompletionResponse(text=reply, model=request.model)
        return reply

    def estimate_cost(self, request: CompletionRequest) -> CostEstimate:
        self.estimate_calls += 1
        return CostEstimate(estimated_cost=self.estimate, confidence="high")

    def list_models(self) -> list[Model]:
        return list(self.models)


def submit(text: str | None, cost: float = 0.0, input_tokens: int = 0, output_tokens: int = 0) -> CompletionResponse:
    """A response that calls submit_response."""
    arguments = {} if text is None else {"text": text}
    return CompletionResponse(
        text="raw draft",
        tool_calls=[ToolCall(id="call-submit", name="submit_response", arguments=arguments)],
        usage=TokenUsage(input_tokens=input_tokens, output_tokens=output_tokens),
        cost=cost,
    )


def draft(text: str = "Here is a draft.", cost: float = 0.0, input_tokens: int = 0, output_tokens: int = 0) -> CompletionResponse:
    """A response with no tool calls."""
    return CompletionResponse(
        text=text,
        usage=TokenUsage(input_tokens=input_tokens, output_tokens=output_tokens),
        cost=cost,
    )


CATALOG = [
    Model(
        id="claude-opus",
        name="Claude Opus",
        provider="anthropic",
        tier=ModelTier.EXPENSIVE,
        input_cost_per_1k=0.015,
        output_cost_per_1k=0.075,
        max_context=200_000,
        strengths={"reasoning", "nuance"},
    ),
    Model(
        id="claude-sonnet",
        name="Claude Sonnet",
        provider="anthropic",
        tier=ModelTier.STANDARD,
        input_cost_per_1k=0.003,
        output_cost_per_1k=0.015,
        max_context=200_000,
        strengths={"coding", "balanced"},
    ),
    Model(
        id="gpt-4o-mini",
        name="GPT-4o Mini",
        provider="openai",
        tier=ModelTier.CHEAP,
        input_cost_per_1k=0.00015,
        output_cost_per_1k=0.0006,
        max_context=128_000,
        strengths={"speed"},
    ),
]


def make_entry(
    content: str = "remember this",
    tags: list[str] | None = None,
    access_count: int = 0,
    age_days: float = 0.0,
    idle_days: float | None = None,
) -> MemoryEntry:
    """A core memory entry created ``age_days`` ago, last touched ``idle_days`` ago."""
    now = utc_now()
    created = now - timedelta(days=age_days)
    accessed = now - timedelta(days=age_days if idle_days is None else idle_days)
    return MemoryEntry(
        content=content,
        tags=tags or [],
        access_count=access_count,
        created_at=created,
        last_accessed_at=accessed,
    )


