# agent_cognition/llm/provider.py
"""
LLM provider protocol.

Core code depends only on this protocol; implementations handle specific
vendors. Providers must not assume anything about the caller beyond the
request they receive.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from agent_cognition.models import (
    CompletionRequest,
    CompletionResponse,
    CostEstimate,
    Message,
    MessageRole,
    Model,
    ToolCall,
)

ToolExecutor = Callable[[ToolCall], Awaitable[str]]
"""Callback: (tool_call) -> textual tool result."""


@runtime_checkable
class LLMProvider(Protocol):
    """Protocol for interchangeable LLM backends."""

    @property
    def id(self) -> str: ...

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Run one completion. May return tool calls instead of (or with) text."""
        ...

    def estimate_cost(self, request: CompletionRequest) -> CostEstimate:
        """Estimate the cost of a request without performing it."""
        ...

    def list_models(self) -> list[Model]:
        """Models this provider can serve."""
        ...


async def complete_text(
    llm: LLMProvider,
    system_prompt: str,
    user_message: str,
    max_tokens: int = 200,
    model: str = "",
) -> str:
    """Single-shot prompt returning only the response text."""
    request = CompletionRequest(
        model=model,
        system_prompt=system_prompt,
        messages=[Message(role=MessageRole.USER, content=user_message)],
        max_tokens=max_tokens,
    )
    response = await llm.complete(request)
    return response.text.strip()
