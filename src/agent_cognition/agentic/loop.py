# agent_cognition/agentic/loop.py
"""
Agentic loop: negotiate -> think -> act -> observe -> (think | done | rest).

Negotiation runs once, before any completion call, and turns the request
away when the agent is too tired or cannot afford it. The main loop then
drives the model until it calls the built-in ``submit_response`` tool, gets
frustrated by repeated tool-less drafts, or runs out of steps.

All LLM and tool calls are awaited sequentially. The only Vitals mutation
is the stress bump on the frustration path.

Usage::

    result = await run_agentic_loop(
        provider,
        "gpt-4o-mini",
        system_prompt,
        "What changed in the last release?",
        budget=budget,
        sleep_manager=sleep_manager,
    )
    print(result.status, result.response_text)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel, Field

from agent_cognition.constants import (
    FRUSTRATION_STRESS_INCREMENT,
    NEGOTIATION_MAX_TOKENS,
    SUBMIT_RESPONSE_TOOL_NAME,
    THINK_MAX_TOKENS,
)
from agent_cognition.llm.provider import LLMProvider, ToolExecutor
from agent_cognition.models import (
    CompletionRequest,
    FinancialBudget,
    Message,
    MessageRole,
    TokenUsage,
    ToolCall,
    ToolDefinition,
    ToolResult,
    Vitals,
)

if TYPE_CHECKING:
    from agent_cognition.vitals import SleepManager

logger = logging.getLogger(__name__)

T = TypeVar("T")

FATIGUED_TEXT = "I'm feeling very tired and need to rest before I can respond clearly."
BUDGET_EXHAUSTED_TEXT = "I'm out of budget for now. I'll need to pause and resume later."
BUDGET_TOO_LOW_TEXT = "I don't have enough budget to take this on right now. Please try again later."
FRUSTRATED_TEXT = "I'm getting stuck and need to rest before trying again."
REST_TEXT = "I'm pausing to rest before continuing. Please check back soon."
CORRECTIVE_INSTRUCTION = f"Please finalize by calling {SUBMIT_RESPONSE_TOOL_NAME} with the text to send."

SUBMIT_RESPONSE_TOOL = ToolDefinition(
    name=SUBMIT_RESPONSE_TOOL_NAME,
    description="Finalize the response for the user.",
    parameters={
        "type": "object",
        "properties": {
            "text": {"type": "string", "description": "Final response to return to user."},
        },
        "required": ["text"],
    },
)

# =============================================================================
# Models
# =============================================================================


class LoopStatus(str, Enum):
    COMPLETED = "completed"
    FATIGUED = "fatigued"
    BUDGET_EXHAUSTED = "budget_exhausted"
    FRUSTRATED = "frustrated"
    REST = "rest"


class LoopPhase(str, Enum):
    NEGOTIATE = "negotiate"
    THINK = "think"
    ACT = "act"
    OBSERVE = "observe"
    REST = "rest"
    DONE = "done"


class LoopEvent(BaseModel):
    phase: LoopPhase
    step: int
    detail: str | None = None


class AgenticLoopResult(BaseModel):
    """Outcome of one run. Usage and cost cover every completion made."""

    status: LoopStatus
    response_text: str
    iterations: int = 0
    frustration: int = 0
    cost: float = 0.0
    usage: TokenUsage = Field(default_factory=TokenUsage)
    detail: str | None = None


EventCallback = Callable[[LoopEvent], None]

# =============================================================================
# Helpers
# =============================================================================


async def _with_timeout(awaitable: Awaitable[T], timeout: float | None) -> T:
    if timeout is None:
        return await awaitable
    return await asyncio.wait_for(awaitable, timeout)


async def execute_tool(
    call: ToolCall,
    tool_executor: ToolExecutor | None,
    timeout: float | None = None,
) -> str:
    """Run one tool call. Failures become text the model can read."""
    if tool_executor is None:
        return f"Tool {call.name} unavailable."
    try:
        return await _with_timeout(tool_executor(call), timeout)
    except TimeoutError:
        logger.warning(f"Tool {call.name} timed out after {timeout}s")
        return f"Tool {call.name} failed: timed out after {timeout}s"
    except Exception as e:
        logger.warning(f"Tool {call.name} failed: {e}")
        return f"Tool {call.name} failed: {e}"


def _submitted_text(call: ToolCall, fallback: str) -> str:
    text = call.arguments.get("text")
    return text if isinstance(text, str) else fallback


# =============================================================================
# Loop
# =============================================================================


async def run_agentic_loop(
    llm: LLMProvider,
    model: str,
    system_prompt: str,
    user_message: str,
    *,
    tools: Sequence[ToolDefinition] = (),
    tool_executor: ToolExecutor | None = None,
    max_steps: int = 6,
    max_frustration: int = 3,
    budget: FinancialBudget | None = None,
    vitals: Vitals | None = None,
    sleep_manager: SleepManager | None = None,
    on_event: EventCallback | None = None,
    llm_timeout: float | None = None,
    tool_timeout: float | None = None,
    cancel_event: asyncio.Event | None = None,
) -> AgenticLoopResult:
    """
    Run one request through the agentic loop.

    Provider exceptions other than a timeout propagate to the caller.
    """
    messages = [Message(role=MessageRole.USER, content=user_message)]
    all_tools = [*tools, SUBMIT_RESPONSE_TOOL]
    usage = TokenUsage()
    cost = 0.0
    frustration = 0

    def emit(phase: LoopPhase, step: int, detail: str | None = None) -> None:
        if on_event is not None:
            on_event(LoopEvent(phase=phase, step=step, detail=detail))

    def finish(
        status: LoopStatus,
        text: str,
        iterations: int,
        detail: str | None = None,
    ) -> AgenticLoopResult:
        logger.debug(f"Loop finished: status={status.value} iterations={iterations} cost={cost:.6f}")
        return AgenticLoopResult(
            status=status,
            response_text=text,
            iterations=iterations,
            frustration=frustration,
            cost=cost,
            usage=usage,
            detail=detail,
        )

    def cancelled(step: int) -> AgenticLoopResult | None:
        if cancel_event is None or not cancel_event.is_set():
            return None
        emit(LoopPhase.REST, step, "cancelled")
        return finish(LoopStatus.REST, REST_TEXT, step, "cancelled")

    # ------------------------------------------------------------------
    # Negotiate
    # ------------------------------------------------------------------

    if (result := cancelled(0)) is not None:
        return result

    emit(LoopPhase.NEGOTIATE, 0)
    if sleep_manager is not None and sleep_manager.should_sleep():
        emit(LoopPhase.REST, 0, "fatigue")
        return finish(LoopStatus.FATIGUED, FATIGUED_TEXT, 0, "fatigue")

    if budget is not None:
        estimate = llm.estimate_cost(
            CompletionRequest(
                model=model,
                system_prompt=system_prompt,
                messages=messages,
                tools=all_tools,
                max_tokens=NEGOTIATION_MAX_TOKENS,
            )
        )
        monthly = budget.remaining_this_month
        daily = budget.remaining_today

        if monthly <= 0 or daily <= 0:
            emit(LoopPhase.REST, 0, "budget_exhausted")
            return finish(LoopStatus.BUDGET_EXHAUSTED, BUDGET_EXHAUSTED_TEXT, 0, "budget_exhausted")

        if estimate.estimated_cost > monthly or estimate.estimated_cost > daily:
            logger.info(
                f"Declining request: estimate {estimate.estimated_cost:.6f} exceeds "
                f"remaining (month={monthly:.6f}, day={daily:.6f})"
            )
            emit(LoopPhase.REST, 0, "budget_too_low")
            return finish(LoopStatus.BUDGET_EXHAUSTED, BUDGET_TOO_LOW_TEXT, 0, "budget_too_low")

    # ------------------------------------------------------------------
    # Think / act / observe
    # ------------------------------------------------------------------

    for step in range(max_steps):
        if (result := cancelled(step)) is not None:
            return result

        emit(LoopPhase.THINK, step)
        request = CompletionRequest(
            model=model,
            system_prompt=system_prompt,
            messages=list(messages),
            tools=all_tools,
            max_tokens=THINK_MAX_TOKENS,
        )
        try:
            response = await _with_timeout(llm.complete(request), llm_timeout)
        except TimeoutError:
            logger.warning(f"Completion timed out after {llm_timeout}s at step {step}")
            emit(LoopPhase.REST, step, "llm_timeout")
            return finish(LoopStatus.REST, REST_TEXT, step, "llm_timeout")

        cost += response.cost or 0.0
        usage.add(response.usage)

        if response.tool_calls:
            for call in response.tool_calls:
                emit(LoopPhase.ACT, step, call.name)
                if call.name == SUBMIT_RESPONSE_TOOL_NAME:
                    emit(LoopPhase.DONE, step)
                    return finish(LoopStatus.COMPLETED, _submitted_text(call, response.text), step + 1)

                output = await execute_tool(call, tool_executor, tool_timeout)
                emit(LoopPhase.OBSERVE, step, call.name)
                messages.append(
                    Message(
                        role=MessageRole.TOOL,
                        content=[ToolResult(tool_call_id=call.id, result=output)],
                    )
                )
            continue

        frustration += 1
        logger.debug(f"No tool call at step {step} (frustration={frustration})")
        messages.append(Message(role=MessageRole.ASSISTANT, content=response.text))
        messages.append(Message(role=MessageRole.USER, content=CORRECTIVE_INSTRUCTION))

        if frustration >= max_frustration:
            if vitals is not None:
                vitals.emotional.stress = min(1.0, vitals.emotional.stress + FRUSTRATION_STRESS_INCREMENT)
            emit(LoopPhase.REST, step, "frustrated")
            return finish(LoopStatus.FRUSTRATED, FRUSTRATED_TEXT, step + 1, "frustrated")

    emit(LoopPhase.REST, max_steps, "max_steps")
    return finish(LoopStatus.REST, REST_TEXT, max_steps, "max_steps")
