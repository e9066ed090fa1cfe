# agent_cognition/agentic/__init__.py
"""
Agentic loop: bounded think/act/observe cycle with admission control.
"""

from .loop import (
    SUBMIT_RESPONSE_TOOL,
    AgenticLoopResult,
    LoopEvent,
    LoopPhase,
    LoopStatus,
    execute_tool,
    run_agentic_loop,
)

__all__ = [
    "run_agentic_loop",
    "execute_tool",
    "AgenticLoopResult",
    "LoopEvent",
    "LoopPhase",
    "LoopStatus",
    "SUBMIT_RESPONSE_TOOL",
]
