# agent_cognition/models/__init__.py
"""Pydantic models shared across the cognition core."""

from .identity import (
    AgentState,
    BirthTraits,
    BudgetAllocation,
    EmotionalState,
    FinancialBudget,
    PresenceStatus,
    Vitals,
    WakingState,
    utc_now,
)
from .llm import (
    CompletionRequest,
    CompletionResponse,
    CostEstimate,
    Message,
    MessageRole,
    Model,
    ModelTier,
    TaskComplexity,
    TokenUsage,
    ToolCall,
    ToolDefinition,
    ToolResult,
)
from .memory import (
    AgentGoals,
    AgentSelf,
    AgentStyle,
    CoreMemory,
    CoreSection,
    CuriosityFinding,
    CuriosityQuestion,
    CuriosityState,
    MemoryBudget,
    MemoryEntry,
    MemoryPointer,
    MemoryUsage,
    PersonMemory,
    ProjectMemory,
)

__all__ = [
    # Identity
    "AgentState",
    "BirthTraits",
    "BudgetAllocation",
    "EmotionalState",
    "FinancialBudget",
    "PresenceStatus",
    "Vitals",
    "WakingState",
    "utc_now",
    # LLM
    "CompletionRequest",
    "CompletionResponse",
    "CostEstimate",
    "Message",
    "MessageRole",
    "Model",
    "ModelTier",
    "TaskComplexity",
    "TokenUsage",
    "ToolCall",
    "ToolDefinition",
    "ToolResult",
    # Memory
    "AgentGoals",
    "AgentSelf",
    "AgentStyle",
    "CoreMemory",
    "CoreSection",
    "CuriosityFinding",
    "CuriosityQuestion",
    "CuriosityState",
    "MemoryBudget",
    "MemoryEntry",
    "MemoryPointer",
    "MemoryUsage",
    "PersonMemory",
    "ProjectMemory",
]
