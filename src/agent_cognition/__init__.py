# agent_cognition/__init__.py
"""
Cognition core for a budgeted LLM agent.

- llm: provider protocol, OpenAI provider, model selection
- agentic: negotiate/think/act/observe loop
- vitals: fatigue, sleep and emotional metrics
- memory: budgeted store and sleep-time consolidation
- curiosity: idle-time exploration
- agent: CognitiveAgent, which owns the shared vitals
"""

from .agent import CognitiveAgent, build_system_prompt
from .agentic import AgenticLoopResult, LoopEvent, LoopPhase, LoopStatus, run_agentic_loop
from .exceptions import (
    AgentCognitionError,
    ExplorationBudgetError,
    MemoryBudgetExceededError,
    MemoryEntryNotFoundError,
    NoModelsAvailableError,
    SelfMemoryNotInitializedError,
    StorageError,
    UnknownModelError,
)
from .llm import LLMProvider, ModelSelector, OpenAIProvider, SelectionResult
from .memory import ConsolidationConfig, ConsolidationResult, MemoryConsolidator, MemoryStore
from .storage import FileStorage, InMemoryStorage, StorageAdapter, StorageKeys
from .vitals import SleepCycleReport, SleepManager, compute_stress, compute_wellbeing

__all__ = [
    # Agent
    "CognitiveAgent",
    "build_system_prompt",
    # Loop
    "run_agentic_loop",
    "AgenticLoopResult",
    "LoopEvent",
    "LoopPhase",
    "LoopStatus",
    # LLM
    "LLMProvider",
    "ModelSelector",
    "SelectionResult",
    "OpenAIProvider",
    # Memory
    "MemoryStore",
    "MemoryConsolidator",
    "ConsolidationConfig",
    "ConsolidationResult",
    # Vitals
    "SleepManager",
    "SleepCycleReport",
    "compute_stress",
    "compute_wellbeing",
    # Storage
    "StorageAdapter",
    "StorageKeys",
    "InMemoryStorage",
    "FileStorage",
    # Errors
    "AgentCognitionError",
    "ExplorationBudgetError",
    "MemoryBudgetExceededError",
    "MemoryEntryNotFoundError",
    "NoModelsAvailableError",
    "SelfMemoryNotInitializedError",
    "StorageError",
    "UnknownModelError",
]
