# agent_cognition/exceptions.py
"""Exception hierarchy for the cognition core.

Signaled loop outcomes (fatigued, budget_exhausted, frustrated, rest) are
results, not exceptions. Only hard errors live here.
"""

from __future__ import annotations


class AgentCognitionError(Exception):
    """Base class for all cognition core errors."""


class MemoryBudgetExceededError(AgentCognitionError):
    """Raised when a memory write would exceed its byte budget. Nothing is written."""

    def __init__(self, section: str, size: int, limit: int):
        self.section = section
        self.size = size
        self.limit = limit
        super().__init__(f"{section} memory exceeds budget: {size} > {limit}")


class MemoryEntryNotFoundError(AgentCognitionError):
    """Raised when a core memory entry id does not exist in its section."""

    def __init__(self, section: str, entry_id: str):
        self.section = section
        self.entry_id = entry_id
        super().__init__(f"Entry not found in {section}: {entry_id}")


class SelfMemoryNotInitializedError(AgentCognitionError):
    """Raised when self memory is required but has never been saved."""

    def __init__(self) -> None:
        super().__init__("Self memory not initialized")


class NoModelsAvailableError(AgentCognitionError):
    """Raised when model selection is attempted on an empty catalog."""

    def __init__(self) -> None:
        super().__init__("No models available")


class UnknownModelError(AgentCognitionError):
    """Raised by a provider asked to complete with a model it does not serve."""

    def __init__(self, model_id: str):
        self.model_id = model_id
        super().__init__(f"Unknown model: {model_id}")


class StorageError(AgentCognitionError):
    """Raised when a storage adapter cannot complete an operation."""


class ExplorationBudgetError(AgentCognitionError):
    """Raised mid-exploration when the per-session credit cap is reached."""
