# agent_cognition/memory/__init__.py
"""
Budgeted agent memory.

- MemoryStore: self / core / project persistence with byte budgets
- MemoryConsolidator: summarize, merge, rank and evict core memory
"""

from .consolidation import (
    ConsolidationConfig,
    ConsolidationResult,
    MemoryConsolidator,
    hotness,
    tag_overlap,
)
from .store import MemoryStore, encode_record, serialized_size

__all__ = [
    "MemoryStore",
    "encode_record",
    "serialized_size",
    "MemoryConsolidator",
    "ConsolidationConfig",
    "ConsolidationResult",
    "hotness",
    "tag_overlap",
]
