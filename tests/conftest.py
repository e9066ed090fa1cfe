# tests/conftest.py
"""
Shared pytest fixtures and configuration for agent_cognition tests.
"""

import logging

import pytest
from support import ScriptedLLM

from agent_cognition.memory import MemoryStore
from agent_cognition.models import (
    AgentState,
    BirthTraits,
    EmotionalState,
    FinancialBudget,
    Vitals,
    WakingState,
)
from agent_cognition.storage import InMemoryStorage

# Configure logging for tests
logging.basicConfig(level=logging.WARNING)
logging.getLogger("agent_cognition").setLevel(logging.DEBUG)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def store(storage):
    return MemoryStore(storage)


@pytest.fixture
def vitals():
    return Vitals(
        waking=WakingState(capacity=1000, current=1000),
        emotional=EmotionalState(stress=0.1, mood=0.5),
    )


@pytest.fixture
def budget():
    """Healthy budget so personality dominates selection."""
    return FinancialBudget(total_balance=100.0, daily_limit=5.0)


@pytest.fixture
def traits():
    return BirthTraits(self_influence={"curiosity": 0.5, "patience": 0.5, "empathy": 0.5})


@pytest.fixture
def agent_state(traits, vitals, budget):
    return AgentState(traits=traits, vitals=vitals, budget=budget)


@pytest.fixture
def llm():
    return ScriptedLLM()
