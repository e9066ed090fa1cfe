# agent_cognition/vitals/stress.py
"""Derived emotional metrics: composite stress and wellbeing."""

from __future__ import annotations

from agent_cognition.constants import WELLBEING_WEIGHTS
from agent_cognition.models import AgentSelf, Vitals

# Unexplored questions at which the curiosity backlog term saturates
UNEXPLORED_QUESTION_SATURATION = 10


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def compute_stress(agent_self: AgentSelf, vitals: Vitals) -> float:
    """Stress blended with mood, unmet curiosity and open questions, in [0, 1]."""
    emotional = vitals.emotional
    unexplored = sum(1 for q in agent_self.curiosity.questions if q.explored_at is None)

    stress = (
        emotional.stress * 0.4
        + (1 - emotional.mood) * 0.3
        + (1 - emotional.curiosity_satisfaction) * 0.2
        + min(1.0, unexplored / UNEXPLORED_QUESTION_SATURATION) * 0.1
    )
    return _clamp(stress)


def compute_wellbeing(vitals: Vitals) -> float:
    emotional = vitals.emotional
    score = (
        emotional.joy * WELLBEING_WEIGHTS["joy"]
        + emotional.curiosity_satisfaction * WELLBEING_WEIGHTS["curiosity"]
        + (1 - emotional.stress) * WELLBEING_WEIGHTS["stress_inverse"]
        + emotional.mood * WELLBEING_WEIGHTS["mood"]
    )
    return _clamp(score)
