# agent_cognition/vitals/__init__.py
"""
Vitals: energy, fatigue, sleep and emotional metrics.
"""

from .history import (
    MAX_HISTORY_CYCLES,
    VitalsCycle,
    build_vitals_cycle,
    load_history,
    record_cycle,
)
from .sleep import SleepCycleReport, SleepManager, energy_for_tokens
from .stress import compute_stress, compute_wellbeing

__all__ = [
    "SleepManager",
    "SleepCycleReport",
    "energy_for_tokens",
    "compute_stress",
    "compute_wellbeing",
    "VitalsCycle",
    "MAX_HISTORY_CYCLES",
    "build_vitals_cycle",
    "load_history",
    "record_cycle",
]
