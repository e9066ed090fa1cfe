# agent_cognition/constants.py
"""Architectural constants and weights for the cognition core.

Centralizes the tunable numbers so the selector, loop and sleep manager
agree on them.
"""

from __future__ import annotations

# =============================================================================
# Model selection
# =============================================================================

# Nature (birth traits) dominates so personality persists across states
SELECTION_WEIGHT_NATURE = 0.60
SELECTION_WEIGHT_NURTURE = 0.30
SELECTION_WEIGHT_ENTROPY = 0.10

# Flat token assumption used for pre-selection cost estimates
SELECTION_ESTIMATE_TOKENS = 2000

# Minimum context window for high complexity tasks
HIGH_COMPLEXITY_MIN_CONTEXT = 16_000

# =============================================================================
# Budget
# =============================================================================

# Remaining monthly budget below this triggers cheap-model preference
BUDGET_LOW_THRESHOLD = 1.00
# Remaining monthly budget below this means basically broke
BUDGET_CRITICAL_THRESHOLD = 0.01

# =============================================================================
# Sleep / fatigue
# =============================================================================

FATIGUE_WARN = 0.70
FATIGUE_CRITICAL = 0.90
FATIGUE_SLEEP_THRESHOLD = 0.8
# Stress multiplies fatigue by (1 + stress * factor)
FATIGUE_STRESS_FACTOR = 0.5
# Mood drifts halfway toward this anchor on every sleep
MOOD_BASELINE = 0.75
SLEEP_STRESS_DECAY = 0.5
# Energy units charged per token consumed
TOKENS_PER_ENERGY_UNIT = 10

# =============================================================================
# Agentic loop
# =============================================================================

FRUSTRATION_STRESS_INCREMENT = 0.2
NEGOTIATION_MAX_TOKENS = 512
THINK_MAX_TOKENS = 1024
SUBMIT_RESPONSE_TOOL_NAME = "submit_response"

# =============================================================================
# Wellbeing formula
# =============================================================================

WELLBEING_WEIGHTS: dict[str, float] = {
    "joy": 0.35,
    "curiosity": 0.30,
    "stress_inverse": 0.20,
    "mood": 0.15,
}
