# agent_cognition/llm/__init__.py
"""LLM provider protocol, token helpers, model selection and the OpenAI provider."""

from .openai_provider import OPENAI_MODELS, OpenAIProvider
from .provider import LLMProvider, ToolExecutor, complete_text
from .selector import (
    ModelScore,
    ModelSelector,
    SelectionResult,
    cheapest_model,
    compute_entropy,
    estimate_selection_cost,
)
from .tokens import count_tokens, estimate_request_tokens

__all__ = [
    "LLMProvider",
    "ToolExecutor",
    "complete_text",
    "ModelSelector",
    "ModelScore",
    "SelectionResult",
    "compute_entropy",
    "estimate_selection_cost",
    "cheapest_model",
    "count_tokens",
    "estimate_request_tokens",
    "OpenAIProvider",
    "OPENAI_MODELS",
]
