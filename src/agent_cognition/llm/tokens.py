# agent_cognition/llm/tokens.py
"""Token counting helpers (cl100k_base as an approximation for most models)."""

from __future__ import annotations

import json
import logging
from functools import lru_cache

import tiktoken

from agent_cognition.models import Message

logger = logging.getLogger(__name__)

# Per-message overhead for role/formatting tokens
MESSAGE_OVERHEAD_TOKENS = 4


@lru_cache(maxsize=1)
def _encoding() -> tiktoken.Encoding:
    return tiktoken.get_encoding("cl100k_base")


def count_tokens(text: str) -> int:
    """Estimate the token count of a piece of text."""
    if not text:
        return 0
    try:
        return len(_encoding().encode(text, disallowed_special=()))
    except ValueError as e:
        logger.debug(f"Token encoding failed, using char heuristic: {e}")
        return (len(text) + 3) // 4


def estimate_request_tokens(system_prompt: str, messages: list[Message]) -> int:
    """Estimate prompt tokens for a system prompt plus conversation."""
    total = count_tokens(system_prompt)
    for message in messages:
        if isinstance(message.content, str):
            total += count_tokens(message.content)
        else:
            total += count_tokens(json.dumps([r.model_dump() for r in message.content]))
        total += MESSAGE_OVERHEAD_TOKENS
    return total
