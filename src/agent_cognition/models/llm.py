# agent_cognition/models/llm.py
"""LLM provider request/response and model catalog types."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class ModelTier(str, Enum):
    """Coarse cost/quality classification of a backend."""

    FREE = "free"
    CHEAP = "cheap"
    STANDARD = "standard"
    EXPENSIVE = "expensive"


class TaskComplexity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class Model(BaseModel):
    """A callable LLM backend and its pricing."""

    id: str
    name: str = ""
    provider: str
    tier: ModelTier
    input_cost_per_1k: float = Field(ge=0)
    output_cost_per_1k: float = Field(ge=0)
    max_context: int = Field(gt=0)
    strengths: set[str] = Field(default_factory=set)

    def has_strength(self, *tags: str) -> bool:
        return any(tag in self.strengths for tag in tags)


class ToolDefinition(BaseModel):
    """A tool the model may call, described with a JSON schema."""

    name: str
    description: str
    parameters: dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})


class ToolCall(BaseModel):
    id: str
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolResult(BaseModel):
    tool_call_id: str
    result: str


class Message(BaseModel):
    """Conversation message. Tool results are carried as a list of ToolResult."""

    role: MessageRole
    content: str | list[ToolResult]


class TokenUsage(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def add(self, other: TokenUsage) -> None:
        self.input_tokens += other.input_tokens
        self.output_tokens += other.output_tokens


class CompletionRequest(BaseModel):
    model: str
    system_prompt: str
    messages: list[Message] = Field(default_factory=list)
    tools: list[ToolDefinition] = Field(default_factory=list)
    max_tokens: int = 1024
    temperature: float | None = None


class CompletionResponse(BaseModel):
    text: str = ""
    tool_calls: list[ToolCall] = Field(default_factory=list)
    usage: TokenUsage = Field(default_factory=TokenUsage)
    model: str = ""
    cost: float = 0.0


class CostEstimate(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0
    estimated_cost: float = 0.0
    confidence: Literal["low", "medium", "high"] = "low"
