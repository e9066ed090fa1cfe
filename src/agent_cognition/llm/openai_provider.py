# agent_cognition/llm/openai_provider.py
"""OpenAI provider using the official SDK and the Chat Completions API."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from openai import AsyncOpenAI

from agent_cognition.exceptions import UnknownModelError
from agent_cognition.models import (
    CompletionRequest,
    CompletionResponse,
    CostEstimate,
    Model,
    ModelTier,
    TokenUsage,
    ToolCall,
)

from .tokens import estimate_request_tokens

logger = logging.getLogger(__name__)

OPENAI_MODELS: list[Model] = [
    Model(
        id="gpt-4o",
        name="GPT-4o",
        provider="openai",
        tier=ModelTier.STANDARD,
        input_cost_per_1k=0.0025,
        output_cost_per_1k=0.01,
        max_context=128_000,
        strengths={"reasoning", "speed", "multimodal"},
    ),
    Model(
        id="gpt-4o-mini",
        name="GPT-4o mini",
        provider="openai",
        tier=ModelTier.CHEAP,
        input_cost_per_1k=0.00015,
        output_cost_per_1k=0.0006,
        max_context=128_000,
        strengths={"speed", "cheap"},
    ),
    Model(
        id="o1-preview",
        name="o1 Preview",
        provider="openai",
        tier=ModelTier.EXPENSIVE,
        input_cost_per_1k=0.015,
        output_cost_per_1k=0.06,
        max_context=128_000,
        strengths={"complex reasoning"},
    ),
]


class OpenAIProvider:
    """LLMProvider backed by ``AsyncOpenAI``."""

    def __init__(
        self,
        api_key: str | None = None,
        client: AsyncOpenAI | None = None,
        models: list[Model] | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(api_key=api_key or os.getenv("OPENAI_API_KEY"))
        self._models = {m.id: m for m in (models or OPENAI_MODELS)}

    @property
    def id(self) -> str:
        return "openai"

    def list_models(self) -> list[Model]:
        return list(self._models.values())

    def _model(self, model_id: str) -> Model:
        model = self._models.get(model_id)
        if model is None:
            raise UnknownModelError(model_id)
        return model

    @staticmethod
    def _cost(model: Model, input_tokens: int, output_tokens: int) -> float:
        return input_tokens / 1000 * model.input_cost_per_1k + output_tokens / 1000 * model.output_cost_per_1k

    @staticmethod
    def _to_messages(request: CompletionRequest) -> list[dict[str, Any]]:
        messages: list[dict[str, Any]] = [{"role": "system", "content": request.system_prompt}]
        for message in request.messages:
            if isinstance(message.content, str):
                messages.append({"role": message.role.value, "content": message.content})
            else:
                # Tool results are folded into a user turn
                text = "\n".join(f"Tool result ({r.tool_call_id}): {r.result}" for r in message.content)
                messages.append({"role": "user", "content": text})
        return messages

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        model = self._model(request.model)

        tools = [
            {
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": tool.parameters,
                },
            }
            for tool in request.tools
        ]
        kwargs: dict[str, Any] = {
            "model": request.model,
            "messages": self._to_messages(request),
            "max_tokens": request.max_tokens,
        }
        if tools:
            kwargs["tools"] = tools
        if request.temperature is not None:
            kwargs["temperature"] = request.temperature

        response = await self._client.chat.completions.create(**kwargs)

        choice = response.choices[0]
        tool_calls: list[ToolCall] = []
        for tc in choice.message.tool_calls or []:
            if tc.type != "function":
                continue
            try:
                arguments = json.loads(tc.function.arguments or "{}")
            except json.JSONDecodeError:
                logger.warning(f"Unparseable arguments for tool {tc.function.name}")
                arguments = {}
            tool_calls.append(ToolCall(id=tc.id, name=tc.function.name, arguments=arguments))

        usage = TokenUsage(
            input_tokens=response.usage.prompt_tokens if response.usage else 0,
            output_tokens=response.usage.completion_tokens if response.usage else 0,
        )
        return CompletionResponse(
            text=choice.message.content or "",
            tool_calls=tool_calls,
            usage=usage,
            model=request.model,
            cost=self._cost(model, usage.input_tokens, usage.output_tokens),
        )

    def estimate_cost(self, request: CompletionRequest) -> CostEstimate:
        model = self._model(request.model)
        input_tokens = estimate_request_tokens(request.system_prompt, request.messages)
        output_tokens = request.max_tokens
        return CostEstimate(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            estimated_cost=self._cost(model, input_tokens, output_tokens),
            confidence="medium",
        )
