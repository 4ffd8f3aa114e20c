# src/llm/adapters/openai_adapter.py — v2
"""OpenAI chat-completions generator implementing BaseGenerator.

Uses the official openai SDK. The API reports no confidence, so every
successful answer carries the tier's configured confidence floor.
"""

from __future__ import annotations

import json
import time
from typing import Any

from firstcontact.llm.base_generator import BaseGenerator
from firstcontact.llm.models import Generation, Message
from firstcontact.llm.retry import RetryConfig, with_retry

_SYSTEM_PROMPTS: dict[str, str] = {
    "navigator": (
        "You are a human-services navigator. Explain, in plain language and "
        "in under 120 words, which services (housing, employment, healthcare, "
        "food, legal aid, ...) fit the resident's question and how to start."
    ),
    "triage": (
        "You assist a caseworker with intake triage. Given the client record, "
        "state a priority (urgent, high, medium, low), key recommendations "
        "and concrete next steps."
    ),
    "careplan": (
        "You draft a 90-day care plan for a caseworker. Given the client "
        "record, list goals, tasks and community resources."
    ),
}
_DEFAULT_PROMPT = "You assist human-services staff. Answer briefly and concretely."


class OpenAIGenerator(BaseGenerator):
    """OpenAI GPT generator."""

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str = "",
        confidence: float = 0.7,
        retry_configs: dict[str, RetryConfig] | None = None,
        **kwargs: Any,
    ):
        self._model = model
        self._api_key = api_key
        self._confidence = confidence
        self._retry_configs = retry_configs

    async def generate(
        self,
        task: str,
        input_data: Any,
        max_tokens: int,
        temperature: float = 0.2,
    ) -> Generation:
        import openai

        client = openai.AsyncOpenAI(api_key=self._api_key)
        messages = [
            Message(role="system", content=_SYSTEM_PROMPTS.get(task, _DEFAULT_PROMPT)),
            Message(role="user", content=_render_input(input_data)),
        ]

        t0 = time.monotonic()
        resp = await with_retry(
            client.chat.completions.create,
            label=f"{self._model}:{task}",
            retry_configs=self._retry_configs,
            model=self._model,
            messages=[m.model_dump() for m in messages],
            max_tokens=max_tokens,
            temperature=temperature,
        )
        latency = int((time.monotonic() - t0) * 1000)

        choice = resp.choices[0]
        text = (choice.message.content or "").strip()
        if not text:
            raise ValueError(f"Empty completion from {self._model} for task {task!r}")

        usage = resp.usage
        return Generation(
            text=text,
            confidence=self._confidence,
            tokens_used=usage.total_tokens if usage else 0,
            model=self._model,
            provider="openai",
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "openai"


def _render_input(input_data: Any) -> str:
    """Free text passes through; client records are sent as JSON."""
    if isinstance(input_data, str):
        return input_data
    if hasattr(input_data, "model_dump"):
        input_data = input_data.model_dump(mode="json")
    return json.dumps(input_data, ensure_ascii=False, default=str, sort_keys=True)
