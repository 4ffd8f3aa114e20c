# src/llm/adapters/simulated_adapter.py — v1
"""Offline stand-in generator for demos and local development.

Sleeps for a fixed delay and answers with canned text, so the tier and
budget machinery can be exercised without provider credentials.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

from firstcontact.llm.base_generator import BaseGenerator
from firstcontact.llm.models import Generation


class SimulatedGenerator(BaseGenerator):
    """Canned-response generator."""

    def __init__(
        self,
        model: str = "simulated",
        confidence: float = 0.7,
        delay_s: float = 0.0,
        label: str = "model",
        **kwargs: Any,
    ):
        self._model = model
        self._confidence = confidence
        self._delay_s = delay_s
        self._label = label

    async def generate(
        self,
        task: str,
        input_data: Any,
        max_tokens: int,
        temperature: float = 0.2,
    ) -> Generation:
        t0 = time.monotonic()
        if self._delay_s > 0:
            await asyncio.sleep(self._delay_s)
        return Generation(
            text=f"Response for {task} ({self._label})",
            confidence=self._confidence,
            tokens_used=max_tokens,
            model=self._model,
            provider="simulated",
            latency_ms=int((time.monotonic() - t0) * 1000),
        )

    @property
    def provider_name(self) -> str:
        return "simulated"
