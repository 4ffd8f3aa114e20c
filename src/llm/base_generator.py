# src/llm/base_generator.py — v1
"""Abstract generation capability used by the model tiers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from firstcontact.llm.models import Generation


class BaseGenerator(ABC):
    """Single-method interface so a real provider can replace a stand-in
    without touching router logic."""

    @abstractmethod
    async def generate(
        self,
        task: str,
        input_data: Any,
        max_tokens: int,
        temperature: float = 0.2,
    ) -> Generation:
        """Produce a response for a task."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (openai, simulated)."""
