# src/tiers/base_tier.py — v1
"""Abstract tier resolver interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from firstcontact.tiers.models import TierOutcome


class TierFailure(Exception):
    """A tier could not produce a result (provider error, timeout, bad output)."""

    def __init__(self, tier: str, task: str, cause: BaseException):
        self.tier = tier
        self.task = task
        self.cause = cause
        super().__init__(f"Tier '{tier}' failed for task '{task}': {cause!r}")


class BaseTier(ABC):
    """One escalation step of the router."""

    name: str = "tier"

    @abstractmethod
    async def resolve(
        self,
        task: str,
        input_data: Any,
        context: Mapping[str, Any] | None = None,
    ) -> TierOutcome:
        """Answer a task, or return Uncertain to ask for escalation."""
