# src/tiers/model_tier.py — v1
"""Budget-guarded model tiers (cheap and expensive).

Each call is charged its tier's max-token ceiling, the same estimate that
is checked against the budget before the call.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from firstcontact.budget.guard import BudgetGuard
from firstcontact.budget.models import Tier
from firstcontact.llm.base_generator import BaseGenerator
from firstcontact.llm.models import Generation
from firstcontact.tiers.base_tier import BaseTier
from firstcontact.tiers.models import GeneratedAnswer, TierOutcome

logger = logging.getLogger(__name__)


class ModelTier(BaseTier):
    """Wrap a generator with the budget guard for one tier."""

    def __init__(
        self,
        tier: Tier,
        generator: BaseGenerator,
        budget: BudgetGuard,
        max_tokens: int,
        temperature: float = 0.2,
    ) -> None:
        self.name = f"{tier}-model"
        self._tier = tier
        self._generator = generator
        self._budget = budget
        self._max_tokens = max_tokens
        self._temperature = temperature

    @property
    def tier(self) -> Tier:
        return self._tier

    async def resolve(
        self,
        task: str,
        input_data: Any,
        context: Mapping[str, Any] | None = None,
    ) -> TierOutcome:
        async def _call() -> Generation:
            return await self._generator.generate(
                task, input_data, self._max_tokens, self._temperature
            )

        generation: Generation = await self._budget.spend(
            f"{self._tier}-{task}", _call, self._max_tokens, self._tier
        )
        logger.info(
            "%s answered %s (confidence %.2f, %d tokens)",
            self.name, task, generation.confidence, generation.tokens_used,
        )
        return GeneratedAnswer(
            response=generation.text,
            confidence=generation.confidence,
            source=self.name,  # type: ignore[arg-type]
            tokens=generation.tokens_used or self._max_tokens,
        )
