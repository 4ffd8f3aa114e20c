# src/budget/models.py — v1
"""Budget domain models: BudgetLimits, BudgetState, BudgetStats."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Tier = Literal["cheap", "expensive"]


class BudgetLimits(BaseModel):
    """Token ceilings enforced by the budget guard."""

    model_config = ConfigDict(frozen=True)

    max_daily_tokens: int = Field(default=10_000, ge=0)
    max_cheap_tokens: int = Field(default=256, gt=0)
    max_expensive_tokens: int = Field(default=512, gt=0)
    cost_per_token: float = Field(default=0.0001, ge=0.0)

    def ceiling_for(self, tier: Tier) -> int:
        """Per-call token ceiling for a tier."""
        if tier == "expensive":
            return self.max_expensive_tokens
        return self.max_cheap_tokens


class BudgetState(BaseModel):
    """Mutable usage counters owned by a single BudgetGuard."""

    daily_tokens_used: int = 0
    last_reset_date: str
    cheap_call_count: int = 0
    expensive_call_count: int = 0
    total_tokens_ever_used: int = 0


class BudgetStats(BaseModel):
    """Read-only snapshot for the admin cost panel."""

    cache_hit_rate: float
    cache_size: int
    cheap_calls: int
    expensive_calls: int
    daily_tokens: int
    total_tokens: int
    daily_budget_used_percent: float
    estimated_daily_cost: float
    last_reset_date: str
