# src/budget/guard.py — v2
"""Daily token budget guard for the model tiers.

The daily counter resets lazily: every budget-relevant call first compares
today's local calendar date string with the last reset date. This follows
the process-local clock, not UTC.

Usage charges happen only after the guarded operation returns. A failed
operation is never charged. While a call is in flight its estimate is held
as a reservation, so concurrent requests cannot overshoot the daily ceiling.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Awaitable, Callable

from firstcontact.budget.models import BudgetLimits, BudgetState, BudgetStats, Tier
from firstcontact.cache.base_cache_store import BaseCacheStore

logger = logging.getLogger(__name__)


class BudgetExceeded(Exception):
    """A tier call would exceed its per-call or daily token ceiling."""

    def __init__(
        self,
        label: str,
        ceiling: int,
        used: int,
        requested: int,
        scope: str = "daily",
    ):
        self.label = label
        self.ceiling = ceiling
        self.used = used
        self.requested = requested
        self.scope = scope
        super().__init__(
            f"Budget exceeded for {label}. {scope.capitalize()} limit: {ceiling}, "
            f"used: {used}, requested: {requested}"
        )


class BudgetGuard:
    """Enforce per-tier and per-day token ceilings and count tier calls."""

    def __init__(
        self,
        limits: BudgetLimits | None = None,
        cache: BaseCacheStore | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._limits = limits or BudgetLimits()
        self._cache = cache
        self._today = today
        self._state = BudgetState(last_reset_date=self._today().isoformat())
        self._reserved = 0

    @property
    def limits(self) -> BudgetLimits:
        return self._limits

    @property
    def reserved_tokens(self) -> int:
        """Tokens held by calls still in flight."""
        return self._reserved

    @property
    def state(self) -> BudgetState:
        """Copy of the current counters."""
        self._reset_daily_if_needed()
        return self._state.model_copy()

    def can_spend(self, token_estimate: int, tier: Tier = "cheap") -> bool:
        """Whether a call of token_estimate tokens fits both ceilings."""
        self._reset_daily_if_needed()
        if token_estimate > self._limits.ceiling_for(tier):
            return False
        return (
            self._state.daily_tokens_used + self._reserved + token_estimate
            <= self._limits.max_daily_tokens
        )

    async def spend(
        self,
        label: str,
        operation: Callable[[], Awaitable[Any]],
        token_estimate: int,
        tier: Tier = "cheap",
    ) -> Any:
        """Run operation under the budget and charge it on success.

        Raises:
            BudgetExceeded: If the call does not fit; operation is not invoked.
            Exception: Whatever operation raises, uncharged.
        """
        if not self.can_spend(token_estimate, tier):
            tier_ceiling = self._limits.ceiling_for(tier)
            if token_estimate > tier_ceiling:
                raise BudgetExceeded(
                    label,
                    ceiling=tier_ceiling,
                    used=0,
                    requested=token_estimate,
                    scope=tier,
                )
            raise BudgetExceeded(
                label,
                ceiling=self._limits.max_daily_tokens,
                used=self._state.daily_tokens_used + self._reserved,
                requested=token_estimate,
            )

        self._reserved += token_estimate
        try:
            result = await operation()
        except Exception as e:
            logger.error("Cost-guarded call failed for %s: %s", label, e)
            raise
        finally:
            self._reserved -= token_estimate

        # No await between here and return: the update is atomic for asyncio.
        self._reset_daily_if_needed()
        self._state.daily_tokens_used += token_estimate
        self._state.total_tokens_ever_used += token_estimate
        if tier == "expensive":
            self._state.expensive_call_count += 1
        else:
            self._state.cheap_call_count += 1

        logger.debug(
            "Charged %d tokens to %s (daily %d/%d)",
            token_estimate, label,
            self._state.daily_tokens_used, self._limits.max_daily_tokens,
        )
        return result

    def stats(self) -> BudgetStats:
        """Snapshot of usage, budget share and cache effectiveness."""
        self._reset_daily_if_needed()
        cache_stats = self._cache.stats() if self._cache is not None else None
        daily = self._state.daily_tokens_used
        ceiling = self._limits.max_daily_tokens
        used_pct = round(daily / ceiling * 100, 1) if ceiling else 0.0

        return BudgetStats(
            cache_hit_rate=cache_stats.hit_rate if cache_stats else 0.0,
            cache_size=cache_stats.size if cache_stats else 0,
            cheap_calls=self._state.cheap_call_count,
            expensive_calls=self._state.expensive_call_count,
            daily_tokens=daily,
            total_tokens=self._state.total_tokens_ever_used,
            daily_budget_used_percent=used_pct,
            estimated_daily_cost=round(daily * self._limits.cost_per_token, 4),
            last_reset_date=self._state.last_reset_date,
        )

    def set_limits(self, **limits: Any) -> BudgetLimits:
        """Replace ceilings at runtime (admin emergency limits).

        Raises:
            ValueError: On unknown limit names or invalid values.
        """
        unknown = set(limits) - set(BudgetLimits.model_fields)
        if unknown:
            raise ValueError(f"Unknown budget limits: {', '.join(sorted(unknown))}")
        self._limits = BudgetLimits(**{**self._limits.model_dump(), **limits})
        logger.warning("Budget limits updated: %s", self._limits.model_dump())
        return self._limits

    def _reset_daily_if_needed(self) -> None:
        today = self._today().isoformat()
        if self._state.last_reset_date != today:
            logger.info(
                "New day %s: resetting daily tokens (was %d)",
                today, self._state.daily_tokens_used,
            )
            self._state.daily_tokens_used = 0
            self._state.last_reset_date = today
