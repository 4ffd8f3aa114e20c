# src/router/router.py — v1
"""Tiered AI-response router with cost-guarding cache.

Resolution order for a request:
  1. Cache lookup by request fingerprint (hit: no tier work, no charge)
  2. Rules tier (no external call)
  3. Cheap model tier, budget-guarded, if still uncertain and AI is active
  4. Expensive model tier, budget-guarded, if still uncertain
  5. Cache the terminal result under the task TTL

route() never raises. Any failure (budget rejection, tier error, timeout)
yields the task fallback, which is not cached.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from firstcontact.budget.guard import BudgetExceeded, BudgetGuard
from firstcontact.cache.base_cache_store import BaseCacheStore
from firstcontact.cache.fingerprint import compute_fingerprint
from firstcontact.config.settings import Settings
from firstcontact.logging.context import clear_context, set_request_context, set_tier_context
from firstcontact.tiers.base_tier import BaseTier, TierFailure
from firstcontact.tiers.fallback import fallback_for
from firstcontact.tiers.models import TierOutcome, Uncertain, should_escalate

logger = logging.getLogger(__name__)


class RouterStats(BaseModel):
    """Admin view: AI availability plus budget and cache figures."""

    enabled: bool
    cache_hit_rate: float
    cache_size: int
    cheap_calls: int
    expensive_calls: int
    daily_tokens: int
    total_tokens: int
    daily_budget_used_percent: float
    estimated_daily_cost: float
    last_reset_date: str


class AIRouter:
    """Route navigator/triage/careplan requests through escalating tiers."""

    def __init__(
        self,
        settings: Settings,
        cache: BaseCacheStore,
        budget: BudgetGuard,
        rules: BaseTier,
        model_tiers: Sequence[BaseTier] = (),
    ) -> None:
        self._settings = settings
        self._cache = cache
        self._budget = budget
        self._rules = rules
        self._model_tiers = tuple(model_tiers)
        self._ttls: dict[str, int] = {
            "navigator": settings.cache_ttl_faq,
            "triage": settings.cache_ttl_triage,
            "careplan": settings.cache_ttl_triage,
            "analytics": settings.cache_ttl_analytics,
        }

    @property
    def enabled(self) -> bool:
        """AI tiers are consulted only when enabled and credentialed."""
        return self._settings.ai_active

    @property
    def cache(self) -> BaseCacheStore:
        return self._cache

    @property
    def budget(self) -> BudgetGuard:
        return self._budget

    def ttl_for_task(self, task: str) -> int:
        """Cache TTL in seconds for a task kind."""
        return self._ttls.get(task, self._settings.cache_ttl_default)

    async def route(
        self,
        task: str,
        input_data: Any,
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        """Resolve a request, escalating through tiers as needed.

        Args:
            task: navigator, triage or careplan (others get a generic answer).
            input_data: Free-text query or client record.
            options: Context passed to tiers and folded into the fingerprint.

        Returns:
            A RouteResult model. Never raises.
        """
        try:
            fingerprint = compute_fingerprint(task, input_data, options)
            set_request_context(task, fingerprint)

            cached = self._cache.get(fingerprint)
            if cached is not None:
                logger.debug("Cache hit for %s", task)
                return cached.model_copy(deep=True)

            result = await self._escalate(task, input_data, options)

            if isinstance(result, Uncertain):
                logger.info("No tier could answer %s; using fallback", task)
                return fallback_for(task)

            self._cache.set(fingerprint, result.model_copy(deep=True), self.ttl_for_task(task))
            return result

        except BudgetExceeded as e:
            logger.warning("Budget guard rejected %s: %s", task, e)
            return fallback_for(task)
        except TierFailure as e:
            logger.warning("%s", e)
            return fallback_for(task)
        except Exception as e:
            logger.error("AI router error for task %s: %s", task, e, exc_info=True)
            return fallback_for(task)
        finally:
            clear_context()

    async def _escalate(
        self,
        task: str,
        input_data: Any,
        options: Mapping[str, Any] | None,
    ) -> TierOutcome:
        threshold = self._settings.ai_escalation_threshold
        result = await self._run_tier(self._rules, task, input_data, options, timeout=None)

        for tier in self._model_tiers:
            if not should_escalate(result, threshold) or not self.enabled:
                break
            logger.info("Escalating %s to %s (confidence %.2f)", task, tier.name, result.confidence)
            result = await self._run_tier(
                tier, task, input_data, options, timeout=self._settings.ai_tier_timeout
            )

        return result

    async def _run_tier(
        self,
        tier: BaseTier,
        task: str,
        input_data: Any,
        options: Mapping[str, Any] | None,
        timeout: float | None,
    ) -> TierOutcome:
        set_tier_context(tier.name)
        try:
            return await asyncio.wait_for(tier.resolve(task, input_data, options), timeout)
        except BudgetExceeded:
            raise
        except Exception as e:
            raise TierFailure(tier.name, task, e) from e

    def get_stats(self) -> RouterStats:
        """Budget and cache snapshot plus the AI enabled flag."""
        return RouterStats(enabled=self.enabled, **self._budget.stats().model_dump())

    def clear_cache(self) -> dict[str, Any]:
        """Drop every cached response (admin action)."""
        cleared = self._cache.clear()
        return {"cleared": True, "removed": cleared, "new_size": self._cache.size()}
