# src/router/factory.py — v1
"""Composition root: build an AIRouter and its collaborators from settings.

Every call returns independent instances (cache, budget, tiers), so the web
layer owns one router per process and tests can build as many as they need.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from firstcontact.budget.guard import BudgetGuard
from firstcontact.budget.models import BudgetLimits
from firstcontact.cache.base_cache_store import BaseCacheStore
from firstcontact.cache.memory_store import MemoryCacheStore
from firstcontact.config.settings import Settings
from firstcontact.llm.base_generator import BaseGenerator
from firstcontact.llm.client_factory import create_tier_generator
from firstcontact.router.router import AIRouter
from firstcontact.tiers.model_tier import ModelTier
from firstcontact.tiers.rules_tier import RulesTier

logger = logging.getLogger(__name__)


def create_router(
    settings: Settings | None = None,
    cheap: BaseGenerator | None = None,
    expensive: BaseGenerator | None = None,
    cache: BaseCacheStore | None = None,
    budget: BudgetGuard | None = None,
    today: Callable[[], date] = date.today,
) -> AIRouter:
    """Assemble a router.

    Args:
        settings: Application settings. Loaded from .env if None.
        cheap: Generator for the cheap tier. Built from settings if None.
        expensive: Generator for the expensive tier. Built from settings if None.
        cache: Response cache. In-memory store if None.
        budget: Budget guard. Built from settings if None.
        today: Local-date source for the daily budget reset.

    Returns:
        Configured AIRouter.
    """
    settings = settings or Settings()
    if cache is None:
        cache = MemoryCacheStore(default_ttl=settings.cache_ttl_default)
    if budget is None:
        budget = BudgetGuard(
            limits=BudgetLimits(
                max_daily_tokens=settings.ai_max_daily_tokens,
                max_cheap_tokens=settings.ai_max_tokens_cheap,
                max_expensive_tokens=settings.ai_max_tokens_expensive,
                cost_per_token=settings.ai_cost_per_token,
            ),
            cache=cache,
            today=today,
        )

    model_tiers: list[ModelTier] = []
    if settings.ai_active or cheap is not None or expensive is not None:
        cheap = cheap or create_tier_generator("cheap", settings)
        expensive = expensive or create_tier_generator("expensive", settings)
        model_tiers = [
            ModelTier("cheap", cheap, budget, settings.ai_max_tokens_cheap, settings.ai_temp),
            ModelTier(
                "expensive", expensive, budget, settings.ai_max_tokens_expensive, settings.ai_temp
            ),
        ]

    logger.info(
        "AI router ready: ai_enable=%s, provider=%s, credential=%s, tiers=%d",
        settings.ai_enable, settings.ai_provider,
        settings.provider_configured, 1 + len(model_tiers),
    )
    return AIRouter(
        settings=settings,
        cache=cache,
        budget=budget,
        rules=RulesTier(),
        model_tiers=model_tiers,
    )
