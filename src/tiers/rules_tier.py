# src/tiers/rules_tier.py — v1
"""Deterministic rules tier: FAQ lookup, triage playbooks, care plan templates.

No external call is made, so this tier is never budget-guarded.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from firstcontact.tiers import rule_tables as rt
from firstcontact.tiers.base_tier import BaseTier
from firstcontact.tiers.models import (
    CarePlanDraft,
    ClientRecord,
    NavigatorAnswer,
    TierOutcome,
    TriageAssessment,
    Uncertain,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RulesTier(BaseTier):
    """Lookup-table answers at fixed confidence levels."""

    name = "rules"

    def __init__(self, now: Callable[[], datetime] = _utcnow) -> None:
        self._now = now

    async def resolve(
        self,
        task: str,
        input_data: Any,
        context: Mapping[str, Any] | None = None,
    ) -> TierOutcome:
        if task == "navigator":
            return self.navigator(input_data)
        if task == "triage":
            return self.triage(_as_client(input_data))
        if task == "careplan":
            return self.careplan(_as_client(input_data))
        logger.debug("No rules for task %r", task)
        return Uncertain(confidence=0.3)

    def navigator(self, query: Any) -> NavigatorAnswer | Uncertain:
        """Match the query against FAQ categories, then greetings."""
        text = str(query or "").lower()

        for category, response in rt.FAQ_RULES.items():
            if category in text or category.replace("-", " ") in text:
                return NavigatorAnswer(
                    response=response, confidence=0.9, source="rules", category=category
                )

        if any(word in text for word in rt.GREETING_WORDS):
            return NavigatorAnswer(
                response=rt.GREETING_RESPONSE,
                confidence=0.8,
                source="rules",
                category="general",
            )

        return Uncertain(confidence=0.4, response=rt.CLARIFYING_PROMPT)

    def triage(self, client: ClientRecord) -> TriageAssessment:
        """Urgent playbooks first, then one recommendation per known need."""
        needs = client.needs

        if client.urgency in rt.URGENT_LEVELS:
            if "housing" in needs:
                return _urgent(rt.URGENT_HOUSING)
            if rt.CRISIS_NEEDS.intersection(needs):
                return _urgent(rt.URGENT_SAFETY)

        recommendations: list[str] = []
        next_steps: list[str] = []
        for need in needs:
            pair = rt.STANDARD_NEEDS.get(need)
            if pair is not None:
                recommendations.append(pair[0])
                next_steps.append(pair[1])

        return TriageAssessment(
            priority=client.urgency,
            recommendations=recommendations,
            next_steps=next_steps,
            confidence=0.8,
            source="rules",
        )

    def careplan(self, client: ClientRecord) -> CarePlanDraft:
        """Pick a template from the first listed need."""
        primary = client.needs[0] if client.needs else "general"

        key = "housing-focused"
        if "employment" in primary:
            key = "employment-focused"
        elif "medical" in primary or "mental-health" in primary:
            key = "health-focused"
        template = rt.CAREPLAN_TEMPLATES[key]

        return CarePlanDraft(
            goals=list(template.goals),
            tasks=list(template.tasks),
            resources=list(template.resources),
            timeline=rt.CAREPLAN_TIMELINE,
            review_date=self._now() + timedelta(days=rt.CAREPLAN_REVIEW_DAYS),
            customizable=True,
            confidence=0.8,
            source="rules",
        )


def _urgent(playbook: rt.TriagePlaybook) -> TriageAssessment:
    return TriageAssessment(
        priority="urgent",
        recommendations=list(playbook.recommendations),
        next_steps=list(playbook.next_steps),
        confidence=0.95,
        source="rules",
    )


def _as_client(input_data: Any) -> ClientRecord:
    if isinstance(input_data, ClientRecord):
        return input_data
    return ClientRecord.model_validate(input_data)
