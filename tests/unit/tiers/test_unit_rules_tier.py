# tests/unit/tiers/test_unit_rules_tier.py — v2
"""Tests for tiers/rules_tier.py — FAQ, triage and care plan rules."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from firstcontact.tiers import rule_tables as rt
from firstcontact.tiers.models import (
    CarePlanDraft,
    ClientRecord,
    NavigatorAnswer,
    TriageAssessment,
    Uncertain,
)
from firstcontact.tiers.rules_tier import RulesTier

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def rules() -> RulesTier:
    return RulesTier(now=lambda: FIXED_NOW)


class TestNavigatorRules:
    def test_housing_match(self, rules):
        result = rules.navigator("I need help with housing")
        assert isinstance(result, NavigatorAnswer)
        assert result.category == "housing"
        assert result.confidence == 0.9
        assert result.source == "rules"
        assert result.response == rt.FAQ_RULES["housing"]

    def test_case_insensitive(self, rules):
        assert rules.navigator("FOOD BANK hours?").category == "food"

    def test_hyphen_as_space(self, rules):
        result = rules.navigator("Where can I get mental health support")
        assert result.category == "mental-health"

    def test_category_before_greeting(self, rules):
        # "help" is a greeting word but a category match wins
        assert rules.navigator("help with legal issues").category == "legal"

    @pytest.mark.parametrize("query", ["hello", "Help me", "where do I start"])
    def test_greeting(self, rules, query):
        result = rules.navigator(query)
        assert isinstance(result, NavigatorAnswer)
        assert result.category == "general"
        assert result.confidence == 0.8
        assert result.response == rt.GREETING_RESPONSE

    def test_uncertain(self, rules):
        result = rules.navigator("my landlord changed the locks")
        assert isinstance(result, Uncertain)
        assert result.confidence == 0.4
        assert result.response == rt.CLARIFYING_PROMPT

    def test_empty_query(self, rules):
        assert isinstance(rules.navigator(None), Uncertain)


class TestTriageRules:
    def test_critical_housing(self, rules):
        result = rules.triage(ClientRecord(needs=["housing"], urgency="critical"))
        assert isinstance(result, TriageAssessment)
        assert result.priority == "urgent"
        assert result.recommendations == list(rt.URGENT_HOUSING.recommendations)
        assert len(result.recommendations) == 3
        assert result.next_steps == list(rt.URGENT_HOUSING.next_steps)
        assert result.confidence == 0.95

    def test_high_mental_health(self, rules):
        result = rules.triage(ClientRecord(needs=["food", "mental-health"], urgency="high"))
        assert result.priority == "urgent"
        assert result.recommendations == list(rt.URGENT_SAFETY.recommendations)
        assert result.confidence == 0.95

    def test_housing_wins_over_crisis(self, rules):
        result = rules.triage(
            ClientRecord(needs=["substance-abuse", "housing"], urgency="critical")
        )
        assert result.recommendations == list(rt.URGENT_HOUSING.recommendations)

    def test_medium_urgency_standard_needs(self, rules):
        result = rules.triage(
            ClientRecord(needs=["employment", "food", "medical"], urgency="medium")
        )
        assert result.priority == "medium"
        assert result.recommendations == [
            "Job readiness assessment",
            "Healthcare enrollment assistance",
        ]
        assert result.next_steps == [
            "Schedule employment counseling",
            "Schedule medical intake appointment",
        ]
        assert result.confidence == 0.8

    def test_low_urgency_housing_not_urgent(self, rules):
        result = rules.triage(ClientRecord(needs=["housing"], urgency="low"))
        assert result.priority == "low"
        assert result.recommendations == ["Housing assessment and application"]

    def test_urgency_verbatim(self, rules):
        result = rules.triage(ClientRecord(needs=[], urgency="elevated"))
        assert result.priority == "elevated"
        assert result.recommendations == []

    def test_defaults(self, rules):
        result = rules.triage(ClientRecord())
        assert result.priority == "medium"


class TestCarePlanRules:
    def test_default_housing_template(self, rules):
        result = rules.careplan(ClientRecord(needs=[]))
        assert isinstance(result, CarePlanDraft)
        assert result.goals == list(rt.CAREPLAN_TEMPLATES["housing-focused"].goals)

    def test_employment_template(self, rules):
        result = rules.careplan(ClientRecord(needs=["employment"]))
        template = rt.CAREPLAN_TEMPLATES["employment-focused"]
        assert result.goals == list(template.goals)
        assert result.tasks == list(template.tasks)
        assert result.resources == list(template.resources)
        assert result.timeline == "90 days"
        assert result.confidence == 0.8
        assert result.customizable is True

    @pytest.mark.parametrize("need", ["medical", "mental-health"])
    def test_health_template(self, rules, need):
        result = rules.careplan(ClientRecord(needs=[need, "housing"]))
        assert result.resources == list(rt.CAREPLAN_TEMPLATES["health-focused"].resources)

    def test_only_first_need_counts(self, rules):
        result = rules.careplan(ClientRecord(needs=["food", "employment"]))
        assert result.goals == list(rt.CAREPLAN_TEMPLATES["housing-focused"].goals)

    def test_review_date(self, rules):
        result = rules.careplan(ClientRecord(needs=["housing"]))
        assert result.review_date == FIXED_NOW + timedelta(days=30)

    def test_returns_copies(self, rules):
        result = rules.careplan(ClientRecord(needs=["housing"]))
        result.goals.append("extra")
        again = rules.careplan(ClientRecord(needs=["housing"]))
        assert "extra" not in again.goals


class TestResolve:
    @pytest.mark.asyncio
    async def test_dispatch_dict_client(self, rules, housing_client):
        result = await rules.resolve("triage", housing_client)
        assert result.priority == "urgent"

    @pytest.mark.asyncio
    async def test_unknown_task(self, rules):
        result = await rules.resolve("analytics", "anything")
        assert isinstance(result, Uncertain)
        assert result.confidence == 0.3

    @pytest.mark.asyncio
    async def test_single_need_string(self, rules):
        result = await rules.resolve("careplan", {"needs": "employment"})
        assert result.goals == list(rt.CAREPLAN_TEMPLATES["employment-focused"].goals)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("urgency", [None, ""])
    async def test_missing_urgency_is_medium(self, rules, urgency):
        result = await rules.resolve("triage", {"needs": ["housing"], "urgency": urgency})
        assert result.source == "rules"
        assert result.priority == "medium"
        assert result.recommendations == ["Housing assessment and application"]
