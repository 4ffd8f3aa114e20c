# src/tiers/fallback.py — v1
"""Fixed degraded answers returned when routing fails."""

from __future__ import annotations

from firstcontact.tiers.models import (
    CarePlanDraft,
    GeneratedAnswer,
    NavigatorAnswer,
    TriageAssessment,
)

NAVIGATOR_FALLBACK = (
    "I'm here to help connect you with services. Please let a caseworker know "
    "what specific assistance you need."
)
UNAVAILABLE_FALLBACK = "Service temporarily unavailable. Please contact your caseworker."


def fallback_for(task: str) -> NavigatorAnswer | TriageAssessment | CarePlanDraft | GeneratedAnswer:
    """Build the fallback result for a task. A fresh object every call."""
    if task == "navigator":
        return NavigatorAnswer(response=NAVIGATOR_FALLBACK, confidence=0.5, source="fallback")
    if task == "triage":
        return TriageAssessment(
            priority="medium",
            recommendations=["General assessment needed", "Schedule intake appointment"],
            next_steps=["Contact caseworker", "Gather documentation"],
            confidence=0.5,
            source="fallback",
        )
    if task == "careplan":
        return CarePlanDraft(
            goals=["Stabilize current situation", "Connect with appropriate services"],
            tasks=["Meet with caseworker", "Complete assessments"],
            resources=["Case management services", "Community resources"],
            confidence=0.5,
            source="fallback",
        )
    return GeneratedAnswer(response=UNAVAILABLE_FALLBACK, confidence=0.3, source="fallback")
