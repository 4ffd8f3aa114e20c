# src/tiers/rule_tables.py — v1
"""Static lookup tables for the rules tier: FAQ answers, triage playbooks,
care plan templates."""

from __future__ import annotations

from dataclasses import dataclass

FAQ_RULES: dict[str, str] = {
    "housing": (
        "For housing assistance, you may qualify for rapid rehousing, emergency "
        "shelter, or rental assistance. Eligibility typically requires proof of "
        "homelessness or housing instability."
    ),
    "employment": (
        "Employment services include job training, resume help, and placement "
        "assistance. Most programs are free and available regardless of work history."
    ),
    "mental-health": (
        "Mental health services include counseling, crisis support, and medication "
        "assistance. Many services are available on a sliding scale."
    ),
    "veterans": (
        "Veterans have access to specialized housing, healthcare, and employment "
        "programs through VA and community partners."
    ),
    "substance-abuse": (
        "Substance abuse support includes outpatient counseling, residential "
        "treatment, and harm reduction services."
    ),
    "medical": (
        "Medical services include free clinics, insurance enrollment, and specialty "
        "care referrals."
    ),
    "food": (
        "Food assistance includes food banks, CalFresh (SNAP), and meal programs at "
        "community centers."
    ),
    "legal": (
        "Legal aid includes help with housing court, benefits appeals, and family "
        "law matters."
    ),
    "utilities": (
        "Utility assistance programs can help with past-due bills and ongoing "
        "payment support."
    ),
    "transportation": (
        "Transportation help includes bus passes, rides to appointments, and "
        "vehicle repair assistance."
    ),
}

GREETING_WORDS: tuple[str, ...] = ("help", "hello", "start")

GREETING_RESPONSE = (
    "I can help you understand what services are available. What kind of help "
    "do you need? I can assist with housing, employment, healthcare, food, or "
    "other services."
)

CLARIFYING_PROMPT = (
    "I'd like to help you find the right resources. Could you tell me more "
    "specifically what kind of assistance you're looking for?"
)

URGENT_LEVELS: frozenset[str] = frozenset({"high", "critical"})
CRISIS_NEEDS: frozenset[str] = frozenset({"mental-health", "substance-abuse"})


@dataclass(frozen=True)
class TriagePlaybook:
    """Fixed recommendation set for an urgent triage branch."""

    recommendations: tuple[str, ...]
    next_steps: tuple[str, ...]


URGENT_HOUSING = TriagePlaybook(
    recommendations=(
        "Emergency shelter placement needed within 24 hours",
        "Rapid rehousing assessment required",
        "Connect with housing navigator immediately",
    ),
    next_steps=(
        "Schedule emergency housing meeting",
        "Gather housing documents",
        "Contact emergency shelter",
    ),
)

URGENT_SAFETY = TriagePlaybook(
    recommendations=(
        "Crisis assessment required",
        "Mental health evaluation needed",
        "Safety planning essential",
    ),
    next_steps=(
        "Schedule crisis assessment",
        "Provide crisis hotline numbers",
        "Create safety plan",
    ),
)

# need -> (recommendation, next step)
STANDARD_NEEDS: dict[str, tuple[str, str]] = {
    "housing": ("Housing assessment and application", "Complete housing intake form"),
    "employment": ("Job readiness assessment", "Schedule employment counseling"),
    "medical": ("Healthcare enrollment assistance", "Schedule medical intake appointment"),
}


@dataclass(frozen=True)
class CarePlanTemplate:
    """Goals, tasks and resources for one care plan focus."""

    goals: tuple[str, ...]
    tasks: tuple[str, ...]
    resources: tuple[str, ...]


CAREPLAN_TEMPLATES: dict[str, CarePlanTemplate] = {
    "housing-focused": CarePlanTemplate(
        goals=("Secure stable housing within 90 days", "Maintain housing stability"),
        tasks=(
            "Complete housing application",
            "Gather required documents",
            "Attend housing appointments",
        ),
        resources=(
            "Rapid Rehousing Program",
            "Housing Authority waitlist",
            "Emergency rental assistance",
        ),
    ),
    "employment-focused": CarePlanTemplate(
        goals=("Obtain sustainable employment", "Increase job skills"),
        tasks=("Update resume", "Apply for job training", "Attend job interviews"),
        resources=(
            "WorkForce Development",
            "One-Stop Career Center",
            "Skills training programs",
        ),
    ),
    "health-focused": CarePlanTemplate(
        goals=("Establish primary care", "Manage chronic conditions"),
        tasks=(
            "Schedule medical appointment",
            "Apply for health insurance",
            "Follow medication schedule",
        ),
        resources=(
            "Community Health Center",
            "Medi-Cal enrollment",
            "Pharmacy assistance",
        ),
    ),
}

CAREPLAN_TIMELINE = "90 days"
CAREPLAN_REVIEW_DAYS = 30
