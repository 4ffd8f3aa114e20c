# src/tiers/models.py — v2
"""Routed result types.

RouteResult is a tagged union over task kind. Uncertain is an internal
escalation marker and is never handed back to a caller of the router.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Source = Literal["rules", "cheap-model", "expensive-model", "fallback"]


class NavigatorAnswer(BaseModel):
    """Resident-facing explanation of available services."""

    kind: Literal["navigator"] = "navigator"
    response: str
    confidence: float
    source: Source
    category: str | None = None


class TriageAssessment(BaseModel):
    """Caseworker-facing priority and recommendations for a client."""

    kind: Literal["triage"] = "triage"
    priority: str
    recommendations: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)
    confidence: float
    source: Source


class CarePlanDraft(BaseModel):
    """Editable care plan draft."""

    kind: Literal["careplan"] = "careplan"
    goals: list[str] = Field(default_factory=list)
    tasks: list[str] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)
    timeline: str | None = None
    review_date: datetime | None = None
    customizable: bool = False
    confidence: float
    source: Source


class GeneratedAnswer(BaseModel):
    """Free-text answer produced by a model tier."""

    kind: Literal["generated"] = "generated"
    response: str
    confidence: float
    source: Source
    tokens: int = 0


class Uncertain(BaseModel):
    """Escalation marker: the tier could not answer confidently."""

    kind: Literal["uncertain"] = "uncertain"
    confidence: float = 0.3
    response: str | None = None


RouteResult = Annotated[
    Union[NavigatorAnswer, TriageAssessment, CarePlanDraft, GeneratedAnswer],
    Field(discriminator="kind"),
]
TierOutcome = Union[NavigatorAnswer, TriageAssessment, CarePlanDraft, GeneratedAnswer, Uncertain]


class ClientRecord(BaseModel):
    """The slice of an intake record that triage and care planning read.

    Extra repository fields are carried along untouched.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    needs: list[str] = Field(default_factory=list)
    urgency: str = "medium"
    household_size: int = Field(default=1, alias="householdSize")

    @field_validator("needs", mode="before")
    @classmethod
    def coerce_needs(cls, v: object) -> object:  # noqa: N805
        """A single need submitted as a bare string becomes a list."""
        if isinstance(v, str):
            return [v] if v else []
        if v is None:
            return []
        return v

    @field_validator("urgency", mode="before")
    @classmethod
    def default_urgency(cls, v: object) -> object:  # noqa: N805
        """Missing or blank urgency counts as medium."""
        if v is None or v == "":
            return "medium"
        return v


def should_escalate(result: TierOutcome | None, threshold: float = 0.7) -> bool:
    """A result escalates when missing, marked uncertain, or under threshold."""
    if result is None or isinstance(result, Uncertain):
        return True
    return result.confidence < threshold
