# src/llm/models.py — v2
"""Generation-specific types: Message, Generation."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class Message(BaseModel):
    """Single message in a conversation."""

    role: Literal["user", "assistant", "system"]
    content: str


class Generation(BaseModel):
    """Normalized output of a generation call."""

    text: str
    confidence: float = Field(ge=0.0, le=1.0)
    tokens_used: int = 0
    model: str = ""
    provider: str = ""
    latency_ms: int = 0
    raw_response: Any = None
