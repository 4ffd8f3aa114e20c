# src/logging/context.py — v2
"""Contextual logging support — attach task, fingerprint and tier to records.

Each routed request runs in its own asyncio task, so context variables set
inside route() never leak into concurrent requests.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_task: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "task", default=None
)
_fingerprint: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "fingerprint", default=None
)
_tier: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "tier", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    task: str | None = None
    fingerprint: str | None = None
    tier: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        task=_task.get(),
        fingerprint=_fingerprint.get(),
        tier=_tier.get(),
    )


def set_request_context(task: str, fingerprint: str) -> None:
    """Set request-level context (once per routed request)."""
    _task.set(task)
    _fingerprint.set(fingerprint[:12])
    _tier.set(None)


def set_tier_context(tier: str | None) -> None:
    """Set the tier currently resolving the request."""
    _tier.set(tier)


def clear_context() -> None:
    """Reset all context variables."""
    _task.set(None)
    _fingerprint.set(None)
    _tier.set(None)
