# tests/conftest.py — v2
"""Shared test fixtures for unit and integration tests.

Provides scripted generators, a controllable clock and calendar, settings
builders and fully wired routers. No network access: every model tier runs
against an in-process generator.
"""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest

from firstcontact.cache.memory_store import MemoryCacheStore
from firstcontact.config.settings import Settings
from firstcontact.llm.base_generator import BaseGenerator
from firstcontact.llm.models import Generation
from firstcontact.router.factory import create_router
from firstcontact.router.router import AIRouter


class ScriptedGenerator(BaseGenerator):
    """Generator returning a fixed confidence, optionally failing."""

    def __init__(
        self,
        label: str,
        confidence: float,
        error: Exception | None = None,
    ) -> None:
        self.label = label
        self.confidence = confidence
        self.error = error
        self.calls: list[tuple[str, Any, int, float]] = []

    async def generate(
        self,
        task: str,
        input_data: Any,
        max_tokens: int,
        temperature: float = 0.2,
    ) -> Generation:
        self.calls.append((task, input_data, max_tokens, temperature))
        if self.error is not None:
            raise self.error
        return Generation(
            text=f"{self.label} answer for {task}",
            confidence=self.confidence,
            tokens_used=max_tokens,
            model=self.label,
            provider="scripted",
        )

    @property
    def provider_name(self) -> str:
        return "scripted"


class FakeClock:
    """Manually advanced wall clock (seconds)."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCalendar:
    """Manually advanced local date."""

    def __init__(self, start: date = date(2026, 3, 1)) -> None:
        self.today = start

    def __call__(self) -> date:
        return self.today


def make_settings(**overrides: Any) -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, **overrides)


# === FIXTURES ===


@pytest.fixture
def ai_settings() -> Settings:
    """AI enabled with a credential present."""
    return make_settings(ai_enable=True, openai_api_key="sk-test")


@pytest.fixture
def cheap_generator() -> ScriptedGenerator:
    return ScriptedGenerator("cheap", confidence=0.7)


@pytest.fixture
def expensive_generator() -> ScriptedGenerator:
    return ScriptedGenerator("expensive", confidence=0.95)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def calendar() -> FakeCalendar:
    return FakeCalendar()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCacheStore:
    return MemoryCacheStore(default_ttl=3600, clock=clock)


@pytest.fixture
def router(
    ai_settings: Settings,
    cheap_generator: ScriptedGenerator,
    expensive_generator: ScriptedGenerator,
    cache: MemoryCacheStore,
    calendar: FakeCalendar,
) -> AIRouter:
    """Router with AI active and scripted model tiers."""
    return create_router(
        ai_settings,
        cheap=cheap_generator,
        expensive=expensive_generator,
        cache=cache,
        today=calendar,
    )


@pytest.fixture
def housing_client() -> dict[str, Any]:
    return {
        "id": "client_001",
        "name": "Resident A",
        "needs": ["housing"],
        "urgency": "critical",
        "householdSize": 3,
    }


@pytest.fixture
def make_generator() -> type[ScriptedGenerator]:
    """Factory for extra scripted generators."""
    return ScriptedGenerator


@pytest.fixture
def settings_factory():
    """Factory for .env-independent settings."""
    return make_settings
