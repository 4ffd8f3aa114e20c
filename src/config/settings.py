# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for the AI router: tier ceilings, cache TTLs,
escalation thresholds and provider credentials. Field names map onto the
environment variables used by the intake service (AI_ENABLE,
AI_MAX_TOKENS_CHEAP, CACHE_TTL_FAQ, ...).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from firstcontact.logging.handlers import parse_size

_TTL_FIELDS = ("cache_ttl_faq", "cache_ttl_triage", "cache_ttl_analytics", "cache_ttl_default")


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # === AI subsystem ===
    ai_enable: bool = False
    ai_provider: Literal["openai", "simulated"] = "openai"
    ai_model_cheap: str = "gpt-4o-mini"
    ai_model_expensive: str = "gpt-4o"
    ai_temp: float = 0.2
    ai_tier_timeout: float = 30.0

    # Provider credentials
    openai_api_key: str = ""

    # === Budget ===
    ai_max_tokens_cheap: int = 256
    ai_max_tokens_expensive: int = 512
    ai_max_daily_tokens: int = 10_000
    ai_cost_per_token: float = 0.0001

    # === Escalation ===
    ai_escalation_threshold: float = 0.7
    ai_confidence_cheap: float = 0.7
    ai_confidence_expensive: float = 0.95

    # === Cache TTLs (seconds) ===
    cache_ttl_faq: int = 86_400
    cache_ttl_triage: int = 7_200
    cache_ttl_analytics: int = 900
    cache_ttl_default: int = 3_600

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("log_rotation")
    @classmethod
    def validate_rotation(cls, v: str) -> str:  # noqa: N805
        """Rotation size must parse, e.g. "10MB"."""
        parse_size(v)
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        for name in (
            "ai_escalation_threshold",
            "ai_confidence_cheap",
            "ai_confidence_expensive",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                errors.append(f"{name.upper()} must be within [0, 1]")

        if self.ai_max_tokens_cheap <= 0 or self.ai_max_tokens_expensive <= 0:
            errors.append("AI_MAX_TOKENS_CHEAP/EXPENSIVE must be > 0")

        if self.ai_max_daily_tokens < 0:
            errors.append("AI_MAX_DAILY_TOKENS must be >= 0")

        if self.ai_tier_timeout <= 0:
            errors.append("AI_TIER_TIMEOUT must be > 0")

        for name in _TTL_FIELDS:
            if getattr(self, name) <= 0:
                errors.append(f"{name.upper()} must be > 0 seconds")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def provider_configured(self) -> bool:
        """Whether a credential is present for the configured provider."""
        if self.ai_provider == "simulated":
            return True
        return bool(self.openai_api_key)

    @property
    def ai_active(self) -> bool:
        """AI tiers run only when enabled and a provider credential exists."""
        return self.ai_enable and self.provider_configured


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or admin tooling).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
