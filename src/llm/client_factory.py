# src/llm/client_factory.py — v3
"""Factory: instantiate a generator from provider name.

Called by the router composition root to build the cheap and expensive
model tiers from settings.
"""

from __future__ import annotations

import logging
from typing import Literal

from firstcontact.config.settings import Settings
from firstcontact.llm.base_generator import BaseGenerator

logger = logging.getLogger(__name__)

# Registry of provider name → generator class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "openai": "firstcontact.llm.adapters.openai_adapter.OpenAIGenerator",
    "simulated": "firstcontact.llm.adapters.simulated_adapter.SimulatedGenerator",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_generator(
    provider: str,
    model: str,
    settings: Settings | None = None,
    **kwargs: object,
) -> BaseGenerator:
    """Instantiate the correct generator from provider name.

    Args:
        provider: Provider identifier (openai, simulated).
        model: Model name (e.g. gpt-4o-mini).
        settings: Application settings (for API keys).
        **kwargs: Additional generator arguments (confidence, delay_s, ...).

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported generation provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    generator_cls = _import_class(_PROVIDER_REGISTRY[provider])

    init_kwargs = dict(kwargs)
    init_kwargs["model"] = model
    if settings is not None and provider == "openai":
        init_kwargs.setdefault("api_key", settings.openai_api_key)

    logger.debug("Creating generator: provider=%s, model=%s", provider, model)
    return generator_cls(**init_kwargs)


def create_tier_generator(
    tier: Literal["cheap", "expensive"], settings: Settings
) -> BaseGenerator:
    """Build the generator for a model tier from settings."""
    if tier == "expensive":
        model, confidence = settings.ai_model_expensive, settings.ai_confidence_expensive
    else:
        model, confidence = settings.ai_model_cheap, settings.ai_confidence_cheap
    return create_generator(
        settings.ai_provider, model, settings, confidence=confidence, label=f"{tier}-model"
    )


def register_provider(name: str, class_path: str) -> None:
    """Register a custom generator.

    Args:
        name: Provider identifier.
        class_path: Fully qualified class path implementing BaseGenerator.
    """
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered generation provider: %s → %s", name, class_path)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    import importlib

    module = importlib.import_module(module_path)
    return getattr(module, class_name)
