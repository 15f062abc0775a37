"""Provider factory and registry for the supported LLM backends."""

from __future__ import annotations

import logging

from ...config import AppConfig, get_api_key
from ...core.types import Provider
from .base import FeatureProvider
from .gemini import GeminiProvider
from .openai_compatible import OpenAICompatibleProvider


ProviderBuilder = type[FeatureProvider]

_PROVIDER_REGISTRY: dict[Provider, ProviderBuilder] = {
    Provider.GEMINI: GeminiProvider,
    Provider.OPENAI: OpenAICompatibleProvider,
}


def available_providers() -> list[str]:
    """Return the set of registered provider names."""
    return sorted(p.value for p in _PROVIDER_REGISTRY)


def create_provider(
    provider: Provider | str,
    cfg: AppConfig,
    llm_logger: logging.Logger | None = None,
) -> FeatureProvider:
    """Build a provider instance from runtime config.

    Unlike ``FeatureGuideService`` this is strict: unknown names raise.
    """
    try:
        key = Provider(provider)
    except ValueError:
        supported = ", ".join(available_providers())
        raise ValueError(f"Unsupported provider: {provider}. Supported: {supported}") from None
    builder = _PROVIDER_REGISTRY[key]
    provider_cfg = cfg.provider(key.value)
    return builder(
        provider_cfg,
        cfg.generation,
        get_api_key(provider_cfg),
        cfg.logging,
        llm_logger,
    )
