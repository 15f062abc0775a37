"""
Provider-neutral entry point for feature extraction and guide generation.

``FeatureGuideService`` is built once at startup from an ``AppConfig`` and
then shared. It holds no per-call state, so concurrent calls are safe.

Both public operations are total: any failure (transport, credentials,
malformed output) is logged with the provider tag and replaced by the
operation's safe default:
- extract_features -> []
- generate_guide   -> FALLBACK_GUIDE_HTML

The ``*_outcome`` variants return the same value wrapped in a
``ProviderOutcome`` so callers can tell a degraded result from a real one.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from .config import AppConfig, missing_credentials
from .core.types import (
    FALLBACK_GUIDE_HTML,
    FeatureRecord,
    GenerationContext,
    Provider,
    ProviderOutcome,
)
from .errors import ResponseParseError
from .llm.providers import FeatureProvider, create_provider
from .llm.providers.base import error_status


logger = logging.getLogger(__name__)

# A tag is only stripped when it ends the fence line, or is "html".
_FENCE_RE = re.compile(r"```(?:[\w+-]*[ \t]*(?=\r?\n|$)|html)?")


class FeatureGuideService:
    """Dispatches extraction and guide requests to the selected provider."""

    def __init__(
        self,
        cfg: AppConfig | None = None,
        llm_logger: logging.Logger | None = None,
        providers: Mapping[Provider, FeatureProvider] | None = None,
    ):
        self.cfg = cfg or AppConfig()

        missing = missing_credentials(self.cfg)
        if missing:
            logger.critical(
                "Missing API key(s): %s. Set them in the environment or a .env file.",
                ", ".join(missing),
            )

        if providers is not None:
            self._providers = dict(providers)
        else:
            self._providers = {p: create_provider(p, self.cfg, llm_logger) for p in Provider}

    async def extract_features(
        self,
        article_text: str,
        provider: Provider | str | None = Provider.GEMINI,
    ) -> list[FeatureRecord]:
        outcome = await self.extract_features_outcome(article_text, provider)
        return outcome.value

    async def generate_guide(
        self,
        feature: FeatureRecord | Mapping[str, Any],
        use_case: str,
        provider: Provider | str | None = Provider.GEMINI,
        industry: str | None = None,
    ) -> str:
        outcome = await self.generate_guide_outcome(feature, use_case, provider, industry)
        return outcome.value

    async def extract_features_outcome(
        self,
        article_text: str,
        provider: Provider | str | None = Provider.GEMINI,
    ) -> ProviderOutcome[list[FeatureRecord]]:
        selected = self._select(provider)
        try:
            records = await self._providers[selected].extract_features(article_text or "")
        except Exception as exc:  # noqa: BLE001
            logger.error("[%s] API Extraction Error: %s", _tag(selected), exc)
            return ProviderOutcome(selected, [], error_status(exc), str(exc))
        return ProviderOutcome(selected, records, meta={"count": len(records)})

    async def generate_guide_outcome(
        self,
        feature: FeatureRecord | Mapping[str, Any],
        use_case: str,
        provider: Provider | str | None = Provider.GEMINI,
        industry: str | None = None,
    ) -> ProviderOutcome[str]:
        selected = self._select(provider)
        try:
            ctx = GenerationContext(
                feature=_as_record(feature),
                use_case=use_case,
                industry=industry or self.cfg.generation.default_industry,
            )
            guide = strip_markup_fences(await self._providers[selected].generate_guide(ctx))
            if not guide:
                raise ResponseParseError("Provider returned an empty guide")
        except Exception as exc:  # noqa: BLE001
            logger.error("[%s] API Guide Generation Error: %s", _tag(selected), exc)
            return ProviderOutcome(selected, FALLBACK_GUIDE_HTML, error_status(exc), str(exc))
        return ProviderOutcome(selected, guide)

    def _select(self, provider: Provider | str | None) -> Provider:
        # Unrecognised selectors keep working on the gemini path.
        if not Provider.is_known(provider):
            logger.warning(
                "Unknown provider %r, falling back to %s", provider, Provider.GEMINI.value
            )
        return Provider.from_value(provider)


def strip_markup_fences(text: str | None) -> str:
    """Remove ``` fence markers (and their language tag) and trim."""
    return _FENCE_RE.sub("", text or "").strip()


def _as_record(feature: FeatureRecord | Mapping[str, Any]) -> FeatureRecord:
    if isinstance(feature, FeatureRecord):
        return feature
    if isinstance(feature, Mapping):
        return FeatureRecord.from_dict(dict(feature))
    raise ResponseParseError(f"Unsupported feature value: {type(feature).__name__}")


def _tag(provider: Provider) -> str:
    return provider.value.upper()
