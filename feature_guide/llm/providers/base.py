"""Abstract interface for providers that extract features and write guides."""

from __future__ import annotations

from abc import ABC, abstractmethod
import json
import logging
from typing import Any

import httpx

from ...config import GenerationConfig, LoggingConfig, ProviderConfig
from ...core.types import FeatureRecord, GenerationContext, Provider
from ...errors import ProviderError, ResponseParseError
from ...utils.logging import log_event, redact_text, truncate_text


logger = logging.getLogger(__name__)


class FeatureProvider(ABC):
    """Provider interface for structured extraction and guide generation.

    Implementations translate one request into one vendor API call and
    raise on any failure; ``FeatureGuideService`` owns the fallbacks.
    """

    provider: Provider

    def __init__(
        self,
        cfg: ProviderConfig,
        gen_cfg: GenerationConfig,
        api_key: str | None,
        log_cfg: LoggingConfig,
        llm_logger: logging.Logger | None = None,
    ):
        self.cfg = cfg
        self.gen_cfg = gen_cfg
        self.api_key = api_key
        self.log_cfg = log_cfg
        self.llm_logger = llm_logger

    @abstractmethod
    async def extract_features(self, article_text: str) -> list[FeatureRecord]:
        """Return the features found in ``article_text`` in source order."""
        raise NotImplementedError

    @abstractmethod
    async def generate_guide(self, ctx: GenerationContext) -> str:
        """Return the raw guide text as produced by the model."""
        raise NotImplementedError

    def _require_api_key(self) -> str:
        if not self.api_key:
            raise ProviderError(f"Missing API key (set {self.cfg.api_key_env})")
        return self.api_key

    def _log_llm_response(
        self,
        event: str,
        status: str,
        model: str,
        content: str,
        prompt: str,
    ) -> None:
        if self.llm_logger is None:
            return
        redaction = self.log_cfg.llm_log_redaction
        payload: dict[str, Any] = {
            "event": event,
            "status": status,
            "provider": self.provider.value,
            "model": model,
        }
        if self.log_cfg.llm_log_detail == "prompt_response":
            payload["raw_prompt"] = truncate_text(redact_text(prompt, redaction))
        payload["raw_response"] = truncate_text(redact_text(content, redaction))
        log_event(self.llm_logger, "LLM response", **payload)


def error_status(exc: BaseException) -> str:
    """Classify a failure into the status strings used in logs and outcomes."""
    if isinstance(exc, (httpx.HTTPError, ProviderError)):
        return "provider_error"
    if isinstance(exc, (ResponseParseError, json.JSONDecodeError)):
        return "parse_error"
    return "unexpected_error"


def parse_json_text(content: str) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"Failed to parse JSON: {exc}") from exc


def parse_feature_items(items: Any, expected_use_cases: int) -> list[FeatureRecord]:
    """Turn decoded feature objects into records, all or nothing."""
    if not isinstance(items, list):
        raise ResponseParseError(f"Expected a JSON array of features, got {type(items).__name__}")

    records = [FeatureRecord.from_dict(item) for item in items]
    for record in records:
        count = len(record.potential_use_cases)
        if count != expected_use_cases:
            logger.warning(
                "Feature %r has %d use cases (expected %d)",
                record.feature_name,
                count,
                expected_use_cases,
            )
    return records
