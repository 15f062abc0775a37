"""
Core data types for the feature extraction and guide generation layer.

This module defines the value objects passed across the provider boundary:
- Provider: The closed set of supported LLM providers
- FeatureRecord: One technical update extracted from an article
- GenerationContext: Everything a guide prompt is built from
- ProviderOutcome: Internal success/degraded result of a provider call
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from ..errors import ResponseParseError


DEFAULT_INDUSTRY = "General Tech"

FALLBACK_GUIDE_HTML = (
    "<h3>Error Generating Guide</h3>"
    "<p>Could not generate the technical guide using the selected AI provider.</p>"
)

T = TypeVar("T")


class Provider(str, Enum):
    """Supported LLM providers."""

    GEMINI = "gemini"
    OPENAI = "openai"

    @classmethod
    def from_value(cls, value: Provider | str | None) -> Provider:
        """Resolve a provider selector.

        Only the exact selector "openai" resolves to OPENAI. Anything else
        resolves to GEMINI, including None, empty strings, other casings
        and typos.
        """
        if isinstance(value, Provider):
            return value
        if value == cls.OPENAI.value:
            return cls.OPENAI
        return cls.GEMINI

    @classmethod
    def is_known(cls, value: Provider | str | None) -> bool:
        if value is None or isinstance(value, Provider):
            return True
        return value in {p.value for p in cls}


@dataclass(frozen=True)
class FeatureRecord:
    """A technical product update extracted from an article.

    Attributes:
        feature_name: Concise descriptive title of the update
        feature_summary: 2-3 sentence technical summary
        potential_use_cases: Real-world use cases, three are requested from
            the model but any count is accepted
    """

    feature_name: str
    feature_summary: str
    potential_use_cases: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> FeatureRecord:
        """Build a record from a decoded JSON object using the wire key names."""
        if not isinstance(data, dict):
            raise ResponseParseError(f"Feature entry is not an object: {type(data).__name__}")

        name = data.get("featureName")
        summary = data.get("featureSummary")
        use_cases = data.get("potentialUseCases")

        if not isinstance(name, str) or not name.strip():
            raise ResponseParseError("Feature entry missing 'featureName'")
        if not isinstance(summary, str) or not summary.strip():
            raise ResponseParseError("Feature entry missing 'featureSummary'")
        if not isinstance(use_cases, list):
            raise ResponseParseError("Feature entry missing 'potentialUseCases' array")
        if not all(isinstance(item, str) for item in use_cases):
            raise ResponseParseError("'potentialUseCases' must contain only strings")

        return cls(
            feature_name=name,
            feature_summary=summary,
            potential_use_cases=tuple(use_cases),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "featureName": self.feature_name,
            "featureSummary": self.feature_summary,
            "potentialUseCases": list(self.potential_use_cases),
        }


@dataclass(frozen=True)
class GenerationContext:
    """Inputs for a single guide prompt.

    Attributes:
        feature: The feature the guide is about
        use_case: Scenario the guide is anchored to, usually one of
            ``feature.potential_use_cases`` (not enforced)
        industry: Industry the guide is framed for
    """

    feature: FeatureRecord
    use_case: str
    industry: str = DEFAULT_INDUSTRY


@dataclass(frozen=True)
class ProviderOutcome(Generic[T]):
    """Result of one provider call as seen by the service boundary.

    ``value`` is always usable: the real result when ``status`` is "ok",
    the operation's safe default otherwise.

    Attributes:
        provider: Provider that handled the call
        value: Result or safe default
        status: "ok", "provider_error", "parse_error" or "unexpected_error"
        error: Error description when status is not "ok"
        meta: Extra details about a successful call, e.g. the feature count
    """

    provider: Provider
    value: T
    status: str = "ok"
    error: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"
