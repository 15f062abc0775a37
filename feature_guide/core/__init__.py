"""
Core data types shared by providers, the service and the CLI.
"""

from .types import (
    FALLBACK_GUIDE_HTML,
    FeatureRecord,
    GenerationContext,
    Provider,
    ProviderOutcome,
)

__all__ = [
    "FALLBACK_GUIDE_HTML",
    "FeatureRecord",
    "GenerationContext",
    "Provider",
    "ProviderOutcome",
]
