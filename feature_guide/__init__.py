"""
Feature Guide - LLM-powered feature extraction and technical guide writer.

This package reads technical news articles, extracts structured feature
records with Gemini or OpenAI, and writes industry-specific HTML guides
for a chosen feature and use case.

Main entry points are ``FeatureGuideService`` and the CLI via the
`feature-guide` command.

Example:
    $ feature-guide extract article.txt -o features.json
    $ feature-guide guide features.json --industry Healthcare
"""

__all__ = [
    "__version__",
    "AppConfig",
    "FALLBACK_GUIDE_HTML",
    "FeatureGuideService",
    "FeatureRecord",
    "GenerationContext",
    "Provider",
    "ProviderOutcome",
    "load_config",
]
__version__ = "0.1.0"

from .config import AppConfig, load_config
from .core.types import (
    FALLBACK_GUIDE_HTML,
    FeatureRecord,
    GenerationContext,
    Provider,
    ProviderOutcome,
)
from .service import FeatureGuideService
