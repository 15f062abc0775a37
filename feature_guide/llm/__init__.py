"""LLM providers, prompts, schemas and observability."""

from .providers.base import FeatureProvider
from .providers.factory import available_providers, create_provider
from .providers.gemini import GeminiProvider
from .providers.openai_compatible import OpenAICompatibleProvider
from .schemas import ARRAY_ENVELOPE_SCHEMA, ENVELOPE_KEY, FEATURE_OBJECT_SCHEMA, OBJECT_ENVELOPE_SCHEMA
from .tracing import flush, record_span_error, set_span_output, setup_langfuse, start_span

__all__ = [
    "FeatureProvider",
    "GeminiProvider",
    "OpenAICompatibleProvider",
    "create_provider",
    "available_providers",
    "ARRAY_ENVELOPE_SCHEMA",
    "ENVELOPE_KEY",
    "FEATURE_OBJECT_SCHEMA",
    "OBJECT_ENVELOPE_SCHEMA",
    "setup_langfuse",
    "flush",
    "start_span",
    "set_span_output",
    "record_span_error",
]
