"""Tests for the LLM provider factory."""

import pytest

from feature_guide.config import AppConfig
from feature_guide.core.types import Provider
from feature_guide.llm.providers.factory import available_providers, create_provider
from feature_guide.llm.providers.gemini import GeminiProvider
from feature_guide.llm.providers.openai_compatible import OpenAICompatibleProvider


def test_available_providers_contains_expected_backends():
    assert available_providers() == ["gemini", "openai"]


def test_create_provider_gemini(app_cfg):
    provider = create_provider("gemini", app_cfg)
    assert isinstance(provider, GeminiProvider)
    assert provider.api_key == "gemini-test-key"
    assert provider.cfg is app_cfg.gemini


def test_create_provider_openai_from_enum(app_cfg):
    provider = create_provider(Provider.OPENAI, app_cfg)
    assert isinstance(provider, OpenAICompatibleProvider)
    assert provider.api_key == "openai-test-key"


def test_create_provider_without_key_does_not_raise(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    provider = create_provider("openai", AppConfig())
    assert provider.api_key is None


def test_create_provider_rejects_unknown_backend(app_cfg):
    with pytest.raises(ValueError, match="Unsupported provider"):
        create_provider("unknown-provider", app_cfg)
