"""Tests for core value types."""

import pytest

from feature_guide.core.types import (
    FALLBACK_GUIDE_HTML,
    FeatureRecord,
    GenerationContext,
    Provider,
    ProviderOutcome,
)
from feature_guide.errors import ResponseParseError


def _feature_dict(**overrides):
    data = {
        "featureName": "Auto-scale Pods",
        "featureSummary": "Scales pods on custom metrics.",
        "potentialUseCases": ["a", "b", "c"],
    }
    data.update(overrides)
    return data


def test_feature_record_from_dict_keeps_values_and_order():
    record = FeatureRecord.from_dict(_feature_dict())

    assert record.feature_name == "Auto-scale Pods"
    assert record.feature_summary == "Scales pods on custom metrics."
    assert record.potential_use_cases == ("a", "b", "c")


def test_feature_record_to_dict_uses_wire_keys():
    record = FeatureRecord.from_dict(_feature_dict())
    assert record.to_dict() == _feature_dict()


def test_feature_record_accepts_any_use_case_count():
    assert FeatureRecord.from_dict(_feature_dict(potentialUseCases=[])).potential_use_cases == ()
    record = FeatureRecord.from_dict(_feature_dict(potentialUseCases=["1", "2", "3", "4"]))
    assert len(record.potential_use_cases) == 4


@pytest.mark.parametrize(
    "data",
    [
        "not-an-object",
        {"featureSummary": "s", "potentialUseCases": []},
        _feature_dict(featureName="   "),
        _feature_dict(featureSummary=None),
        _feature_dict(potentialUseCases="a, b, c"),
        _feature_dict(potentialUseCases=["a", 2, "c"]),
    ],
)
def test_feature_record_rejects_invalid_entries(data):
    with pytest.raises(ResponseParseError):
        FeatureRecord.from_dict(data)


def test_feature_record_is_immutable():
    record = FeatureRecord.from_dict(_feature_dict())
    with pytest.raises(AttributeError):
        record.feature_name = "other"  # type: ignore[misc]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("openai", Provider.OPENAI),
        ("OpenAI", Provider.GEMINI),
        (" openai ", Provider.GEMINI),
        ("gemini", Provider.GEMINI),
        (None, Provider.GEMINI),
        ("", Provider.GEMINI),
        ("gpt", Provider.GEMINI),
        ("opnai", Provider.GEMINI),
        (Provider.OPENAI, Provider.OPENAI),
    ],
)
def test_provider_from_value_defaults_to_gemini(value, expected):
    assert Provider.from_value(value) is expected


def test_provider_is_known():
    assert Provider.is_known("gemini")
    assert Provider.is_known("openai")
    assert not Provider.is_known("OPENAI")
    assert Provider.is_known(None)
    assert not Provider.is_known("claude")


def test_generation_context_default_industry():
    record = FeatureRecord.from_dict(_feature_dict())
    ctx = GenerationContext(feature=record, use_case="a")
    assert ctx.industry == "General Tech"


def test_provider_outcome_ok_flag():
    assert ProviderOutcome(Provider.GEMINI, []).ok
    degraded = ProviderOutcome(Provider.OPENAI, FALLBACK_GUIDE_HTML, "provider_error", "boom")
    assert not degraded.ok
    assert degraded.value.startswith("<h3>Error Generating Guide</h3>")
