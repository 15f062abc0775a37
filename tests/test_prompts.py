"""Tests for prompt builders."""

from feature_guide.core.types import FeatureRecord, GenerationContext
from feature_guide.llm.prompts import build_extraction_prompt, build_guide_prompt


def _feature():
    return FeatureRecord(
        feature_name="Auto-scale Pods",
        feature_summary="Scales pods on custom metrics.",
        potential_use_cases=("Retail peaks", "Batch jobs", "CI runners"),
    )


def test_build_extraction_prompt_embeds_article_verbatim():
    article = "Red Hat announced {braces} and 100% new\nOpenShift autoscaling."
    prompt = build_extraction_prompt(article)

    assert article in prompt
    assert "empty array" in prompt
    assert "3 distinct" in prompt
    assert "ARTICLE CONTENT:" in prompt


def test_build_extraction_prompt_handles_empty_article():
    prompt = build_extraction_prompt("")
    assert "---\n\n---" in prompt


def test_build_guide_prompt_contains_context():
    ctx = GenerationContext(feature=_feature(), use_case="Retail peaks", industry="Healthcare")
    prompt = build_guide_prompt(ctx)

    assert "**Auto-scale Pods**" in prompt
    assert "Scales pods on custom metrics." in prompt
    assert "**Retail peaks**" in prompt
    assert "within the Healthcare industry" in prompt
    assert "for an Healthcare business" in prompt
    assert "excluding <html>, <head>, and <body> tags" in prompt
    assert "at least 3 actionable" in prompt


def test_build_guide_prompt_default_industry():
    prompt = build_guide_prompt(GenerationContext(feature=_feature(), use_case="Batch jobs"))
    assert "General Tech industry" in prompt
