"""Tests for the feature-guide command-line interface."""

from __future__ import annotations

import json

import httpx
import respx
from typer.testing import CliRunner

from feature_guide.cli import app
from feature_guide.core.types import FALLBACK_GUIDE_HTML


runner = CliRunner()

GEMINI_HOST = "generativelanguage.googleapis.com"
OPENAI_HOST = "api.openai.com"

FEATURES = [
    {
        "featureName": "Auto-scale Pods",
        "featureSummary": "Scales pods on custom metrics.",
        "potentialUseCases": ["Retail peaks", "Batch jobs", "CI runners"],
    }
]


def _write_features(tmp_path, data=FEATURES):
    path = tmp_path / "features.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_check_reports_missing_keys(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    result = runner.invoke(app, ["check"])

    assert result.exit_code == 0
    assert "missing (GEMINI_API_KEY)" in result.output
    assert "gpt-4o-mini" in result.output


def test_extract_writes_features_json(tmp_path, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "g-test")
    monkeypatch.setenv("OPENAI_API_KEY", "o-test")
    article = tmp_path / "article.txt"
    article.write_text("Red Hat announced a new OpenShift autoscaling feature.", encoding="utf-8")
    output = tmp_path / "features.json"

    with respx.mock:
        respx.post(host=GEMINI_HOST, path="/v1beta/models/gemini-2.5-flash:generateContent").mock(
            return_value=httpx.Response(
                200, json={"candidates": [{"content": {"parts": [{"text": json.dumps(FEATURES)}]}}]}
            )
        )
        result = runner.invoke(app, ["extract", str(article), "-o", str(output), "--log-level", "ERROR"])

    assert result.exit_code == 0, result.output
    assert "Auto-scale Pods" in result.output
    assert json.loads(output.read_text(encoding="utf-8")) == FEATURES


def test_extract_reports_when_nothing_found(tmp_path, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "g-test")
    monkeypatch.setenv("OPENAI_API_KEY", "o-test")
    article = tmp_path / "article.txt"
    article.write_text("Red Hat reported quarterly earnings.", encoding="utf-8")

    with respx.mock:
        call = {"type": "function", "function": {"name": "extract_features", "arguments": '{"extractedFeatures":[]}'}}
        respx.post(host=OPENAI_HOST, path="/v1/chat/completions").mock(
            return_value=httpx.Response(200, json={"choices": [{"message": {"tool_calls": [call]}}]})
        )
        result = runner.invoke(app, ["extract", str(article), "-p", "openai", "--log-level", "ERROR"])

    assert result.exit_code == 0, result.output
    assert "No technical features found." in result.output


def test_guide_writes_stripped_fragment(tmp_path, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "g-test")
    monkeypatch.setenv("OPENAI_API_KEY", "o-test")
    features = _write_features(tmp_path)
    output = tmp_path / "guide.html"

    with respx.mock:
        route = respx.post(host=OPENAI_HOST, path="/v1/chat/completions").mock(
            return_value=httpx.Response(
                200, json={"choices": [{"message": {"content": "```html\n<h1>Guide</h1>\n```"}}]}
            )
        )
        result = runner.invoke(
            app,
            [
                "guide",
                str(features),
                "--use-case-index",
                "1",
                "--industry",
                "Finance",
                "-p",
                "openai",
                "-o",
                str(output),
                "--log-level",
                "ERROR",
            ],
        )

    assert result.exit_code == 0, result.output
    assert output.read_text(encoding="utf-8") == "<h1>Guide</h1>"
    prompt = json.loads(route.calls.last.request.content)["messages"][0]["content"]
    assert "**Batch jobs**" in prompt
    assert "Finance industry" in prompt


def test_guide_prints_fallback_on_provider_failure(tmp_path, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "g-test")
    monkeypatch.setenv("OPENAI_API_KEY", "o-test")
    features = _write_features(tmp_path, {"extractedFeatures": FEATURES})

    with respx.mock:
        respx.post(host=GEMINI_HOST, path="/v1beta/models/gemini-2.5-pro:generateContent").mock(
            return_value=httpx.Response(500)
        )
        result = runner.invoke(
            app, ["guide", str(features), "--use-case", "Edge sites", "--log-level", "CRITICAL"]
        )

    assert result.exit_code == 0, result.output
    assert FALLBACK_GUIDE_HTML in result.output


def test_guide_rejects_bad_indexes(tmp_path):
    features = _write_features(tmp_path)

    missing_feature = runner.invoke(app, ["guide", str(features), "--index", "3"])
    missing_use_case = runner.invoke(app, ["guide", str(features), "--use-case-index", "7"])

    assert missing_feature.exit_code == 1
    assert "No feature at index 3" in missing_feature.output
    assert missing_use_case.exit_code == 1
    assert "no use case at index 7" in missing_use_case.output
