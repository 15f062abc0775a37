"""OpenAI chat-completions provider.

Extraction forces a single function call whose parameter schema is the
object envelope, then unwraps the feature array from the call arguments.
"""

from __future__ import annotations

from typing import Any

import httpx

from ...core.types import FeatureRecord, GenerationContext, Provider
from ...errors import ResponseParseError
from ..prompts import build_extraction_prompt, build_guide_prompt
from ..schemas import ENVELOPE_KEY, OBJECT_ENVELOPE_SCHEMA
from ..tracing import record_span_error, set_span_output, start_span
from .base import FeatureProvider, error_status, parse_feature_items, parse_json_text


EXTRACTION_TOOL_NAME = "extract_features"

_EXTRACTION_TOOL: dict[str, Any] = {
    "type": "function",
    "function": {
        "name": EXTRACTION_TOOL_NAME,
        "description": "Extracts product features and use cases from a Red Hat announcement article.",
        "parameters": OBJECT_ENVELOPE_SCHEMA,
    },
}


class OpenAICompatibleProvider(FeatureProvider):
    """Provider for the OpenAI chat completions API (or a compatible endpoint)."""

    provider = Provider.OPENAI

    async def extract_features(self, article_text: str) -> list[FeatureRecord]:
        prompt = build_extraction_prompt(article_text, self.gen_cfg.expected_use_cases)
        model = self.cfg.extract_model
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "tools": [_EXTRACTION_TOOL],
            "tool_choice": {"type": "function", "function": {"name": EXTRACTION_TOOL_NAME}},
            "temperature": self.gen_cfg.extract_temperature,
        }
        arguments = ""
        with start_span(
            "openai.extract_features",
            kind="llm",
            input_value=prompt,
            attributes={"llm.model": model, "llm.provider": "openai"},
        ) as span:
            try:
                data = await self._post(payload)
                arguments = _extract_tool_arguments(data)
                set_span_output(span, arguments)
                envelope = parse_json_text(arguments)
                if not isinstance(envelope, dict):
                    raise ResponseParseError("Tool call arguments are not a JSON object")
                records = parse_feature_items(
                    envelope.get(ENVELOPE_KEY) or [], self.gen_cfg.expected_use_cases
                )
            except Exception as exc:
                record_span_error(span, exc)
                self._log_llm_response(
                    event="llm_extract_features",
                    status=error_status(exc),
                    model=model,
                    content=arguments or str(exc),
                    prompt=prompt,
                )
                raise

        self._log_llm_response(
            event="llm_extract_features",
            status="ok",
            model=model,
            content=arguments,
            prompt=prompt,
        )
        return records

    async def generate_guide(self, ctx: GenerationContext) -> str:
        prompt = build_guide_prompt(ctx)
        model = self.cfg.guide_model
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.gen_cfg.guide_temperature,
        }
        with start_span(
            "openai.generate_guide",
            kind="llm",
            input_value=prompt,
            attributes={
                "llm.model": model,
                "llm.provider": "openai",
                "feature.name": ctx.feature.feature_name,
                "guide.industry": ctx.industry,
            },
        ) as span:
            try:
                data = await self._post(payload)
                content = _extract_message_content(data)
            except Exception as exc:
                record_span_error(span, exc)
                self._log_llm_response(
                    event="llm_generate_guide",
                    status=error_status(exc),
                    model=model,
                    content=str(exc),
                    prompt=prompt,
                )
                raise
            set_span_output(span, content)

        self._log_llm_response(
            event="llm_generate_guide",
            status="ok",
            model=model,
            content=content,
            prompt=prompt,
        )
        return content

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        api_key = self._require_api_key()
        url = f"{self.cfg.base_url.rstrip('/')}/chat/completions"
        headers = {"Authorization": f"Bearer {api_key}"}
        async with httpx.AsyncClient(
            timeout=self.cfg.timeout_seconds, trust_env=self.cfg.trust_env
        ) as client:
            resp = await client.post(url, headers=headers, json=payload)
            resp.raise_for_status()
            return resp.json()


def _first_message(data: dict[str, Any]) -> dict[str, Any]:
    try:
        message = data["choices"][0]["message"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ResponseParseError("Response has no choices") from exc
    if not isinstance(message, dict):
        raise ResponseParseError("Response message is not an object")
    return message


def _extract_tool_arguments(data: dict[str, Any]) -> str:
    calls = _first_message(data).get("tool_calls") or []
    if not calls:
        raise ResponseParseError("Response has no tool call")
    try:
        arguments = calls[0]["function"]["arguments"]
    except (KeyError, TypeError) as exc:
        raise ResponseParseError("Tool call has no arguments") from exc
    if not isinstance(arguments, str):
        raise ResponseParseError("Tool call arguments are not a string")
    return arguments


def _extract_message_content(data: dict[str, Any]) -> str:
    content = _first_message(data).get("content")
    return content if isinstance(content, str) else ""
