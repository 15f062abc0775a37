"""Google Gemini provider using the generateContent REST endpoint."""

from __future__ import annotations

from typing import Any

import httpx

from ...core.types import FeatureRecord, GenerationContext, Provider
from ..prompts import build_extraction_prompt, build_guide_prompt
from ..schemas import ARRAY_ENVELOPE_SCHEMA, to_gemini_schema
from ..tracing import record_span_error, set_span_output, start_span
from .base import FeatureProvider, error_status, parse_feature_items, parse_json_text


_EXTRACTION_RESPONSE_SCHEMA: dict[str, Any] = to_gemini_schema(ARRAY_ENVELOPE_SCHEMA)


class GeminiProvider(FeatureProvider):
    """Gemini-backed provider; extraction uses a native array response schema."""

    provider = Provider.GEMINI

    async def extract_features(self, article_text: str) -> list[FeatureRecord]:
        prompt = build_extraction_prompt(article_text, self.gen_cfg.expected_use_cases)
        model = self.cfg.extract_model
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.gen_cfg.extract_temperature,
                "responseMimeType": "application/json",
                "responseSchema": _EXTRACTION_RESPONSE_SCHEMA,
            },
        }
        content = ""
        with start_span(
            "gemini.extract_features",
            kind="llm",
            input_value=prompt,
            attributes={"llm.model": model, "llm.provider": "gemini"},
        ) as span:
            try:
                data = await self._post(model, payload)
                content = _extract_text(data).strip()
                set_span_output(span, content)
                records = parse_feature_items(
                    parse_json_text(content), self.gen_cfg.expected_use_cases
                )
            except Exception as exc:
                record_span_error(span, exc)
                self._log_llm_response(
                    event="llm_extract_features",
                    status=error_status(exc),
                    model=model,
                    content=content or str(exc),
                    prompt=prompt,
                )
                raise

        self._log_llm_response(
            event="llm_extract_features",
            status="ok",
            model=model,
            content=content,
            prompt=prompt,
        )
        return records

    async def generate_guide(self, ctx: GenerationContext) -> str:
        prompt = build_guide_prompt(ctx)
        model = self.cfg.guide_model
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": self.gen_cfg.guide_temperature},
        }
        with start_span(
            "gemini.generate_guide",
            kind="llm",
            input_value=prompt,
            attributes={
                "llm.model": model,
                "llm.provider": "gemini",
                "feature.name": ctx.feature.feature_name,
                "guide.industry": ctx.industry,
            },
        ) as span:
            try:
                data = await self._post(model, payload)
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
            content = _extract_text(data)
            set_span_output(span, content)

        self._log_llm_response(
            event="llm_generate_guide",
            status="ok",
            model=model,
            content=content,
            prompt=prompt,
        )
        return content

    async def _post(self, model: str, payload: dict[str, Any]) -> dict[str, Any]:
        api_key = self._require_api_key()
        url = f"{self.cfg.base_url.rstrip('/')}/v1beta/models/{model}:generateContent"
        async with httpx.AsyncClient(
            timeout=self.cfg.timeout_seconds, trust_env=self.cfg.trust_env
        ) as client:
            resp = await client.post(url, headers={"x-goog-api-key": api_key}, json=payload)
            resp.raise_for_status()
            return resp.json()


def _extract_text(data: dict[str, Any]) -> str:
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except Exception:  # noqa: BLE001
        return ""

    if not isinstance(parts, list):
        return ""

    non_thought_chunks: list[str] = []
    all_chunks: list[str] = []
    for part in parts:
        if not isinstance(part, dict):
            continue
        text = part.get("text")
        if text is None:
            continue
        chunk = str(text)
        if not chunk:
            continue
        all_chunks.append(chunk)
        if not bool(part.get("thought")):
            non_thought_chunks.append(chunk)

    if non_thought_chunks:
        return "".join(non_thought_chunks)
    return "".join(all_chunks)
