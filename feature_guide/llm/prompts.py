"""Prompt loading and rendering helpers for LLM providers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from ..core.types import GenerationContext


_PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"


@lru_cache(maxsize=None)
def _load_template(name: str) -> str:
    path = _PROMPT_DIR / f"{name}.md"
    return path.read_text(encoding="utf-8").strip()


def _render_template(name: str, **values: str) -> str:
    template = _load_template(name)
    return template.format(**values)


def build_extraction_prompt(article_text: str, use_case_count: int = 3) -> str:
    """Render the extraction prompt with the article embedded verbatim."""
    return _render_template(
        "extraction",
        article_text=article_text,
        use_case_count=str(use_case_count),
    )


def build_guide_prompt(ctx: GenerationContext) -> str:
    return _render_template(
        "guide",
        feature_name=ctx.feature.feature_name,
        feature_summary=ctx.feature.feature_summary,
        use_case=ctx.use_case,
        industry=ctx.industry,
    )
