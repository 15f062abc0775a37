"""
Command-line interface for feature extraction and guide generation.

Uses Typer to expose the two service operations plus a credential check.
Supports loading .env files for API key configuration.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .config import AppConfig, get_api_key, load_config
from .core.types import FeatureRecord
from .errors import ResponseParseError
from .llm.providers import available_providers
from .llm.schemas import ENVELOPE_KEY
from .llm.tracing import flush, setup_langfuse
from .service import FeatureGuideService
from .utils.logging import setup_llm_logger, setup_logging

app = typer.Typer(add_completion=False)
console = Console()


def _bootstrap(config: Path | None, log_dir: Path | None, log_level: str | None) -> FeatureGuideService:
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    if log_dir is not None:
        cfg.logging.file = True
    setup_logging(cfg.logging, log_dir)
    setup_langfuse(cfg.langfuse)
    return FeatureGuideService(cfg, llm_logger=setup_llm_logger(cfg.logging, log_dir))


@app.command()
def extract(
    article: Path = typer.Argument(..., exists=True, readable=True, help="Plain-text article file."),
    provider: str = typer.Option("gemini", "--provider", "-p", help="gemini or openai."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write features as JSON."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Directory for log files."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Extract technical features from an article."""
    service = _bootstrap(config, log_dir, log_level)
    text = article.read_text(encoding="utf-8")
    features = asyncio.run(service.extract_features(text, provider))
    flush()

    if not features:
        console.print("No technical features found.")
    else:
        table = Table(title=f"Features ({len(features)})")
        table.add_column("#", justify="right")
        table.add_column("Feature")
        table.add_column("Use cases")
        for idx, feature in enumerate(features):
            table.add_row(str(idx), feature.feature_name, "\n".join(feature.potential_use_cases))
        console.print(table)

    if output is not None:
        payload = [f.to_dict() for f in features]
        output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        console.print(f"Features written: {output}")


@app.command()
def guide(
    features_file: Path = typer.Argument(..., exists=True, readable=True, help="Features JSON file."),
    index: int = typer.Option(0, "--index", "-n", help="Which feature in the file to use."),
    use_case: str | None = typer.Option(None, "--use-case", help="Use case text (overrides --use-case-index)."),
    use_case_index: int = typer.Option(0, "--use-case-index", help="Which of the feature's use cases to use."),
    industry: str | None = typer.Option(None, "--industry", help="Industry the guide is written for."),
    provider: str = typer.Option("gemini", "--provider", "-p", help="gemini or openai."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the HTML fragment to a file."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Directory for log files."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Generate an HTML guide for one extracted feature."""
    feature = _load_feature(features_file, index)
    chosen = use_case
    if not chosen:
        if not 0 <= use_case_index < len(feature.potential_use_cases):
            console.print(f"[red]Feature has no use case at index {use_case_index}.[/red]")
            raise typer.Exit(code=1)
        chosen = feature.potential_use_cases[use_case_index]

    service = _bootstrap(config, log_dir, log_level)
    html = asyncio.run(service.generate_guide(feature, chosen, provider, industry))
    flush()

    if output is not None:
        output.write_text(html, encoding="utf-8")
        console.print(f"Guide written: {output}")
    else:
        typer.echo(html)


@app.command()
def check(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
):
    """Show registered providers and whether their API keys are set."""
    load_dotenv()
    cfg: AppConfig = load_config(str(config) if config else None)
    table = Table(title="Providers")
    table.add_column("Provider")
    table.add_column("Extract model")
    table.add_column("Guide model")
    table.add_column("API key")
    for name in available_providers():
        provider_cfg = cfg.provider(name)
        status = "set" if get_api_key(provider_cfg) else f"missing ({provider_cfg.api_key_env})"
        table.add_row(name, provider_cfg.extract_model, provider_cfg.guide_model, status)
    console.print(table)


def _load_feature(path: Path, index: int) -> FeatureRecord:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid JSON in {path}: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    if isinstance(data, dict):
        data = data.get(ENVELOPE_KEY, [])
    if not isinstance(data, list) or not 0 <= index < len(data):
        console.print(f"[red]No feature at index {index} in {path}.[/red]")
        raise typer.Exit(code=1)

    try:
        return FeatureRecord.from_dict(data[index])
    except ResponseParseError as exc:
        console.print(f"[red]Invalid feature at index {index}: {exc}[/red]")
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()
