"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ProviderConfig: Per-provider model, endpoint and credential settings
- GenerationConfig: Sampling temperatures and prompt defaults
- LoggingConfig: Logging behavior
- LangfuseConfig: Langfuse tracing settings
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml


@dataclass
class ProviderConfig:
    """Configuration for one LLM provider.

    Attributes:
        name: Provider name ("gemini" or "openai")
        extract_model: Model used for structured feature extraction
        guide_model: Model used for guide generation
        api_key_env: Environment variable name containing the API key
        base_url: Base URL for the provider API
        api_key: Optional inline API key (overrides env var)
        trust_env: Whether to respect system proxy settings for API requests
        timeout_seconds: Transport timeout for a single request
    """

    name: str
    extract_model: str
    guide_model: str
    api_key_env: str
    base_url: str
    api_key: str | None = None
    trust_env: bool = True
    timeout_seconds: float = 120.0


def _default_gemini() -> ProviderConfig:
    return ProviderConfig(
        name="gemini",
        extract_model="gemini-2.5-flash",
        guide_model="gemini-2.5-pro",
        api_key_env="GEMINI_API_KEY",
        base_url="https://generativelanguage.googleapis.com",
    )


def _default_openai() -> ProviderConfig:
    return ProviderConfig(
        name="openai",
        extract_model="gpt-4o-mini",
        guide_model="gpt-4o",
        api_key_env="OPENAI_API_KEY",
        base_url="https://api.openai.com/v1",
    )


@dataclass
class GenerationConfig:
    """Sampling and prompt settings shared by both providers.

    Attributes:
        extract_temperature: Temperature for structured extraction
        guide_temperature: Temperature for guide generation
        default_industry: Industry used when the caller does not pass one
        expected_use_cases: Number of use cases requested per feature
    """

    extract_temperature: float = 0.1
    guide_temperature: float = 0.7
    default_industry: str = "General Tech"
    expected_use_cases: int = 3


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
        llm_log_enabled: Whether to enable separate LLM interaction logging
        llm_log_detail: LLM log detail level ("response_only", "prompt_response")
        llm_log_redaction: Redaction mode for LLM logs ("none", "redact_content", "redact_urls")
        llm_log_file: Name of the LLM log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "feature_guide.jsonl"
    llm_log_enabled: bool = False
    llm_log_detail: str = "response_only"
    llm_log_redaction: str = "none"
    llm_log_file: str = "llm.jsonl"


@dataclass
class LangfuseConfig:
    """Configuration for Langfuse tracing.

    Attributes:
        enabled: Whether to enable Langfuse tracing
        public_key: Langfuse public key (optional)
        secret_key: Langfuse secret key (optional)
        host: Langfuse host URL (optional)
        environment: Langfuse environment label (optional)
        release: Langfuse release identifier (optional)
        redaction: Redaction mode for prompt/response payloads
        max_text_chars: Maximum characters for prompt/response payloads
    """

    enabled: bool = False
    public_key: str | None = None
    secret_key: str | None = None
    host: str | None = None
    environment: str | None = None
    release: str | None = None
    redaction: str = "none"
    max_text_chars: int = 20000


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    gemini: ProviderConfig = field(default_factory=_default_gemini)
    openai: ProviderConfig = field(default_factory=_default_openai)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    langfuse: LangfuseConfig = field(default_factory=LangfuseConfig)

    def provider(self, name: str) -> ProviderConfig:
        """Return the provider section for ``name`` ("gemini" or "openai")."""
        if name == "openai":
            return self.openai
        if name == "gemini":
            return self.gemini
        raise KeyError(f"Unknown provider section: {name}")


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "gemini": _provider_asdict(cfg.gemini),
        "openai": _provider_asdict(cfg.openai),
        "generation": {
            "extract_temperature": cfg.generation.extract_temperature,
            "guide_temperature": cfg.generation.guide_temperature,
            "default_industry": cfg.generation.default_industry,
            "expected_use_cases": cfg.generation.expected_use_cases,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "llm_log_enabled": cfg.logging.llm_log_enabled,
            "llm_log_detail": cfg.logging.llm_log_detail,
            "llm_log_redaction": cfg.logging.llm_log_redaction,
            "llm_log_file": cfg.logging.llm_log_file,
        },
        "langfuse": {
            "enabled": cfg.langfuse.enabled,
            "public_key": cfg.langfuse.public_key,
            "secret_key": cfg.langfuse.secret_key,
            "host": cfg.langfuse.host,
            "environment": cfg.langfuse.environment,
            "release": cfg.langfuse.release,
            "redaction": cfg.langfuse.redaction,
            "max_text_chars": cfg.langfuse.max_text_chars,
        },
    }


def _provider_asdict(cfg: ProviderConfig) -> dict[str, Any]:
    return {
        "name": cfg.name,
        "extract_model": cfg.extract_model,
        "guide_model": cfg.guide_model,
        "api_key_env": cfg.api_key_env,
        "base_url": cfg.base_url,
        "api_key": cfg.api_key,
        "trust_env": cfg.trust_env,
        "timeout_seconds": cfg.timeout_seconds,
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        gemini=ProviderConfig(**data["gemini"]),
        openai=ProviderConfig(**data["openai"]),
        generation=GenerationConfig(**data["generation"]),
        logging=LoggingConfig(**data["logging"]),
        langfuse=LangfuseConfig(**data.get("langfuse", {})),
    )


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    return os.getenv(cfg.api_key_env) or None


def missing_credentials(cfg: AppConfig) -> list[str]:
    """Return the env var names of providers that have no API key."""
    return [p.api_key_env for p in (cfg.gemini, cfg.openai) if not get_api_key(p)]
