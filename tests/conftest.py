from __future__ import annotations

import logging

import pytest

from feature_guide.config import AppConfig, LangfuseConfig
from feature_guide.llm import tracing


@pytest.fixture
def app_cfg() -> AppConfig:
    cfg = AppConfig()
    cfg.gemini.api_key = "gemini-test-key"
    cfg.openai.api_key = "openai-test-key"
    return cfg


@pytest.fixture(autouse=True)
def _reset_global_state():
    yield
    # The CLI and setup_logging reconfigure these; restore caplog-friendly defaults.
    for name in ("feature_guide", "feature_guide.llm"):
        logger = logging.getLogger(name)
        logger.handlers = []
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
    tracing.setup_langfuse(LangfuseConfig())
