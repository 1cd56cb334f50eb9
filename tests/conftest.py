"""Shared fixtures."""

from collections.abc import Iterator

import pytest
import structlog

from handy_cloud.features.llm.metrics import LlmMetrics


@pytest.fixture(autouse=True)
def reset_llm_metrics() -> Iterator[None]:
    """Give every test a fresh metrics singleton."""
    LlmMetrics.reset_instance()
    yield
    LlmMetrics.reset_instance()


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Drop logging configuration installed by a test (e.g. via the CLI)."""
    yield
    structlog.reset_defaults()
