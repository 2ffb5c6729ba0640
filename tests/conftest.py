"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from tsa.schemas.config import AppSettings, OpenAIConfig
from tsa.shared.openai_service import OpenAIService


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Write a minimal valid settings YAML and return its path."""
    cfg = tmp_path / "settings.yml"
    cfg.write_text(
        """\
port: 9001
model: "gpt-4-turbo"
mock_delay_seconds: 0
"""
    )
    return cfg


@pytest.fixture
def fast_settings() -> AppSettings:
    """Settings with no artificial demo delay."""
    return AppSettings(mock_delay_seconds=0)


@pytest.fixture
def mock_openai_service() -> OpenAIService:
    """Return an OpenAIService with a mocked OpenAI SDK underneath."""
    service = OpenAIService.__new__(OpenAIService)
    service.config = OpenAIConfig(api_key="sk-test")
    service._mock_delay = 0
    service._client = AsyncMock()
    return service
