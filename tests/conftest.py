"""Pytest configuration and shared fixtures."""

import pytest

from ajax_response.config import ResponseSettings
from ajax_response.plugins import PluginRegistry
from ajax_response.protocol.queue import ResponseQueue


@pytest.fixture
def response_settings() -> ResponseSettings:
    """Settings independent of the process environment."""
    return ResponseSettings(character_encoding="utf-8", content_type="application/json")


@pytest.fixture
def registry() -> PluginRegistry:
    return PluginRegistry()


@pytest.fixture
def response(response_settings: ResponseSettings, registry: PluginRegistry) -> ResponseQueue:
    """A fresh, empty response queue."""
    return ResponseQueue(settings=response_settings, registry=registry)
