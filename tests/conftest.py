"""Shared test fixtures."""

from __future__ import annotations

import pytest

from capilayout.config import CApiConfig
from capilayout.observability import StructuredLogger


@pytest.fixture
def capi_config() -> CApiConfig:
    """Provide the default config of a crate named ``ferris``."""
    return CApiConfig.from_mapping({}, package_name="ferris", package_version="0.1.0")


@pytest.fixture
def logger() -> StructuredLogger:
    return StructuredLogger()
