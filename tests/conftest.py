"""Shared test fixtures for snapshot-compressor tests."""

import os
from unittest.mock import patch

import pytest

from snapshot_compressor.config import CompressorConfig, env_var_for_field


@pytest.fixture(autouse=True)
def clean_environment():
    """Remove every compressor environment variable and restore os.environ afterwards."""
    with patch.dict(os.environ):
        for field_name in CompressorConfig.model_fields:
            os.environ.pop(env_var_for_field(field_name), None)
        yield


@pytest.fixture
def large_content() -> str:
    """Content well above the default threshold (20,000 chars, ~5000 tokens)."""
    return "- button [ref=e1] " * 1111 + "x" * 2


@pytest.fixture
def small_content() -> str:
    """Content well below the default threshold (500 chars, ~125 tokens)."""
    return "a" * 500
