"""Shared fixtures for compression pipeline tests."""

import pytest

from snapshot_compressor.config import CompressorConfig
from snapshot_compressor.models import CompressionRequest
from snapshot_compressor.providers.base import BaseCompressionProvider


class StubProvider(BaseCompressionProvider):
    """Provider that records calls and returns a canned result."""

    def __init__(
        self,
        name: str,
        credential_flag: str,
        result: str | None = None,
        available: bool = True,
        error: Exception | None = None,
    ):
        """
        Args:
            name: Provider name
            credential_flag: CompressorConfig property that gates the provider
            result: Text to return; None echoes the request content
            available: Value returned by is_available
            error: Exception to raise from compress
        """
        self.name = name
        self.credential_flag = credential_flag
        self.result = result
        self.available = available
        self.error = error
        self.calls: list[CompressionRequest] = []
        self.availability_checks = 0

    def is_configured(self, config: CompressorConfig) -> bool:
        return getattr(config, self.credential_flag)

    def is_available(self) -> bool:
        self.availability_checks += 1
        return self.available

    async def compress(self, request: CompressionRequest, config: CompressorConfig) -> str:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        return request.content if self.result is None else self.result


def make_config(oauth: bool = False, bedrock: bool = False, **kwargs) -> CompressorConfig:
    """Build a config with the requested credentials set."""
    return CompressorConfig(
        oauth_token="oauth-test-token" if oauth else None,
        bedrock_bearer_token="bedrock-test-token" if bedrock else None,
        **kwargs,
    )


@pytest.fixture
def oauth_stub() -> StubProvider:
    """OAuth stub that echoes content (no compression)."""
    return StubProvider("oauth", "has_oauth")


@pytest.fixture
def bedrock_stub() -> StubProvider:
    """Bedrock stub that echoes content (no compression)."""
    return StubProvider("bedrock", "has_bedrock")


@pytest.fixture
def config_factory():
    """Return a builder for configs with the requested credentials set."""
    return make_config


@pytest.fixture
def stub_factory():
    """Return the StubProvider class for building custom stubs."""
    return StubProvider
