"""Capability check for snapshot compression."""

import structlog

from snapshot_compressor.config import CompressorConfig, load_config
from snapshot_compressor.providers.base import BaseCompressionProvider
from snapshot_compressor.providers.bedrock import BedrockProvider
from snapshot_compressor.providers.oauth import ClaudeAgentProvider

logger = structlog.get_logger(__name__)


async def is_compression_available(
    config: CompressorConfig | None = None,
    oauth_provider: BaseCompressionProvider | None = None,
    bedrock_provider: BaseCompressionProvider | None = None,
) -> bool:
    """
    Check whether any compression provider can be attempted.

    Providers are checked in the same order the compressor tries them: OAuth
    first, then Bedrock. A provider counts as usable when its credential is
    set and its SDK imports. No client is created and nothing is sent.

    Args:
        config: Resolved configuration; read from the environment if omitted
        oauth_provider: OAuth provider override
        bedrock_provider: Bedrock provider override

    Returns:
        True if at least one provider is usable
    """
    if config is None:
        config = load_config(lenient=True)

    for provider in (
        oauth_provider or ClaudeAgentProvider(),
        bedrock_provider or BedrockProvider(),
    ):
        if provider.is_configured(config) and provider.is_available():
            logger.debug("Compression provider available", provider=provider.name)
            return True

    return False
