"""Remote compression providers."""

from snapshot_compressor.providers.base import BaseCompressionProvider
from snapshot_compressor.providers.bedrock import BedrockProvider
from snapshot_compressor.providers.oauth import ClaudeAgentProvider

__all__ = [
    "BaseCompressionProvider",
    "BedrockProvider",
    "ClaudeAgentProvider",
]
