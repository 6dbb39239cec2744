"""Compression provider backed by the Claude Agent SDK (OAuth)."""

from collections.abc import AsyncIterator
from types import ModuleType
from typing import Any

import structlog

from snapshot_compressor.config import OAUTH_TOKEN_ENV, CompressorConfig
from snapshot_compressor.models import CompressionRequest
from snapshot_compressor.prompts import build_prompt
from snapshot_compressor.providers.base import BaseCompressionProvider

logger = structlog.get_logger(__name__)


class ClaudeAgentProvider(BaseCompressionProvider):
    """
    Compress content through a Claude Agent SDK session.

    The SDK streams messages; only the first assistant message that starts
    with a text block is used. The stream is closed as soon as it is found,
    without waiting for the final result message.
    """

    name = "oauth"
    sdk_module = "claude_agent_sdk"

    def is_configured(self, config: CompressorConfig) -> bool:
        return config.has_oauth

    def _build_options(self, sdk: ModuleType, config: CompressorConfig) -> Any:
        """Build single-turn, tool-less agent options carrying the OAuth token."""
        token = config.oauth_token.get_secret_value() if config.oauth_token else ""
        return sdk.ClaudeAgentOptions(
            max_turns=1,
            allowed_tools=[],
            env={OAUTH_TOKEN_ENV: token},
        )

    async def _first_text(self, sdk: ModuleType, stream: AsyncIterator[Any]) -> str | None:
        """Consume the stream until the first assistant text, then close it."""
        try:
            async for message in stream:
                if not isinstance(message, sdk.AssistantMessage):
                    continue
                blocks = message.content or []
                if blocks and isinstance(blocks[0], sdk.TextBlock):
                    return blocks[0].text or ""
            return None
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                try:
                    await aclose()
                except Exception as e:
                    logger.debug("Error closing Claude Agent SDK stream", error=str(e))

    async def compress(self, request: CompressionRequest, config: CompressorConfig) -> str:
        content = request.content

        if not self.is_configured(config):
            logger.debug(f"{OAUTH_TOKEN_ENV} not set, skipping OAuth compression")
            return content

        try:
            sdk = self._load_sdk()
            query = getattr(sdk, "query", None)
            if query is None:
                logger.debug("Claude Agent SDK query function not available")
                return content

            logger.debug(
                "Compressing content with Claude Agent SDK",
                purpose=request.purpose or "none",
                original_length=len(content),
            )
            stream = query(
                prompt=build_prompt(content, request.purpose),
                options=self._build_options(sdk, config),
            )
            compressed = await self._first_text(sdk, stream)

            if compressed:
                logger.debug(
                    "OAuth compression complete",
                    original_length=len(content),
                    compressed_length=len(compressed),
                )
                return compressed

            logger.debug("No valid response from Claude Agent SDK, returning original content")
            return content

        except Exception as e:
            logger.warning("OAuth compression failed", error=str(e))
            return content
