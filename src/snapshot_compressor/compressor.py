"""Orchestrates provider selection and fallback for snapshot compression."""

import structlog

from snapshot_compressor.config import CompressorConfig, load_config
from snapshot_compressor.models import CompressionPath, CompressionReport, CompressionRequest
from snapshot_compressor.providers.base import BaseCompressionProvider
from snapshot_compressor.providers.bedrock import BedrockProvider
from snapshot_compressor.providers.oauth import ClaudeAgentProvider
from snapshot_compressor.token_counter import estimate_tokens

logger = structlog.get_logger(__name__)


class SnapshotCompressor:
    """
    Compress large browser output through a remote model.

    Pipeline:
    1. Estimate tokens; content under the threshold is returned as-is
    2. Try the OAuth provider if its credential is set
    3. If OAuth produced nothing different, try Bedrock if its credential is set
    4. Otherwise return the original content

    ``compress`` never raises. A provider answer identical to the input is
    treated the same as a failure and falls through to the next provider.
    """

    def __init__(
        self,
        config: CompressorConfig | None = None,
        oauth_provider: BaseCompressionProvider | None = None,
        bedrock_provider: BaseCompressionProvider | None = None,
    ):
        """
        Initialize the compressor.

        Args:
            config: Resolved configuration. If None, configuration is read from
                the environment on every call, with invalid values replaced by
                their defaults.
            oauth_provider: Primary provider (defaults to ClaudeAgentProvider)
            bedrock_provider: Secondary provider (defaults to BedrockProvider)
        """
        self._config = config
        self.oauth_provider = oauth_provider or ClaudeAgentProvider()
        self.bedrock_provider = bedrock_provider or BedrockProvider()

    def _resolve_config(self) -> CompressorConfig:
        if self._config is not None:
            return self._config
        return load_config(lenient=True)

    async def _run(self, request: CompressionRequest) -> tuple[str, CompressionPath]:
        content = request.content
        config = self._resolve_config()

        estimated_tokens = estimate_tokens(content)
        if estimated_tokens < config.token_threshold:
            logger.debug(
                "Content is small, skipping compression",
                estimated_tokens=estimated_tokens,
                threshold=config.token_threshold,
            )
            return content, CompressionPath.SKIPPED

        logger.debug("Content exceeds threshold, compressing", estimated_tokens=estimated_tokens)

        attempted = False

        if self.oauth_provider.is_configured(config):
            logger.debug("Using OAuth compression provider")
            attempted = True
            result = await self.oauth_provider.compress(request, config)
            if result != content:
                return result, CompressionPath.COMPRESSED_OAUTH

        if self.bedrock_provider.is_configured(config):
            logger.debug("Falling back to Bedrock compression provider")
            result = await self.bedrock_provider.compress(request, config)
            if result != content:
                return result, CompressionPath.COMPRESSED_BEDROCK
            return result, CompressionPath.UNCHANGED

        if attempted:
            return content, CompressionPath.UNCHANGED

        logger.debug("No compression provider available, returning original content")
        return content, CompressionPath.NO_PROVIDER

    async def compress_with_details(self, request: CompressionRequest) -> CompressionReport:
        """
        Compress content and report which branch produced the result.

        Args:
            request: The compression request

        Returns:
            CompressionReport whose ``content`` is what ``compress`` returns
        """
        content = request.content
        try:
            result, path = await self._run(request)
        except Exception as e:
            logger.error("Compression pipeline failed, returning original content", error=str(e))
            result, path = content, CompressionPath.UNCHANGED

        original_tokens = estimate_tokens(content)
        result_tokens = estimate_tokens(result)
        if path != CompressionPath.SKIPPED:
            logger.info(
                "Compression finished",
                path=path.value,
                original_tokens=original_tokens,
                result_tokens=result_tokens,
            )

        return CompressionReport(
            content=result,
            path=path,
            original_tokens=original_tokens,
            result_tokens=result_tokens,
            was_compressed=result != content,
        )

    async def compress(self, request: CompressionRequest) -> str:
        """
        Compress content, returning the original content on any skip or failure.

        Args:
            request: The compression request

        Returns:
            Compressed text or ``request.content`` unchanged
        """
        report = await self.compress_with_details(request)
        return report.content


async def compress(
    content: str,
    purpose: str | None = None,
    model_id: str | None = None,
    region: str | None = None,
    config: CompressorConfig | None = None,
) -> str:
    """Compress content with the default providers. Never raises."""
    request = CompressionRequest(
        content=content, purpose=purpose, model_id=model_id, region=region
    )
    return await SnapshotCompressor(config=config).compress(request)
