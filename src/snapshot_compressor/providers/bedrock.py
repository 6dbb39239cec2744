"""Compression provider backed by AWS Bedrock (Converse API)."""

import asyncio
from typing import Any

import structlog

from snapshot_compressor.config import BEDROCK_TOKEN_ENV, CompressorConfig
from snapshot_compressor.models import CompressionRequest
from snapshot_compressor.prompts import COMPRESSION_PROMPT, build_content_message
from snapshot_compressor.providers.base import BaseCompressionProvider

logger = structlog.get_logger(__name__)


def _bearer_auth(token: str):
    """Return a botocore ``before-send`` handler that adds a bearer token."""

    def add_authorization(request, **kwargs):
        request.headers["Authorization"] = f"Bearer {token}"

    return add_authorization


class BedrockProvider(BaseCompressionProvider):
    """
    Compress content with a Bedrock-hosted model.

    Requests authenticate with the configured Bedrock API key sent as a bearer
    token, so an injected config works without ``AWS_BEARER_TOKEN_BEDROCK`` in
    the process environment. The blocking ``converse`` call runs in a worker
    thread.
    """

    name = "bedrock"
    sdk_module = "boto3"

    def is_configured(self, config: CompressorConfig) -> bool:
        return config.has_bedrock

    def _create_client(self, region: str, bearer_token: str) -> Any:
        """
        Create a ``bedrock-runtime`` client that sends ``bearer_token``.

        SigV4 signing is disabled and the token is attached as the
        ``Authorization`` header just before each request goes out.
        """
        boto3 = self._load_sdk()
        from botocore import UNSIGNED
        from botocore.config import Config

        client = boto3.client(
            "bedrock-runtime",
            region_name=region,
            config=Config(signature_version=UNSIGNED),
        )
        client.meta.events.register("before-send.bedrock-runtime", _bearer_auth(bearer_token))
        return client

    def _build_converse_args(
        self, request: CompressionRequest, model_id: str, max_tokens: int
    ) -> dict[str, Any]:
        return {
            "modelId": model_id,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"text": COMPRESSION_PROMPT},
                        {"text": build_content_message(request.content, request.purpose)},
                    ],
                }
            ],
            "inferenceConfig": {"maxTokens": max_tokens},
        }

    @staticmethod
    def _extract_text(response: Any) -> str | None:
        """Return the first text block of the output message, if any."""
        if not isinstance(response, dict):
            return None
        message = (response.get("output") or {}).get("message") or {}
        blocks = message.get("content") or []
        if not blocks or not isinstance(blocks[0], dict):
            return None
        return blocks[0].get("text")

    async def compress(self, request: CompressionRequest, config: CompressorConfig) -> str:
        content = request.content

        if not self.is_configured(config):
            logger.debug(f"{BEDROCK_TOKEN_ENV} not set, skipping Bedrock compression")
            return content

        model_id = request.model_id or config.bedrock_model_id
        region = request.region or config.bedrock_region

        try:
            client = self._create_client(region, config.bedrock_bearer_token.get_secret_value())
            converse_args = self._build_converse_args(request, model_id, config.max_output_tokens)

            logger.debug(
                "Compressing content with Bedrock",
                model_id=model_id,
                region=region,
                purpose=request.purpose or "none",
            )
            response = await asyncio.to_thread(client.converse, **converse_args)

            compressed = self._extract_text(response)
            if compressed:
                logger.debug(
                    "Bedrock compression complete",
                    original_length=len(content),
                    compressed_length=len(compressed),
                )
                return compressed

            logger.debug("No valid response from Bedrock, returning original content")
            return content

        except Exception as e:
            logger.warning("Bedrock compression failed", model_id=model_id, error=str(e))
            return content
