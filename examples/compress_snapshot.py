"""Compress a sample browser snapshot with whichever provider is configured.

Option 1 (OAuth):
    pip install "snapshot-compressor[oauth]"
    export CLAUDE_CODE_OAUTH_TOKEN=...   # from `claude setup-token`

Option 2 (AWS Bedrock):
    pip install "snapshot-compressor[bedrock]"
    export AWS_BEARER_TOKEN_BEDROCK=...

Then run:
    python examples/compress_snapshot.py

Content under ~4000 estimated tokens is returned without compression, so the
sample below is repeated until it crosses that threshold.
"""

import asyncio

import structlog

from snapshot_compressor import (
    CompressionRequest,
    SnapshotCompressor,
    is_compression_available,
    load_config,
)
from snapshot_compressor.config import load_env_file
from snapshot_compressor.configure_logging import configure_logging

logger = structlog.get_logger(__name__)

SAMPLE_SNAPSHOT = """
### Page state
- Page URL: https://example.com/products
- Page Title: Example Products
- Page Snapshot:
```yaml
- banner [ref=e1]:
  - link "Home" [ref=e2]
  - button "Accept cookies" [ref=e3]
- main [ref=e4]:
  - heading "Products" [level=1] [ref=e5]
  - article [ref=e6]:
    - heading "Widget Pro" [level=2] [ref=e7]
    - text: $49.99
    - button "Add to cart" [ref=e8]
- contentinfo [ref=e9]:
  - textbox "Subscribe to our newsletter" [ref=e10]
```
"""


async def main() -> None:
    config = load_config()

    if not await is_compression_available(config):
        logger.warning("No compression provider available; see the module docstring")
        return

    provider = "OAuth (Claude Agent SDK)" if config.has_oauth else "AWS Bedrock"
    logger.info("Compression available", provider=provider)

    content = SAMPLE_SNAPSHOT * 60
    report = await SnapshotCompressor(config=config).compress_with_details(
        CompressionRequest(content=content, purpose="product names and prices")
    )

    logger.info(
        "Compression result",
        path=report.path.value,
        original_tokens=report.original_tokens,
        result_tokens=report.result_tokens,
    )
    print(report.content)


if __name__ == "__main__":
    load_env_file()
    configure_logging(log_level="INFO")
    asyncio.run(main())
