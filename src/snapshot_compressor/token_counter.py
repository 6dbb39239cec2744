"""Token estimation and counting for snapshot content."""

import math

import structlog
import tiktoken

logger = structlog.get_logger(__name__)

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """
    Estimate the number of tokens in a text string.

    Uses a simple character-based estimation: roughly 4 characters per token,
    rounded up. For code or ideographic text this over-estimates, which only
    makes compression more likely to be attempted.

    Args:
        text: The text to estimate tokens for

    Returns:
        Estimated token count
    """
    return math.ceil(len(text) / CHARS_PER_TOKEN)


class TokenCounter:
    """Count tokens with a tiktoken encoding, for the CLI's ``--stats`` report.

    Compression gating never uses this class. If the encoding cannot be
    loaded, counts come from ``estimate_tokens`` instead.
    """

    def __init__(self, encoding_name: str = "cl100k_base"):
        self.encoding_name = encoding_name
        self._encoding: tiktoken.Encoding | None = None
        self._resolved = False

    @property
    def encoding(self) -> tiktoken.Encoding | None:
        """The loaded encoding, or None when counting by estimate."""
        if not self._resolved:
            self._resolved = True
            try:
                self._encoding = tiktoken.get_encoding(self.encoding_name)
            except Exception as e:
                logger.warning(
                    "tiktoken encoding unavailable, estimating token counts",
                    encoding_name=self.encoding_name,
                    error=str(e),
                )
        return self._encoding

    def count_tokens(self, text: str) -> int:
        encoding = self.encoding
        if encoding is None:
            return estimate_tokens(text)
        return len(encoding.encode(text))

    def is_using_estimation(self) -> bool:
        return self.encoding is None
