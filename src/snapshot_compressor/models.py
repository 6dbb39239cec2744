"""Pydantic models for compression requests and results."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CompressionPath(str, Enum):
    """Terminal state reached by a single compression call."""

    SKIPPED = "skipped"
    COMPRESSED_OAUTH = "compressed_oauth"
    COMPRESSED_BEDROCK = "compressed_bedrock"
    UNCHANGED = "unchanged"
    NO_PROVIDER = "no_provider"


class CompressionRequest(BaseModel):
    """A request to compress a block of browser output."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="The raw content to compress")
    purpose: str | None = Field(
        default=None,
        description="Optional hint describing what the caller is looking for",
    )
    model_id: str | None = Field(
        default=None, description="Bedrock model identifier override"
    )
    region: str | None = Field(default=None, description="Bedrock region override")


class CompressionReport(BaseModel):
    """Detailed outcome of a compression call."""

    content: str = Field(description="Compressed content, or the original content")
    path: CompressionPath = Field(description="Which branch of the pipeline produced content")
    original_tokens: int = Field(description="Estimated tokens of the original content")
    result_tokens: int = Field(description="Estimated tokens of the returned content")
    was_compressed: bool = Field(description="Whether the returned content differs from input")
