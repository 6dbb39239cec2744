"""Compress large browser snapshots with a remote model before returning them to an LLM."""

from snapshot_compressor.availability import is_compression_available
from snapshot_compressor.compressor import SnapshotCompressor, compress
from snapshot_compressor.config import CompressorConfig, ConfigurationError, load_config
from snapshot_compressor.models import CompressionPath, CompressionReport, CompressionRequest
from snapshot_compressor.token_counter import TokenCounter, estimate_tokens

__all__ = [
    "SnapshotCompressor",
    "compress",
    "is_compression_available",
    "CompressorConfig",
    "ConfigurationError",
    "load_config",
    "CompressionPath",
    "CompressionReport",
    "CompressionRequest",
    "TokenCounter",
    "estimate_tokens",
]
