"""Base compression provider interface."""

import importlib
from abc import ABC, abstractmethod
from types import ModuleType

import structlog

from snapshot_compressor.config import CompressorConfig
from snapshot_compressor.models import CompressionRequest

logger = structlog.get_logger(__name__)


class BaseCompressionProvider(ABC):
    """
    Base class for remote compression providers.

    A provider translates a ``CompressionRequest`` into one backend call and
    extracts a plain string from the answer. Providers never raise out of
    ``compress``: every failure returns the request content unchanged.

    Each provider depends on an optional SDK that is imported lazily, so a
    missing package is an "unavailable" state rather than an error.
    """

    #: Short provider name used in logs
    name: str = ""

    #: Import name of the optional SDK the provider needs
    sdk_module: str = ""

    @abstractmethod
    def is_configured(self, config: CompressorConfig) -> bool:
        """
        Check whether the provider's credential is present.

        Args:
            config: Resolved compressor configuration

        Returns:
            True if the provider should be attempted
        """
        pass

    @abstractmethod
    async def compress(self, request: CompressionRequest, config: CompressorConfig) -> str:
        """
        Compress the request content.

        Args:
            request: The compression request
            config: Resolved compressor configuration

        Returns:
            Compressed text, or ``request.content`` on any skip or failure
        """
        pass

    def _load_sdk(self) -> ModuleType:
        """Import the provider's optional SDK. Raises ImportError if missing."""
        return importlib.import_module(self.sdk_module)

    def is_available(self) -> bool:
        """
        Check if the provider's optional SDK can be imported.

        Does not construct a client or make any remote call.

        Returns:
            True if the SDK resolves
        """
        try:
            self._load_sdk()
        except ImportError as e:
            logger.debug(
                "Compression provider SDK not installed",
                provider=self.name,
                sdk_module=self.sdk_module,
                error=str(e),
            )
            return False
        return True
