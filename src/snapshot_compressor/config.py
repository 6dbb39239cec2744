"""Configuration validation and management for the snapshot compressor."""

import os
from typing import Any, Literal

import structlog
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

logger = structlog.get_logger(__name__)

OAUTH_TOKEN_ENV = "CLAUDE_CODE_OAUTH_TOKEN"
BEDROCK_TOKEN_ENV = "AWS_BEARER_TOKEN_BEDROCK"

DEFAULT_BEDROCK_MODEL_ID = "global.anthropic.claude-haiku-4-5-20251001-v1:0"
DEFAULT_BEDROCK_REGION = "us-east-1"


class ConfigurationError(Exception):
    """Exception raised for configuration validation errors."""

    pass


class CompressorConfig(BaseModel):
    """Configuration schema for the snapshot compressor with validation."""

    model_config = ConfigDict(frozen=True)

    # Provider credentials
    oauth_token: SecretStr | None = Field(
        default=None,
        description="OAuth token for the Claude Agent SDK provider",
    )
    bedrock_bearer_token: SecretStr | None = Field(
        default=None,
        description="Bearer token for the AWS Bedrock provider",
    )

    # Compression configuration
    token_threshold: int = Field(
        default=4000,
        ge=1,
        le=1_000_000,
        description="Estimated token count below which content is returned uncompressed",
    )
    bedrock_model_id: str = Field(
        default=DEFAULT_BEDROCK_MODEL_ID,
        min_length=1,
        description="Bedrock model identifier used when a request does not override it",
    )
    bedrock_region: str = Field(
        default=DEFAULT_BEDROCK_REGION,
        min_length=1,
        description="AWS region used when a request does not override it",
    )
    max_output_tokens: int = Field(
        default=10000,
        ge=1,
        le=64000,
        description="Maximum output tokens requested from Bedrock (1-64000)",
    )

    # Token counting configuration
    encoding: Literal["o200k_base", "cl100k_base", "p50k_base", "r50k_base"] = Field(
        default="cl100k_base",
        description="Tiktoken encoding used for reporting token counts",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    colored_logs: bool = Field(default=True, description="Whether to enable colored logs")
    rich_tracebacks: bool = Field(default=False, description="Whether to enable rich tracebacks")

    @field_validator("oauth_token", "bedrock_bearer_token", mode="before")
    @classmethod
    def empty_token_is_absent(cls, v):
        """Treat empty or whitespace-only credentials as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Normalize log level to uppercase for case-insensitive matching."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("encoding", mode="before")
    @classmethod
    def normalize_encoding(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def has_oauth(self) -> bool:
        """Whether the OAuth provider credential is configured."""
        return self.oauth_token is not None

    @property
    def has_bedrock(self) -> bool:
        """Whether the Bedrock provider credential is configured."""
        return self.bedrock_bearer_token is not None


# Environment variable name overrides for fields that don't follow FIELD_NAME.upper().
# Display settings are prefixed with SNAPSHOT_COMPRESSOR_.
ENV_VAR_OVERRIDES = {
    "oauth_token": OAUTH_TOKEN_ENV,
    "bedrock_bearer_token": BEDROCK_TOKEN_ENV,
    "token_threshold": "COMPRESSION_TOKEN_THRESHOLD",
    "max_output_tokens": "COMPRESSION_MAX_OUTPUT_TOKENS",
    "encoding": "SNAPSHOT_COMPRESSOR_ENCODING",
    "log_level": "SNAPSHOT_COMPRESSOR_LOG_LEVEL",
    "colored_logs": "SNAPSHOT_COMPRESSOR_COLORED_LOGS",
    "rich_tracebacks": "SNAPSHOT_COMPRESSOR_RICH_TRACEBACKS",
}


def env_var_for_field(field_name: str) -> str:
    """Return the environment variable that configures a field."""
    return ENV_VAR_OVERRIDES.get(field_name, field_name.upper())


def load_env_file() -> str | None:
    """Load the nearest ``.env`` file from the working directory or its ancestors.

    Variables that are already set in the environment are left untouched.

    Returns:
        Path of the loaded file, or None if no file was found
    """
    env_path = find_dotenv(usecwd=True)
    if not env_path:
        return None

    load_dotenv(env_path, override=False)
    return env_path


def _populate_config_from_env() -> dict[str, Any]:
    """Populate configuration dictionary from environment variables."""
    config_data = {}

    # Only add environment variables to config_data if they are set
    for field_name in CompressorConfig.model_fields:
        value = os.getenv(env_var_for_field(field_name))
        if value is not None:
            config_data[field_name] = value

    return config_data


def load_config(lenient: bool = False) -> CompressorConfig:
    """Load and validate configuration from environment variables.

    Values that are not set fall back to the Pydantic Field defaults.

    Args:
        lenient: Replace invalid values with their defaults and log a warning
            instead of raising. Credentials always validate, so a bad setting
            can never switch a configured provider off.

    Raises:
        ConfigurationError: If a value is invalid and ``lenient`` is False
    """
    config_data = _populate_config_from_env()
    try:
        return CompressorConfig(**config_data)
    except ValidationError as e:
        if not lenient:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        invalid_fields = {error["loc"][0] for error in e.errors() if error["loc"]}
        logger.warning(
            "Ignoring invalid configuration values",
            env_vars=sorted(env_var_for_field(name) for name in invalid_fields),
        )
        valid_data = {k: v for k, v in config_data.items() if k not in invalid_fields}
        return CompressorConfig(**valid_data)
