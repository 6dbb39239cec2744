import asyncio
import os
import sys
from typing import Any

import click
import structlog

from snapshot_compressor.availability import is_compression_available
from snapshot_compressor.compressor import SnapshotCompressor
from snapshot_compressor.config import (
    BEDROCK_TOKEN_ENV,
    OAUTH_TOKEN_ENV,
    CompressorConfig,
    ConfigurationError,
    env_var_for_field,
    load_config,
    load_env_file,
)
from snapshot_compressor.configure_logging import configure_logging
from snapshot_compressor.models import CompressionRequest
from snapshot_compressor.providers.bedrock import BedrockProvider
from snapshot_compressor.providers.oauth import ClaudeAgentProvider
from snapshot_compressor.token_counter import TokenCounter

logger = structlog.get_logger(__name__)

# Credentials are only read from the environment (or a .env file), never from argv
CLI_EXCLUDED_FIELDS = {"oauth_token", "bedrock_bearer_token"}

CHOICE_TYPES = {
    "log_level": click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    "encoding": click.Choice(
        ["o200k_base", "cl100k_base", "p50k_base", "r50k_base"], case_sensitive=False
    ),
}

CLI_FIELDS = [name for name in CompressorConfig.model_fields if name not in CLI_EXCLUDED_FIELDS]


def _env_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def _field_option(field_name: str):
    """Build the click option for one config field."""
    field_info = CompressorConfig.model_fields[field_name]
    param_type = CHOICE_TYPES.get(field_name)
    if param_type is None:
        param_type = field_info.annotation if field_info.annotation in (bool, int) else str

    return click.option(
        f"--{field_name.replace('_', '-')}",
        field_name,
        type=param_type,
        default=None,
        help=(
            f"{field_info.description} "
            f"[default: {_env_value(field_info.default)}; env: {env_var_for_field(field_name)}]"
        ),
    )


def config_options(func):
    """Add an option for every non-credential config field.

    Unset options stay None, so the environment, then the .env file, then the
    field default decide the value.
    """
    for field_name in reversed(CLI_FIELDS):
        func = _field_option(field_name)(func)
    return func


@click.group()
@config_options
@click.pass_context
def main(ctx: click.Context, **kwargs: Any) -> None:
    """Compress large browser snapshots with a remote model."""
    options_used = {name: value for name, value in kwargs.items() if value is not None}
    for field_name, value in options_used.items():
        os.environ[env_var_for_field(field_name)] = _env_value(value)

    env_path = load_env_file()

    try:
        config = load_config()
    except ConfigurationError as e:
        raise click.ClickException(f"Configuration error: {e}") from e

    configure_logging(
        log_level=config.log_level,
        rich_tracebacks=config.rich_tracebacks,
        colored_logs=config.colored_logs,
    )
    logger.debug(
        "Configuration loaded",
        env_file=env_path,
        cli_options=sorted(options_used) or None,
        oauth_configured=config.has_oauth,
        bedrock_configured=config.has_bedrock,
        token_threshold=config.token_threshold,
    )

    ctx.obj = config


@main.command(name="compress")
@click.argument("input_file", type=click.File("r"), default="-")
@click.option("--purpose", default=None, help="What the caller is looking for in the content.")
@click.option("--model-id", default=None, help="Bedrock model identifier for this request.")
@click.option("--region", default=None, help="AWS region for this request.")
@click.option(
    "-o",
    "--output",
    type=click.File("w"),
    default="-",
    help="Where to write the result (default: stdout).",
)
@click.option("--stats", is_flag=True, help="Print the pipeline path and token counts to stderr.")
@click.pass_obj
def compress_command(
    config: CompressorConfig,
    input_file,
    purpose: str | None,
    model_id: str | None,
    region: str | None,
    output,
    stats: bool,
) -> None:
    """Compress INPUT_FILE (or stdin) and write the result."""
    request = CompressionRequest(
        content=input_file.read(),
        purpose=purpose,
        model_id=model_id,
        region=region,
    )

    compressor = SnapshotCompressor(config=config)
    report = asyncio.run(compressor.compress_with_details(request))

    output.write(report.content)

    if stats:
        counter = TokenCounter(config.encoding)
        original = counter.count_tokens(request.content)
        result = counter.count_tokens(report.content)
        saved = original - result
        percentage = (saved / original * 100) if original > 0 else 0.0
        click.echo(
            f"path={report.path.value} original_tokens={original} "
            f"result_tokens={result} saved={percentage:.1f}%",
            err=True,
        )


@main.command(name="check")
@click.pass_obj
def check_command(config: CompressorConfig) -> None:
    """Report whether compression can be attempted. Exits 1 if not."""
    oauth = ClaudeAgentProvider()
    bedrock = BedrockProvider()

    available = asyncio.run(
        is_compression_available(config, oauth_provider=oauth, bedrock_provider=bedrock)
    )
    if not available:
        click.echo("Compression unavailable: no configured provider has its SDK installed")
        click.echo(f"  OAuth:   set {OAUTH_TOKEN_ENV} and install claude-agent-sdk")
        click.echo(f"  Bedrock: set {BEDROCK_TOKEN_ENV} and install boto3")
        sys.exit(1)

    for provider in (oauth, bedrock):
        ready = provider.is_configured(config) and provider.is_available()
        click.echo(f"{provider.name}: {'ready' if ready else 'not ready'}")


if __name__ == "__main__":
    main()
