# -*- coding: utf-8 -*-

import logging

import click

from ..core.exceptions import ConfigurationError
from ..core.batching.pricing import merge_pricing
from ..core.utils.config import RunConfig, load_run_config
from ..core.utils.clients import (
    create_openai_client,
    create_azure_openai_client
)
from ..core.utils.environment import validate_required_env_vars


def setup_logging(verbose=False, quiet=False):
    """Configure logging for CLI execution."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    # Configure root logger
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True  # Override any existing configuration
    )

    # Reduce noise from external libraries in non-verbose mode
    if not verbose:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        logging.getLogger("openai").setLevel(logging.WARNING)
        logging.getLogger("httpx").setLevel(logging.WARNING)

    if verbose:
        logger = logging.getLogger(__name__)
        logger.debug("CLI logging setup completed")


def _validate_positive_integer_callback(ctx, param, value):
    """Validate that the provided value is a positive integer."""
    if value is not None and value <= 0:
        raise click.BadParameter("Value must be a positive integer.")
    return value


def _validate_json_path_callback(ctx, param, value):
    """Validate that the provided path ends with .json."""
    if value is not None and not value.endswith('.json'):
        raise click.BadParameter("Path must end with .json")
    return value


def _resolve_run_config(config_file, **overrides) -> RunConfig:
    """Load the YAML configuration and apply CLI overrides on top."""
    try:
        return load_run_config(config_file).updated(**overrides)
    except ConfigurationError as e:
        logging.error(f"Invalid configuration: {e}")
        raise SystemExit(1)


def _pricing_table(config: RunConfig):
    return merge_pricing(config.pricing)


def _create_client(api):
    """Create the async client for the chosen API, exiting on missing credentials."""
    missing_vars = validate_required_env_vars(api)
    if missing_vars:
        logging.error(f"Missing required environment variables for {api}: {missing_vars}")
        logging.info("Please set these environment variables or create a "
                     ".env file in the working directory with:")
        for var in missing_vars:
            logging.info(f"  {var}=your_key_here")
        raise SystemExit(1)

    try:
        if api == 'AzureOpenAI':
            return create_azure_openai_client()
        return create_openai_client()
    except ConfigurationError as e:
        logging.error(f"Error creating {api} client: {e}")
        raise SystemExit(1)
