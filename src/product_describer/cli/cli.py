# -*- coding: utf-8 -*-

import logging

import click

from ..core.exceptions import ProductDescriberError
from ..core.batching.manager import ProductDescriptionManager
from ..core.batching.summary import save_batch_summary
from ..core.utils.config import write_default_config
from ..core.utils.misc import mask_path
from .utils import (
    setup_logging,
    _validate_positive_integer_callback,
    _validate_json_path_callback,
    _resolve_run_config,
    _pricing_table,
    _create_client,
)


input_argument = click.argument(
    'input_file', type=click.Path(exists=True, dir_okay=False)
)
output_argument = click.argument(
    'output_file', type=click.Path(dir_okay=False)
)
config_option = click.option(
    '-c', '--config', 'config_file', type=click.Path(exists=True, dir_okay=False), default=None,
    help=('YAML configuration file. Defaults to the user config file '
          '(see "prodesc init-config"), or built-in defaults.')
)
model_option = click.option(
    '-m', '--model', type=str, default=None,
    help='OpenAI model (or Azure deployment) to use. Default is gpt-4o-mini.'
)
max_tokens_option = click.option(
    '--max-tokens', type=int, default=None,
    callback=_validate_positive_integer_callback,
    help='Maximum number of completion tokens per product. Default is 250.'
)


@click.group()
@click.option(
    '-v', '--verbose', is_flag=True,
    help='Enable verbose (DEBUG) logging'
)
@click.option(
    '-q', '--quiet', is_flag=True,
    help='Only show warnings and errors'
)
@click.pass_context
def cli(ctx, verbose, quiet):
    """
    Product Describer CLI - Generate AI product descriptions for a product CSV.

    The output CSV is also the resume source: running the same command again
    skips every product that already has a description.

    \b
    Ensure you have the appropriate API keys set in your environment variables:
    - OPENAI_API_KEY (for OpenAI)
    - AZURE_OPENAI_API_KEY, AZURE_OPENAI_ENDPOINT (for Azure OpenAI)
    """
    setup_logging(verbose=verbose, quiet=quiet)
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose


@cli.command()
@input_argument
@output_argument
@config_option
@model_option
@max_tokens_option
@click.option(
    '-n', '--concurrency', type=int, default=None,
    callback=_validate_positive_integer_callback,
    help='Maximum number of generation calls in flight. Default is 2.'
)
@click.option(
    '--azure/--no-azure', default=None,
    help='Use Azure OpenAI API instead of OpenAI API.'
)
@click.option(
    '--retry-errors/--no-retry-errors', default=None,
    help='Regenerate rows a previous run marked with "ERROR: ...".'
)
@click.option(
    '--summary-file', type=click.Path(dir_okay=False), default=None,
    callback=_validate_json_path_callback,
    help='Save the run summary to this JSON file.'
)
@click.option(
    '--progress/--no-progress', default=True,
    help='Show a progress bar.'
)
@click.pass_context
def run(ctx, input_file, output_file, config_file, model, max_tokens,
        concurrency, azure, retry_errors, summary_file, progress):
    """
    Generate descriptions for INPUT_FILE and write them to OUTPUT_FILE.

    \b
    Examples:
        prodesc run products.csv described.csv
        prodesc run products.csv described.csv -m gpt-4o -n 4
    """
    api = None if azure is None else ("AzureOpenAI" if azure else "OpenAI")
    config = _resolve_run_config(
        config_file, model=model, max_tokens=max_tokens, concurrency=concurrency,
        api=api, retry_errors=retry_errors
    )
    client = _create_client(config.api)

    manager = ProductDescriptionManager(
        client=client,
        input_path=input_file,
        output_path=output_file,
        model=config.model,
        max_tokens=config.max_tokens,
        concurrency=config.concurrency,
        brand_phrases=config.brand_phrases,
        retry_errors=config.retry_errors,
        pricing_table=_pricing_table(config),
        show_progress=progress,
    )

    try:
        summary = manager.run()
    except ProductDescriberError as e:
        logging.error(f"Run aborted: {e}")
        raise SystemExit(1)

    if summary_file:
        save_batch_summary(summary, summary_file)


@cli.command()
@input_argument
@output_argument
@config_option
@click.option(
    '--retry-errors/--no-retry-errors', default=None,
    help='Count rows marked with "ERROR: ..." as pending.'
)
def status(input_file, output_file, config_file, retry_errors):
    """Show how many products of INPUT_FILE are already described in OUTPUT_FILE."""
    config = _resolve_run_config(config_file, retry_errors=retry_errors)
    manager = ProductDescriptionManager(
        client=None,
        input_path=input_file,
        output_path=output_file,
        retry_errors=config.retry_errors,
    )
    try:
        counts = manager.status()
    except ProductDescriberError as e:
        logging.error(f"Could not read datasets: {e}")
        raise SystemExit(1)

    logging.info(f"Input products: {counts['input']}")
    logging.info(f"  Done:    {counts['done']} ({counts['errors']} with error markers)")
    logging.info(f"  Pending: {counts['pending']}")


@cli.command()
@input_argument
@output_argument
@config_option
@model_option
@max_tokens_option
def estimate(input_file, output_file, config_file, model, max_tokens):
    """
    Estimate the cost of describing the pending products of INPUT_FILE.

    Completion tokens are counted at the maximum per product, so the figure
    is an upper bound. Image tokens are not included.
    """
    config = _resolve_run_config(config_file, model=model, max_tokens=max_tokens)
    manager = ProductDescriptionManager(
        client=None,
        input_path=input_file,
        output_path=output_file,
        model=config.model,
        max_tokens=config.max_tokens,
        brand_phrases=config.brand_phrases,
        retry_errors=config.retry_errors,
        pricing_table=_pricing_table(config),
    )
    try:
        report = manager.estimate()
    except ProductDescriberError as e:
        logging.error(f"Error estimating cost for model '{config.model}': {e}")
        raise SystemExit(1)

    logging.info(f"Estimated tokens: {report.prompt_tokens} prompt, {report.completion_tokens} completion (max)")
    logging.info(f"Estimated cost for model {config.model}: ${report.total_cost:,.4f}")


@cli.command()
@click.argument('config_file', type=click.Path(dir_okay=False), required=False)
@click.option(
    '--force', is_flag=True, default=False,
    help='Overwrite an existing config file.'
)
def init_config(config_file, force):
    """Write a default YAML configuration (to the user config file by default)."""
    try:
        path = write_default_config(config_file, force=force)
    except FileExistsError as e:
        logging.error(f"{e}. Use --force to overwrite it.")
        raise SystemExit(1)
    logging.info(f"Edit {mask_path(path)} to change the default run settings.")
