"""
Product Describer - AI product descriptions for catalog CSV files

Reads a product CSV (Shopify export layout), asks an OpenAI model to write a
description for every product (sending the product image when there is one)
and writes the augmented rows to an output CSV. The output file is also the
resume source: rerunning the same command skips every product that already
has a description, so an interrupted run never pays twice for the same row.

Key Features:
    - Resumable runs keyed by the product handle
    - Bounded concurrency with exponential-backoff retries
    - Per-record error isolation (failed rows get an "ERROR: ..." marker)
    - Token usage accounting and cost estimation
    - OpenAI and Azure OpenAI support

Example Usage:

    High-Level Interface:
        import product_describer as pd

        manager = pd.ProductDescriptionManager(
            client=pd.utils.clients.create_openai_client(),
            input_path='./products.csv',
            output_path='./products_described.csv',
            model='gpt-4o-mini',
            concurrency=2,
        )
        summary = manager.run()
        print(summary.cost.total_cost)

    CLI Usage:
        $ prodesc run products.csv products_described.csv --model gpt-4o-mini
        $ prodesc status products.csv products_described.csv
        $ prodesc estimate products.csv products_described.csv

Environment Setup:
    Required environment variables:
    - OPENAI_API_KEY (for OpenAI API)
    - AZURE_OPENAI_API_KEY + AZURE_OPENAI_ENDPOINT (for Azure OpenAI)

    These can be set via .env or .env.local in the current working directory.
"""

__version__ = "0.1.0"

# Load environment on package import
from .core.utils.environment import setup_environment
setup_environment()

# Export core API modules
from . import core
batching = core.batching
utils = core.utils
exceptions = core.exceptions
ProductDescriptionManager = core.ProductDescriptionManager

__all__ = [
    '__version__',
    'batching',        # pd.batching.*
    'utils',           # pd.utils.*
    'exceptions',      # pd.exceptions.*
    'ProductDescriptionManager',  # pd.ProductDescriptionManager()
]

# Clean up namespace
del setup_environment, core
