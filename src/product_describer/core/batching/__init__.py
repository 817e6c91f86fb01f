"""
Batch description generation for Product Describer.

Submodules:
    files:     Output dataset writer
    pricing:   Pricing table, usage accounting and cost estimation
    retry:     Bounded exponential-backoff retry
    prompts:   Prompt template for product descriptions
    generator: Chat completion requests for one record
    resume:    Index of records finished by a previous run
    scheduler: Concurrency-bounded per-record pipeline
    summary:   Run summary reporting
    manager:   High-level run orchestration

Example Usage:
    import product_describer as pd

    client = pd.utils.clients.create_openai_client()
    manager = pd.batching.manager.ProductDescriptionManager(
        client=client,
        input_path='./products.csv',
        output_path='./products_described.csv',
    )
    summary = manager.run()
"""

# Import submodules (not individual functions)
from . import files
from . import pricing
from . import retry
from . import prompts
from . import generator
from . import resume
from . import scheduler
from . import summary
from . import manager

__all__ = [
    'files',      # pd.batching.files.*
    'pricing',    # pd.batching.pricing.*
    'retry',      # pd.batching.retry.*
    'prompts',    # pd.batching.prompts.*
    'generator',  # pd.batching.generator.*
    'resume',     # pd.batching.resume.*
    'scheduler',  # pd.batching.scheduler.*
    'summary',    # pd.batching.summary.*
    'manager',    # pd.batching.manager.*
]
