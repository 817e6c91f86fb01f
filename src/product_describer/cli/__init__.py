"""
Command-line interface for Product Describer.

Commands:
    run:         Generate descriptions for a product CSV (resumable)
    status:      Count done / pending products without calling the API
    estimate:    Estimate the cost of the pending products
    init-config: Write a default YAML configuration

Environment Requirements:
    - OPENAI_API_KEY (for OpenAI API)
    - AZURE_OPENAI_API_KEY + AZURE_OPENAI_ENDPOINT (for Azure OpenAI)

Example Workflow:
    # 1. Check what is left to do
    $ prodesc status products.csv described.csv

    # 2. See what it would cost
    $ prodesc estimate products.csv described.csv --model gpt-4o-mini

    # 3. Run (rerun the same command to resume after an interruption)
    $ prodesc run products.csv described.csv --concurrency 2

The CLI provides help for each command:
    $ prodesc --help
    $ prodesc run --help
"""

from .cli import cli

__all__ = [
    'cli',  # Main CLI interface (Click command group)
]
