"""
Shared utilities for Product Describer.

Submodules:
    clients:     Async API client creation (OpenAI, Azure OpenAI)
    records:     Product record and generation result types
    datasource:  CSV dataset loading
    config:      YAML run configuration
    misc:        Internal utilities (internal)
    environment: Environment configuration (internal)
"""

# Import modules to export
from . import clients     # Client creation utilities
from . import records     # Record types and column names
from . import datasource  # Dataset loading
from . import config      # Run configuration

__all__ = [
    'clients',      # pd.utils.clients.*
    'records',      # pd.utils.records.*
    'datasource',   # pd.utils.datasource.*
    'config',       # pd.utils.config.*
]

# Internal modules not exported:
# - misc (internal utilities)
# - environment (internal environment setup)
