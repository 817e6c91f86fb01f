"""
Core functionality for Product Describer.

Architecture:
    batching/   - Description generation runs
      ├── files/     - Output dataset writer
      ├── pricing/   - Usage accounting and cost
      ├── retry/     - Backoff retry
      ├── generator/ - Chat completion requests
      ├── resume/    - Resume index
      ├── scheduler/ - Bounded worker pool
      └── manager/   - High-level run orchestration

    utils/      - Shared utilities and infrastructure
      ├── clients/    - API client creation (OpenAI, Azure)
      ├── records/    - Record types
      ├── datasource/ - CSV loading
      ├── config/     - Run configuration
      ├── misc/       - General utilities (internal)
      └── environment/ - Environment setup (internal)

    exceptions  - Error hierarchy
"""

# Core module exports
from . import exceptions
from . import batching
from . import utils

# High-level manager interface
from .batching.manager import ProductDescriptionManager

__all__ = [
    'exceptions',  # Error hierarchy
    'batching',    # Description generation runs
    'utils',       # Essential utilities and infrastructure
    'ProductDescriptionManager',  # High-level orchestration interface
]
