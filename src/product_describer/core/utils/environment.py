# -*- coding: utf-8 -*-

"""
API credentials from the environment.

Credentials come from the process environment, optionally seeded from a
`.env.local` or `.env` file in the working directory. Variables that are
already set are never overridden by a file.
"""

import os
import logging
from pathlib import Path
from typing import List, Optional

import dotenv

from .misc import mask_path


ENV_FILES = ('.env.local', '.env')

REQUIRED_ENV_VARS = {
    'OpenAI': ('OPENAI_API_KEY',),
    'AzureOpenAI': ('AZURE_OPENAI_API_KEY', 'AZURE_OPENAI_ENDPOINT'),
}


def find_env_file(search_dir=None) -> Optional[Path]:
    """Return the first of ENV_FILES present in `search_dir` (default: cwd)."""
    search_dir = Path(search_dir) if search_dir is not None else Path.cwd()
    for name in ENV_FILES:
        candidate = search_dir / name
        if candidate.is_file():
            return candidate
    return None


def validate_required_env_vars(api_type: str = "OpenAI") -> List[str]:
    """
    Names of the credentials `api_type` needs that are unset or empty.

    Raises:
        ValueError: If `api_type` is not 'OpenAI' or 'AzureOpenAI'.
    """
    try:
        required = REQUIRED_ENV_VARS[api_type]
    except KeyError:
        raise ValueError(f"Unknown API type: {api_type}") from None
    return [name for name in required if not os.getenv(name)]


def setup_environment(env_file=None) -> Optional[Path]:
    """
    Load credentials from `env_file`, or from the first .env file in the cwd.

    Returns:
        Path of the file loaded, or None when there was nothing to load.
    """
    env_path = Path(env_file) if env_file is not None else find_env_file()
    if env_path is None:
        logging.debug(f"No {' or '.join(ENV_FILES)} file in the working directory, using the system environment")
        return None
    if not env_path.is_file():
        logging.warning(f"Environment file not found: {mask_path(env_path)}")
        return None

    dotenv.load_dotenv(env_path, override=False)
    logging.debug(f"Loaded environment from {mask_path(env_path)}")
    return env_path
