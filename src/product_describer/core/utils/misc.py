# -*- coding: utf-8 -*-

import os
import json
from pathlib import Path

import yaml


#=======================================================================
# YAML / JSON Utilities
#=======================================================================

def read_yaml(path):
    """
    Read a YAML file.

    Args:
        path (str): Path to the YAML file.

    Returns:
        dict or None: Parsed YAML content (None for an empty file).
    """
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f)


def write_yaml(data, path):
    """
    Write a dictionary to a YAML file, keeping key order.

    Args:
        data (dict): Data to write.
        path (str): Destination file path.
    """
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)


def write_json(data, path, indent=4, encoding="utf-8"):
    """
    Writes data to a JSON file.

    Args:
        data (dict or list): Data to write.
        path (str): Destination file path.
        indent (int): Indentation level for formatting.
    """
    with open(path, 'w', encoding=encoding) as f:
        json.dump(data, f, indent=indent)


#=======================================================================
# Path Utilities
#=======================================================================

def mask_path(path, base_dir=None):
    """
    Masks or simplifies a path for logging.

    Args:
        path (str): The full path to mask.
        base_dir (str, optional): The base directory to make the path relative to.

    Returns:
        str: The masked or simplified path.
    """
    path = Path(path)

    # Use base_dir if provided, otherwise fallback to PROJECT_DIR from environment
    if base_dir is None:
        base_dir = os.getenv('PROJECT_DIR')

    if base_dir:
        base_dir = Path(base_dir)
        try:
            return str(path.relative_to(base_dir))
        except ValueError:
            pass  # If path is not under base_dir, fall back to absolute path

    # Replace home directory with "~"
    if path.is_absolute() and str(path).startswith(str(Path.home())):
        return f"~/{path.relative_to(Path.home())}"

    return str(path)
