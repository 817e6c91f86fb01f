# -*- coding: utf-8 -*-

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import polars as pl

from .misc import mask_path
from .records import ProductRecord
from ..exceptions import DatasetError


def read_tabular(source_data_file) -> pl.DataFrame:
    """
    Read a CSV file with every column as a string and nulls as ''.

    Raises:
        DatasetError: If the file cannot be parsed.
    """
    try:
        # infer_schema_length=0 reads every column as String
        df = pl.read_csv(source_data_file, infer_schema_length=0)
    except pl.exceptions.NoDataError:
        return pl.DataFrame()
    except (pl.exceptions.PolarsError, UnicodeDecodeError, OSError) as e:
        raise DatasetError(source_data_file, f"Malformed dataset ({e})") from e
    return df.fill_null('')


def read_header(source_data_file) -> List[str]:
    """Read the raw header row, without the renaming polars applies to duplicates."""
    try:
        header = pl.read_csv(source_data_file, has_header=False, n_rows=1, infer_schema_length=0)
    except pl.exceptions.NoDataError:
        return []
    except (pl.exceptions.PolarsError, UnicodeDecodeError, OSError) as e:
        raise DatasetError(source_data_file, f"Malformed dataset ({e})") from e
    return [value or '' for value in header.row(0)] if header.height else []


def find_duplicate_columns(columns: Sequence[str]) -> List[str]:
    seen, duplicates = set(), []
    for column in columns:
        if column in seen and column not in duplicates:
            duplicates.append(column)
        seen.add(column)
    return duplicates


def check_tabular_source_data_columns(df: pl.DataFrame, required_columns: Sequence[str]) -> List[str]:
    """Return the required columns missing from the dataframe."""
    return [column for column in required_columns if column not in df.columns]


def load_records(
        source_data_file,
        required_columns: Optional[Sequence[str]] = None,
    ) -> Tuple[List[ProductRecord], List[str]]:
    """
    Load a CSV dataset as a list of records in file order.

    A path that does not exist yields no records, so a first run and a
    resumed run go through the same code.

    Args:
        source_data_file (str | Path): Path to the CSV file.
        required_columns (list): Columns the header must contain.

    Returns:
        tuple: (records, columns), the records and the header column names.

    Raises:
        DatasetError: If the file is malformed (including duplicate header
            names) or misses required columns.
    """
    source_data_file = Path(source_data_file)
    if not source_data_file.exists():
        logging.debug(f"No dataset at {mask_path(source_data_file)}, starting empty")
        return [], []
    if source_data_file.is_dir():
        raise DatasetError(source_data_file, "Expected a CSV file, found a directory")
    if source_data_file.stat().st_size == 0:
        logging.warning(f"Dataset {mask_path(source_data_file)} is empty, treating it as having no records")
        return [], []

    df = read_tabular(source_data_file)

    duplicates = find_duplicate_columns(read_header(source_data_file))
    if duplicates:
        raise DatasetError(source_data_file, f"Malformed dataset (duplicate columns {duplicates})")

    missing = check_tabular_source_data_columns(df, required_columns or [])
    if missing:
        raise DatasetError(source_data_file, f"Missing required columns {missing}")

    records = [ProductRecord.from_row(row) for row in df.iter_rows(named=True)]
    logging.info(f"Loaded {len(records)} records from {mask_path(source_data_file)}")
    return records, list(df.columns)
