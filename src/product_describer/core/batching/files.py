# -*- coding: utf-8 -*-

import asyncio
import csv
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from ..exceptions import DatasetError
from ..utils.misc import mask_path
from ..utils.records import ProductRecord, merge_columns


class OutputWriter:
    """
    Single sink for the output dataset.

    The header is fixed when the file is opened; every row is written with
    that full header and flushed straight away, so a crashed run leaves a
    readable file behind for the next run to resume from. Writes go through
    an asyncio lock and never interleave.

    Args:
        path (str | Path): Destination CSV file. Truncated on open.
        columns (list): Header columns. The description column is appended
            when missing.
    """

    def __init__(self, path, columns: Sequence[str]):
        self.path = Path(path)
        self.columns: List[str] = merge_columns(columns)
        self.rows_written = 0
        self._file = None
        self._writer: Optional[csv.DictWriter] = None
        self._lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def open(self):
        """
        Open the destination and write the header.

        Raises:
            DatasetError: If the destination cannot be opened.
        """
        if self.is_open:
            raise RuntimeError(f"Output {self.path} is already open")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, 'w', encoding='utf-8', newline='')
        except OSError as e:
            raise DatasetError(self.path, f"Cannot open output dataset ({e})") from e
        self._writer = csv.DictWriter(self._file, fieldnames=self.columns)
        self._writer.writeheader()
        self._file.flush()
        logging.debug(f"Opened output dataset {mask_path(self.path)}")
        return self

    def _write_row(self, record: ProductRecord):
        if not self.is_open:
            raise RuntimeError(f"Output {self.path} is not open")
        self._writer.writerow(record.to_row(self.columns))
        self._file.flush()
        self.rows_written += 1

    async def write(self, record: ProductRecord):
        """Append one record. Safe to call from concurrently running tasks."""
        async with self._lock:
            self._write_row(record)

    async def write_many(self, records: Sequence[ProductRecord]):
        async with self._lock:
            for record in records:
                self._write_row(record)

    def close(self):
        if self._file is not None:
            self._file.close()
            logging.debug(f"Closed output dataset {mask_path(self.path)} ({self.rows_written} rows)")
        self._file = None
        self._writer = None

    async def __aenter__(self):
        return self.open()

    async def __aexit__(self, exc_type, exc, tb):
        self.close()
