# -*- coding: utf-8 -*-

import logging
from typing import Dict, Iterable, List, Optional

from ..utils.records import ProductRecord


class ResumeIndex:
    """
    Lookup of records already written by a previous run, keyed by handle.

    A record counts as done when its handle is in the index and the indexed
    row has a non-empty description. With `retry_errors`, rows holding an
    error marker are not done either. The index never changes once built.
    """

    def __init__(self, records: Iterable[ProductRecord] = (), retry_errors: bool = False):
        self.retry_errors = retry_errors
        self._records: List[ProductRecord] = list(records)
        # Duplicate handles: the last row wins
        self._by_handle: Dict[str, ProductRecord] = {record.handle: record for record in self._records}

    @classmethod
    def from_records(cls, records: Iterable[ProductRecord], retry_errors: bool = False) -> 'ResumeIndex':
        index = cls(records, retry_errors=retry_errors)
        logging.debug(f"Resume index holds {len(index)} handles ({index.done_count} done)")
        return index

    def __len__(self):
        return len(self._by_handle)

    def __contains__(self, handle):
        return handle in self._by_handle

    def get(self, handle: str) -> Optional[ProductRecord]:
        return self._by_handle.get(handle)

    def _is_complete(self, record: ProductRecord) -> bool:
        if not record.has_description:
            return False
        if self.retry_errors and record.is_error:
            return False
        return True

    def is_done(self, record: ProductRecord) -> bool:
        previous = self._by_handle.get(record.handle)
        return previous is not None and self._is_complete(previous)

    @property
    def done_count(self) -> int:
        return sum(1 for record in self._by_handle.values() if self._is_complete(record))

    @property
    def error_count(self) -> int:
        return sum(1 for record in self._by_handle.values() if record.is_error)

    def carry_over(self, input_handles: Iterable[str]) -> List[ProductRecord]:
        """
        Previous rows to copy into the new output, in their original order.

        Rows for handles absent from the input are kept as they are. For a
        handle in the input only the indexed (last) row is kept, and only
        when it is done, so the new output holds a single row per handle.
        """
        input_handles = set(input_handles)
        return [
            record for record in self._records
            if record.handle not in input_handles
            or (self._by_handle[record.handle] is record and self._is_complete(record))
        ]
