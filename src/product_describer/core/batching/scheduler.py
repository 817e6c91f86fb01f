# -*- coding: utf-8 -*-
"""
Concurrency-bounded processing of input records.

A fixed number of worker tasks pull units of work from a queue filled in
input order. Each unit either skips a record already present in the resume
index, or generates a description and writes the augmented record. A unit
that fails writes the record with an error marker instead; failures never
reach sibling units.
"""

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence

from tqdm.auto import tqdm

from .files import OutputWriter
from .generator import DescriptionGenerator
from .pricing import UsageAccountant
from .resume import ResumeIndex
from ..utils.records import ProductRecord


DEFAULT_CONCURRENCY = 2

SKIPPED = 'skipped'
GENERATED = 'generated'
FAILED = 'failed'


@dataclass(frozen=True)
class UnitOfWork:
    position: int  # 1-based position in the input
    record: ProductRecord


class DescriptionScheduler:
    """
    Drive the per-record pipeline with at most `concurrency` units in flight.

    Args:
        generator (DescriptionGenerator): Produces descriptions.
        writer (OutputWriter): Open sink for finished records.
        accountant (UsageAccountant): Collects token usage.
        resume_index (ResumeIndex): Records finished by an earlier run.
        concurrency (int): Maximum number of units running at once.
        show_progress (bool): Display a tqdm bar over settled units.
    """

    def __init__(
            self,
            generator: DescriptionGenerator,
            writer: OutputWriter,
            accountant: UsageAccountant,
            resume_index: Optional[ResumeIndex] = None,
            concurrency: int = DEFAULT_CONCURRENCY,
            show_progress: bool = False,
        ):
        if concurrency < 1:
            raise ValueError(f"Invalid concurrency value: {concurrency}. Must be >= 1.")
        self.generator = generator
        self.writer = writer
        self.accountant = accountant
        self.resume_index = resume_index or ResumeIndex()
        self.concurrency = concurrency
        self.show_progress = show_progress

    async def _process(self, unit: UnitOfWork, total: int) -> str:
        record = unit.record

        if self.resume_index.is_done(record):
            logging.info(f"Skipping [{unit.position}/{total}]: {record.title}")
            return SKIPPED

        logging.info(f"Processing [{unit.position}/{total}]: {record.title}")
        try:
            result = await self.generator.generate(record)
            self.accountant.record(result.usage.prompt_tokens, result.usage.completion_tokens)
        except Exception as e:
            logging.error(f"Error on row {unit.position} ({record.handle}): {e}")
            await self.writer.write(record.with_error(e))
            return FAILED

        await self.writer.write(record.with_description(result.description))
        return GENERATED

    async def _worker(self, queue: asyncio.Queue, total: int, outcomes: Counter, progress):
        while True:
            try:
                unit = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            try:
                outcomes[await self._process(unit, total)] += 1
            finally:
                queue.task_done()
                if progress is not None:
                    progress.update(1)

    async def run(self, records: Sequence[ProductRecord]) -> Counter:
        """
        Process every record once and wait until all units have settled.

        Returns:
            Counter: Number of units per outcome ('generated', 'skipped', 'failed').
        """
        total = len(records)
        queue: asyncio.Queue = asyncio.Queue()
        for position, record in enumerate(records, start=1):
            queue.put_nowait(UnitOfWork(position=position, record=record))

        outcomes = Counter({GENERATED: 0, SKIPPED: 0, FAILED: 0})
        progress = tqdm(total=total, desc="Records settled") if self.show_progress else None
        try:
            workers = [
                asyncio.create_task(self._worker(queue, total, outcomes, progress))
                for _ in range(min(self.concurrency, total))
            ]
            await asyncio.gather(*workers)
        finally:
            if progress is not None:
                progress.close()

        logging.info(
            f"All {total} records settled: {outcomes[GENERATED]} generated, "
            f"{outcomes[SKIPPED]} skipped, {outcomes[FAILED]} failed"
        )
        return outcomes
