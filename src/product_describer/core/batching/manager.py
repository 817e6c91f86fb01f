# -*- coding: utf-8 -*-

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

import openai

from .files import OutputWriter
from .generator import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, DescriptionGenerator
from .pricing import CostReport, UsageAccountant, estimate_generation_cost
from .prompts import product_description_prompt
from .resume import ResumeIndex
from .retry import BackoffRetrier
from .scheduler import DEFAULT_CONCURRENCY, FAILED, GENERATED, SKIPPED, DescriptionScheduler
from .summary import BatchSummary, log_batch_summary
from ..utils.datasource import load_records
from ..utils.misc import mask_path
from ..utils.records import HANDLE_COLUMN, REQUIRED_COLUMNS, merge_columns


class ProductDescriptionManager:
    """
    Generate descriptions for a product CSV, resuming from earlier output.

    The output file doubles as the resume source: whatever it holds when a
    run starts is loaded once, finished rows are copied over, and only the
    remaining input rows are sent to the model.

    Args:
        client: Async OpenAI or Azure OpenAI client. Only needed by `run`.
        input_path (str | Path): Input product CSV.
        output_path (str | Path): Output CSV (and resume source).
        model (str): OpenAI model name or Azure deployment name.
        max_tokens (int): Completion token cap per request.
        concurrency (int): Maximum number of generation calls in flight.
        brand_phrases (list): Phrases passed to the prompt template.
        retry_errors (bool): Regenerate rows a previous run marked as errors.
        pricing_table (dict): Model -> {'input', 'output'} USD per 1M tokens.
        retrier (BackoffRetrier): Retry policy override.
        show_progress (bool): Display a progress bar.
    """

    def __init__(
        self,
        client: Optional[openai.AsyncOpenAI | openai.AsyncAzureOpenAI],
        input_path: str | Path,
        output_path: str | Path,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        concurrency: int = DEFAULT_CONCURRENCY,
        brand_phrases: Sequence[str] = (),
        retry_errors: bool = False,
        pricing_table: Optional[Mapping[str, dict]] = None,
        retrier: Optional[BackoffRetrier] = None,
        show_progress: bool = False,
    ):
        self.client = client
        self.input_path = Path(input_path)
        self.output_path = Path(output_path)
        self.model = model
        self.max_tokens = max_tokens
        self.concurrency = concurrency
        self.brand_phrases = list(brand_phrases)
        self.retry_errors = retry_errors
        self.pricing_table = pricing_table
        self.retrier = retrier
        self.show_progress = show_progress

    def _load(self):
        logging.info(f"Reading input data from {mask_path(self.input_path)}")
        input_records, input_columns = load_records(self.input_path, required_columns=REQUIRED_COLUMNS)

        logging.info(f"Reading previous output from {mask_path(self.output_path)}")
        previous_records, previous_columns = load_records(self.output_path, required_columns=[HANDLE_COLUMN])

        resume_index = ResumeIndex.from_records(previous_records, retry_errors=self.retry_errors)
        columns = merge_columns(input_columns, previous_columns)
        return input_records, resume_index, columns

    async def run_async(self) -> BatchSummary:
        """
        Run the whole batch.

        Returns:
            BatchSummary: Counts, token usage and cost of the run.

        Raises:
            DatasetError: If a dataset is malformed or the output cannot be opened.
            UnknownModelError: If the model has no pricing entry (raised after
                the output has been fully written).
        """
        if self.client is None:
            raise ValueError("An API client is required to run the batch.")

        started_at = datetime.now()
        input_records, resume_index, columns = self._load()
        carried_over = resume_index.carry_over(record.handle for record in input_records)

        accountant = UsageAccountant(self.pricing_table)
        generator = DescriptionGenerator(
            client=self.client,
            model=self.model,
            max_tokens=self.max_tokens,
            brand_phrases=self.brand_phrases,
            retrier=self.retrier,
        )

        async with OutputWriter(self.output_path, columns) as writer:
            if carried_over:
                logging.info(f"Carrying over {len(carried_over)} records from previous output")
            await writer.write_many(carried_over)

            scheduler = DescriptionScheduler(
                generator=generator,
                writer=writer,
                accountant=accountant,
                resume_index=resume_index,
                concurrency=self.concurrency,
                show_progress=self.show_progress,
            )
            outcomes = await scheduler.run(input_records)
            rows_written = writer.rows_written

        summary = BatchSummary(
            input_path=str(self.input_path),
            output_path=str(self.output_path),
            total_input=len(input_records),
            carried_over=len(carried_over),
            generated=outcomes[GENERATED],
            skipped=outcomes[SKIPPED],
            failed=outcomes[FAILED],
            rows_written=rows_written,
            cost=accountant.cost(self.model),
            started_at=started_at,
            finished_at=datetime.now(),
        )
        log_batch_summary(summary)
        return summary

    def run(self) -> BatchSummary:
        """Blocking wrapper around `run_async`."""
        return asyncio.run(self.run_async())

    def status(self) -> Dict[str, int]:
        """
        Count input records by resume state, without calling the API.

        Returns:
            dict: 'input', 'done', 'errors' (done rows holding an error marker)
                and 'pending' counts.
        """
        input_records, resume_index, _ = self._load()
        done = [record for record in input_records if resume_index.is_done(record)]
        errors = sum(1 for record in done if resume_index.get(record.handle).is_error)
        return {
            'input': len(input_records),
            'done': len(done),
            'errors': errors,
            'pending': len(input_records) - len(done),
        }

    def estimate(self) -> CostReport:
        """
        Estimate the upper-bound cost of the records still pending.

        Prompt tokens are counted with tiktoken; each pending record is assumed
        to use the full completion budget. Image tokens are not counted.
        """
        input_records, resume_index, _ = self._load()
        prompts = [
            product_description_prompt(record, self.brand_phrases)
            for record in input_records
            if not resume_index.is_done(record)
        ]
        logging.info(f"Estimating cost for {len(prompts)} pending records")
        return estimate_generation_cost(
            prompts=prompts,
            max_completion_tokens=self.max_tokens,
            openai_model=self.model,
            pricing_table=self.pricing_table,
        )
