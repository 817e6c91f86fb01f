# -*- coding: utf-8 -*-

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .pricing import CostReport
from ..utils.misc import mask_path, write_json


@dataclass
class BatchSummary:
    """Outcome of one run."""

    input_path: str
    output_path: str
    total_input: int
    carried_over: int
    generated: int
    skipped: int
    failed: int
    rows_written: int
    cost: CostReport
    started_at: datetime
    finished_at: datetime

    @property
    def duration(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()

    def to_dict(self) -> dict:
        summary = {
            "input": str(self.input_path),
            "output": str(self.output_path),
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat(),
            "duration": self.duration,
            "records": {
                "input": self.total_input,
                "carried_over": self.carried_over,
                "generated": self.generated,
                "skipped": self.skipped,
                "failed": self.failed,
                "written": self.rows_written,
            },
        }
        summary.update(self.cost.to_dict())
        return summary


def log_batch_summary(summary: BatchSummary):
    cost = summary.cost
    logging.info(f"Done! Saved to {mask_path(summary.output_path)}")
    logging.info(
        f"Records: {summary.generated} generated, {summary.skipped} skipped, "
        f"{summary.failed} failed, {summary.carried_over} carried over"
    )
    logging.info(f"Token usage: {cost.prompt_tokens} prompt, {cost.completion_tokens} completion")
    logging.info(
        f"Estimated cost: ${cost.total_cost:.4f} "
        f"(input: ${cost.input_cost:.4f}, output: ${cost.output_cost:.4f})"
    )
    if summary.failed:
        logging.warning(f"{summary.failed} records were written with an error marker")


def save_batch_summary(summary: BatchSummary, path):
    """Save the run summary as JSON."""
    path = Path(path)
    if path.suffix != '.json':
        raise ValueError("Path must end with .json")
    path.parent.mkdir(parents=True, exist_ok=True)
    write_json(summary.to_dict(), path)
    logging.info(f"Saved run summary to {mask_path(path)}.")
