import asyncio
import csv
from types import SimpleNamespace

import pytest

from product_describer.core.batching.retry import BackoffRetrier
from product_describer.core.utils.records import REQUIRED_COLUMNS


class FakeCompletions:
    """Stands in for `client.chat.completions`.

    `responder(call_kwargs)` returns the completion text, or raises.
    """

    def __init__(self, responder, delay=0.0, usage=(100, 50)):
        self.responder = responder
        self.delay = delay
        self.usage = usage
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            text = self.responder(kwargs)
        finally:
            self.in_flight -= 1
        usage = None
        if self.usage is not None:
            usage = SimpleNamespace(prompt_tokens=self.usage[0], completion_tokens=self.usage[1])
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
            usage=usage,
        )


class FakeClient:
    def __init__(self, responder=None, **kwargs):
        if responder is None:
            responder = lambda kwargs: "  A lovely product.  "
        self.chat = SimpleNamespace(completions=FakeCompletions(responder, **kwargs))

    @property
    def calls(self):
        return self.chat.completions.calls


@pytest.fixture
def fake_client():
    return FakeClient


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def retrier(sleeps):
    """Retrier with the default policy that records delays instead of sleeping."""
    async def fake_sleep(seconds):
        sleeps.append(seconds)

    return BackoffRetrier(sleep=fake_sleep)


def make_row(handle, **values):
    row = {column: '' for column in REQUIRED_COLUMNS}
    row['Handle'] = handle
    row['Title'] = values.pop('title', f"Product {handle}")
    row['Vendor'] = values.pop('vendor', "Acme")
    row.update(values)
    return row


@pytest.fixture
def product_row():
    return make_row


@pytest.fixture
def write_csv():
    def _write(path, rows, columns=None):
        if columns is None:
            columns = list(rows[0].keys())
        with open(path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=columns)
            writer.writeheader()
            for row in rows:
                writer.writerow(row)
        return path
    return _write


@pytest.fixture
def read_csv():
    def _read(path):
        with open(path, 'r', encoding='utf-8', newline='') as f:
            reader = csv.DictReader(f)
            return list(reader), reader.fieldnames
    return _read
