import asyncio

import pytest

from product_describer.core.batching.retry import BackoffRetrier


class Flaky:
    """Fails `failures` times, then returns 'ok'."""

    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError(f"failure {self.calls}")
        return 'ok'


def test_delays_double_and_are_clamped():
    retrier = BackoffRetrier()

    assert [retrier.delay_for(n) for n in range(1, 7)] == [1, 2, 4, 8, 10, 10]


def test_delay_never_drops_below_minimum():
    retrier = BackoffRetrier(factor=0.5, min_delay=1, max_delay=10)

    assert retrier.delay_for(3) == 1


def test_success_after_failures(retrier, sleeps):
    operation = Flaky(failures=2)

    assert asyncio.run(retrier.call(operation)) == 'ok'
    assert operation.calls == 3
    assert sleeps == [1, 2]


def test_exhaustion_makes_five_calls_and_reraises_last_error(sleeps):
    failures = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    retrier = BackoffRetrier(on_failed_attempt=failures.append, sleep=fake_sleep)
    operation = Flaky(failures=100)

    with pytest.raises(ConnectionError, match="failure 5"):
        asyncio.run(retrier.call(operation))

    assert operation.calls == 5
    assert sleeps == [1, 2, 4, 8]
    assert [(f.attempt_number, f.retries_left) for f in failures] == [
        (1, 4), (2, 3), (3, 2), (4, 1)
    ]
    assert str(failures[0].error) == "failure 1"


def test_failed_attempts_are_logged(retrier, caplog):
    with caplog.at_level("WARNING"):
        asyncio.run(retrier.call(Flaky(failures=1)))

    assert "Attempt 1 failed. 4 retries left." in caplog.text


def test_arguments_are_forwarded(retrier):
    async def add(a, b=0):
        return a + b

    assert asyncio.run(retrier.call(add, 1, b=2)) == 3


def test_invalid_policy_is_rejected():
    with pytest.raises(ValueError):
        BackoffRetrier(max_attempts=0)
    with pytest.raises(ValueError):
        BackoffRetrier(min_delay=5, max_delay=1)
