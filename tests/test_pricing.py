import pytest

from product_describer.core.batching import pricing
from product_describer.core.batching.pricing import (
    UsageAccountant,
    compute_cost,
    estimate_generation_cost,
    get_model_pricing,
    merge_pricing,
)
from product_describer.core.exceptions import UnknownModelError


def test_cost_of_two_million_prompt_and_one_million_completion_tokens():
    accountant = UsageAccountant()
    accountant.record(1_500_000, 400_000)
    accountant.record(500_000, 600_000)

    report = accountant.cost("gpt-4o-mini")

    assert report.prompt_tokens == 2_000_000
    assert report.completion_tokens == 1_000_000
    assert report.input_cost == pytest.approx(0.300)
    assert report.output_cost == pytest.approx(0.600)
    assert report.total_cost == pytest.approx(0.900)


def test_unknown_model_fails_only_when_cost_is_requested():
    accountant = UsageAccountant()
    accountant.record(10, 10)

    with pytest.raises(UnknownModelError) as excinfo:
        accountant.cost("my-local-llama")

    assert isinstance(excinfo.value, KeyError)
    assert "my-local-llama" in str(excinfo.value)


def test_dated_snapshot_resolves_to_longest_matching_model():
    assert get_model_pricing("gpt-4o-mini-2024-07-18") == {'input': 0.150, 'output': 0.600}
    assert get_model_pricing("gpt-4o-2024-08-06")['input'] == 2.5


def test_negative_token_counts_are_rejected():
    with pytest.raises(ValueError):
        UsageAccountant().record(-1, 0)


def test_pricing_overrides():
    table = merge_pricing({'my-deployment': {'input': 1, 'output': 2}})

    report = compute_cost('my-deployment', 1_000_000, 500_000, pricing_table=table)

    assert report.total_cost == pytest.approx(2.0)
    assert 'gpt-4o-mini' in table


def test_cost_report_to_dict():
    report = compute_cost('gpt-4o-mini', 1_000_000, 0)

    data = report.to_dict()

    assert data['tokens'] == {'prompt': 1_000_000, 'completion': 0, 'total': 1_000_000}
    assert data['costs']['total'] == pytest.approx(0.15)


def test_estimate_counts_prompt_tokens_and_caps_completions(monkeypatch):
    class WordEncoding:
        def encode(self, text):
            return text.split()

    monkeypatch.setattr(pricing, 'get_encoding', lambda model: WordEncoding())

    report = estimate_generation_cost(
        prompts=["one two three", "four five"],
        max_completion_tokens=250,
        openai_model="gpt-4o-mini",
    )

    assert report.prompt_tokens == 5
    assert report.completion_tokens == 500


def test_estimate_rejects_unknown_model_before_tokenizing(monkeypatch):
    def fail(model):
        raise AssertionError("should not tokenize")

    monkeypatch.setattr(pricing, 'get_encoding', fail)

    with pytest.raises(UnknownModelError):
        estimate_generation_cost(["x"], 10, openai_model="unknown-model")
