# -*- coding: utf-8 -*-

import threading
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

import tiktoken

from ..exceptions import UnknownModelError


MODEL2PRICE = {
    # Pricing in USD per 1M tokens for the Chat Completions API
    # (https://platform.openai.com/docs/pricing)
    'gpt-4.1'            : {'input': 2,     'output': 8   },
    'gpt-4.1-mini'       : {'input': 0.4,   'output': 1.6 },
    'gpt-4.1-nano'       : {'input': 0.1,   'output': 0.4 },
    'gpt-4o'             : {'input': 2.5,   'output': 10  },
    'gpt-4o-mini'        : {'input': 0.150, 'output': 0.600},
    'o1'                 : {'input': 15,    'output': 60  },
    'o1-mini'            : {'input': 1.1,   'output': 4.4 },
    'o3'                 : {'input': 2,     'output': 8   },
    'o3-mini'            : {'input': 1.1,   'output': 4.4 },
    'o4-mini'            : {'input': 1.1,   'output': 4.4 },
    'gpt-4'              : {'input': 30,    'output': 60  },
    'gpt-4-turbo'        : {'input': 10,    'output': 30  },
    'gpt-3.5-turbo'      : {'input': 0.5,   'output': 1.5 },
}


def get_model_pricing(model: str, pricing_table: Optional[Mapping[str, dict]] = None) -> dict:
    """
    Get the pricing for a specific OpenAI model.

    An exact name wins; otherwise the longest table entry the model name
    starts with is used, so dated snapshots like 'gpt-4o-mini-2024-07-18'
    resolve to 'gpt-4o-mini' and not to 'gpt-4o'.

    Args:
        model (str): The OpenAI model name.
        pricing_table (dict): Table to search. Defaults to MODEL2PRICE.

    Returns:
        dict: A dictionary with input and output pricing.

    Raises:
        UnknownModelError: If the model has no pricing entry.
    """
    table = MODEL2PRICE if pricing_table is None else pricing_table
    if model in table:
        return table[model]
    candidates = [name for name in table if model.startswith(name)]
    if not candidates:
        raise UnknownModelError(model, list(table))
    return table[max(candidates, key=len)]


@dataclass(frozen=True)
class CostReport:
    """Cost of a run, in USD."""

    model: str
    prompt_tokens: int
    completion_tokens: int
    input_cost: float
    output_cost: float

    @property
    def total_cost(self) -> float:
        return self.input_cost + self.output_cost

    def to_dict(self) -> dict:
        return {
            "model": self.model,
            "tokens": {
                "prompt": self.prompt_tokens,
                "completion": self.completion_tokens,
                "total": self.prompt_tokens + self.completion_tokens,
            },
            "costs": {
                "prompt": self.input_cost,
                "completion": self.output_cost,
                "total": self.total_cost,
            },
        }


def compute_cost(
        model: str,
        prompt_tokens: int,
        completion_tokens: int,
        pricing_table: Optional[Mapping[str, dict]] = None,
    ) -> CostReport:
    """Compute the cost of the given token counts: (tokens / 1M) * rate for each side."""
    pricing = get_model_pricing(model, pricing_table)
    input_cost = (prompt_tokens / 1_000_000) * pricing['input']
    output_cost = (completion_tokens / 1_000_000) * pricing['output']
    return CostReport(
        model=model,
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
        input_cost=input_cost,
        output_cost=output_cost,
    )


class UsageAccountant:
    """
    Running token totals for one run.

    Counters only grow. Updates are taken under a lock so that units
    settling concurrently never lose an increment.
    """

    def __init__(self, pricing_table: Optional[Mapping[str, dict]] = None):
        self.pricing_table = pricing_table
        self._prompt_tokens = 0
        self._completion_tokens = 0
        self._lock = threading.Lock()

    def record(self, prompt_tokens: int, completion_tokens: int):
        if prompt_tokens < 0 or completion_tokens < 0:
            raise ValueError("Token counts must be non-negative")
        with self._lock:
            self._prompt_tokens += prompt_tokens
            self._completion_tokens += completion_tokens

    @property
    def prompt_tokens(self) -> int:
        return self._prompt_tokens

    @property
    def completion_tokens(self) -> int:
        return self._completion_tokens

    def cost(self, model: str) -> CostReport:
        """
        Compute the cost of everything recorded so far.

        Raises:
            UnknownModelError: If the model has no pricing entry.
        """
        with self._lock:
            prompt_tokens, completion_tokens = self._prompt_tokens, self._completion_tokens
        return compute_cost(model, prompt_tokens, completion_tokens, self.pricing_table)


#=============================================================================
# Cost Estimation
#=============================================================================

def get_encoding(openai_model):
    """
    Get the encoding for the specified OpenAI model.

    Args:
        openai_model (str): OpenAI model name.

    Returns:
        tiktoken.core.Encoding: Encoding object for the OpenAI model.
    """
    try:
        encoding = tiktoken.encoding_for_model(openai_model)
    except KeyError:
        if openai_model.startswith(("gpt-4o", "gpt-4.1", "o1", "o3", "o4")):
            encoding = tiktoken.get_encoding("o200k_base")
        else:
            encoding = tiktoken.get_encoding("cl100k_base")
    return encoding


def estimate_generation_cost(
        prompts: List[str],
        max_completion_tokens: int,
        openai_model: str = "gpt-4o-mini",
        pricing_table: Optional[Mapping[str, dict]] = None,
    ) -> CostReport:
    """
    Estimate the cost of generating one completion per prompt.

    The estimate is an upper bound on completion tokens (every completion is
    assumed to use `max_completion_tokens`) and ignores image tokens.

    Args:
        prompts (list): Rendered text prompts.
        max_completion_tokens (int): Completion token cap per request.
        openai_model (str): OpenAI model name.
        pricing_table (dict): Optional pricing overrides.

    Returns:
        CostReport: Estimated token counts and costs.
    """
    # Check the model first so an unknown model fails before tokenizing
    get_model_pricing(openai_model, pricing_table)

    encoding = get_encoding(openai_model)
    prompt_tokens = sum(len(encoding.encode(prompt)) for prompt in prompts)
    completion_tokens = len(prompts) * max_completion_tokens
    return compute_cost(openai_model, prompt_tokens, completion_tokens, pricing_table)


def merge_pricing(overrides: Optional[Mapping[str, dict]]) -> Dict[str, dict]:
    """Return MODEL2PRICE updated with per-model overrides."""
    table = {name: dict(rates) for name, rates in MODEL2PRICE.items()}
    for name, rates in (overrides or {}).items():
        table[name] = {'input': float(rates['input']), 'output': float(rates['output'])}
    return table
