# -*- coding: utf-8 -*-
"""
Turn one product record into one chat completion request and return the
generated description with its token usage.
"""

import base64
import logging
from pathlib import Path
from typing import List, Optional, Sequence

import openai

from .prompts import product_description_prompt
from .retry import BackoffRetrier
from ..exceptions import EmptyCompletionError
from ..utils.records import GenerationResult, ProductRecord, Usage


DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TOKENS = 250

REMOTE_IMAGE_PREFIXES = ("http://", "https://")

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
}


def resolve_image_url(image_src: str) -> Optional[str]:
    """
    Resolve an image reference into something the API accepts.

    Remote URLs are passed by reference, readable local files are inlined as
    a base64 data URL, anything else resolves to None (text-only request).
    A local file that exists but cannot be read is logged and skipped.
    """
    image_src = (image_src or '').strip()
    if not image_src:
        return None

    if image_src.startswith(REMOTE_IMAGE_PREFIXES):
        return image_src

    image_path = Path(image_src)
    if not image_path.is_file():
        return None

    try:
        image_data = image_path.read_bytes()
    except OSError as e:
        logging.warning(f"Could not read image at {image_src}, falling back to text only ({e})")
        return None

    mime_type = MIME_TYPES.get(image_path.suffix.lower(), "image/jpeg")
    base64_image = base64.b64encode(image_data).decode("utf-8")
    return f"data:{mime_type};base64,{base64_image}"


def build_messages(record: ProductRecord, brand_phrases: Sequence[str] = ()) -> List[dict]:
    """Build the single user message: the prompt text plus at most one image."""
    content = [{"type": "text", "text": product_description_prompt(record, brand_phrases)}]

    image_url = resolve_image_url(record.image_src)
    if image_url is not None:
        content.append({"type": "image_url", "image_url": {"url": image_url}})

    return [{"role": "user", "content": content}]


class DescriptionGenerator:
    """
    Generate product descriptions through the Chat Completions API.

    Args:
        client: An async OpenAI or Azure OpenAI client.
        model (str): Model name (or Azure deployment name).
        max_tokens (int): Completion token cap per request.
        brand_phrases (list): Phrases passed to the prompt template.
        retrier (BackoffRetrier): Retry policy for the API call.
    """

    def __init__(
            self,
            client: openai.AsyncOpenAI | openai.AsyncAzureOpenAI,
            model: str = DEFAULT_MODEL,
            max_tokens: int = DEFAULT_MAX_TOKENS,
            brand_phrases: Sequence[str] = (),
            retrier: Optional[BackoffRetrier] = None,
        ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.brand_phrases = list(brand_phrases)
        self.retrier = retrier or BackoffRetrier()

    async def _complete(self, messages: List[dict]) -> GenerationResult:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=self.max_tokens,
        )

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise EmptyCompletionError(self.model)

        usage = response.usage
        return GenerationResult(
            description=content.strip(),
            usage=Usage(
                prompt_tokens=getattr(usage, 'prompt_tokens', 0) or 0,
                completion_tokens=getattr(usage, 'completion_tokens', 0) or 0,
            ),
        )

    async def generate(self, record: ProductRecord) -> GenerationResult:
        """
        Generate a description for one record, retrying failed calls.

        Raises:
            Exception: The last failure once the retry budget is spent.
        """
        messages = build_messages(record, self.brand_phrases)
        return await self.retrier.call(self._complete, messages)
