# -*- coding: utf-8 -*-

from typing import Sequence

from ..utils.records import ProductRecord


def product_description_prompt(record: ProductRecord, brand_phrases: Sequence[str] = ()) -> str:
    """
    Build the instruction sent to the model for one product.

    Args:
        record (ProductRecord): The product to describe.
        brand_phrases (list): Phrases the copy should weave in, if any.

    Returns:
        str: The prompt text.
    """
    lines = [
        "You are a marketing AI. Write a compelling product description.",
        "",
        f"Title: {record.title}",
        f"Vendor: {record.vendor}",
        f"Category: {record.category}",
        f"Type: {record.product_type}",
        f"Tags: {record.tags}",
    ]
    if brand_phrases:
        lines.append(f"Brand phrases: {', '.join(brand_phrases)}")
    lines.extend([
        "",
        "Don't send back a title, just send a description.",
        "",
        "Keep it professional, engaging, and under 150 words.",
    ])
    return "\n".join(lines)
