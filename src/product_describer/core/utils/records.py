# -*- coding: utf-8 -*-

"""
Record types passed between the loader, the generator and the writer.

Column names follow the Shopify product export, which is the shape of the
datasets this package reads and writes.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional


HANDLE_COLUMN = 'Handle'
TITLE_COLUMN = 'Title'
VENDOR_COLUMN = 'Vendor'
CATEGORY_COLUMN = 'Product Category'
TYPE_COLUMN = 'Type'
TAGS_COLUMN = 'Tags'
IMAGE_COLUMN = 'Image Src'
DESCRIPTION_COLUMN = 'Product Description'

REQUIRED_COLUMNS = [
    HANDLE_COLUMN,
    TITLE_COLUMN,
    VENDOR_COLUMN,
    CATEGORY_COLUMN,
    TYPE_COLUMN,
    TAGS_COLUMN,
    IMAGE_COLUMN,
]

ERROR_PREFIX = 'ERROR: '

# Column name -> ProductRecord attribute
_FIELD_BY_COLUMN = {
    HANDLE_COLUMN: 'handle',
    TITLE_COLUMN: 'title',
    VENDOR_COLUMN: 'vendor',
    CATEGORY_COLUMN: 'category',
    TYPE_COLUMN: 'product_type',
    TAGS_COLUMN: 'tags',
    IMAGE_COLUMN: 'image_src',
    DESCRIPTION_COLUMN: 'description',
}


def error_marker(reason) -> str:
    """Text written in the description column when generation failed."""
    return f"{ERROR_PREFIX}{reason}"


@dataclass(frozen=True)
class ProductRecord:
    """
    One product row.

    The fixed product fields are attributes; every other column of the
    dataset travels untouched in `extra`, in its original column order.
    """

    handle: str = ''
    title: str = ''
    vendor: str = ''
    category: str = ''
    product_type: str = ''
    tags: str = ''
    image_src: str = ''
    description: str = ''
    extra: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Mapping[str, Optional[str]]) -> 'ProductRecord':
        """Build a record from a column -> value mapping. Missing or null values become ''."""
        values = {}
        extra = {}
        for column, value in row.items():
            value = '' if value is None else str(value)
            attribute = _FIELD_BY_COLUMN.get(column)
            if attribute is None:
                extra[column] = value
            else:
                values[attribute] = value
        return cls(extra=extra, **values)

    def get(self, column: str, default: str = '') -> str:
        attribute = _FIELD_BY_COLUMN.get(column)
        if attribute is not None:
            return getattr(self, attribute)
        return self.extra.get(column, default)

    def to_row(self, columns: Iterable[str]) -> Dict[str, str]:
        """Render the record as an ordered row over `columns`, filling gaps with ''."""
        return {column: self.get(column) for column in columns}

    def with_description(self, description: str) -> 'ProductRecord':
        return replace(self, description=description)

    def with_error(self, reason) -> 'ProductRecord':
        return replace(self, description=error_marker(reason))

    @property
    def has_description(self) -> bool:
        return bool(self.description)

    @property
    def is_error(self) -> bool:
        return self.description.startswith(ERROR_PREFIX)


def merge_columns(*column_lists: Iterable[str]) -> List[str]:
    """
    Merge column lists keeping first-seen order, and make sure the
    description column is present (last, unless already there).
    """
    merged = []
    seen = set()
    for columns in column_lists:
        for column in columns:
            if column not in seen:
                seen.add(column)
                merged.append(column)
    if DESCRIPTION_COLUMN not in seen:
        merged.append(DESCRIPTION_COLUMN)
    return merged


@dataclass(frozen=True)
class Usage:
    """Token counts reported by the API for one completion."""

    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


@dataclass(frozen=True)
class GenerationResult:
    description: str
    usage: Usage = field(default_factory=Usage)
