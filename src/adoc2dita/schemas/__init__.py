"""Shared schemas for adoc2dita."""

from adoc2dita.schemas.results import BatchResult, ConversionResult, DocumentFailure
from adoc2dita.schemas.tree import (
    Block,
    Cell,
    DescriptionList,
    DescriptionListEntry,
    DocumentTree,
    InlineSpan,
    ListItem,
    ListNode,
    Row,
    Section,
    Table,
)

__all__ = [
    "BatchResult",
    "Block",
    "Cell",
    "ConversionResult",
    "DescriptionList",
    "DescriptionListEntry",
    "DocumentFailure",
    "DocumentTree",
    "InlineSpan",
    "ListItem",
    "ListNode",
    "Row",
    "Section",
    "Table",
]
