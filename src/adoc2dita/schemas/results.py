"""Conversion output models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
    """Outcome of converting one document.

    Attributes:
        name: Base name the document is addressed by.
        content: Rendered root topic (always returned, even when a map was
            produced instead).
        file_name: Output file the document is reachable through: its map when
            one was synthesized, otherwise its own topic file.
        is_map: True when the document was decomposed into a map.
    """

    name: str
    content: str
    file_name: str
    is_map: bool = False


class DocumentFailure(BaseModel):
    """A document skipped because it failed to convert."""

    name: str
    pass_number: int
    error: str


class BatchResult(BaseModel):
    """Final result of a two-pass batch run."""

    documents: list[ConversionResult] = Field(default_factory=list)
    failures: list[DocumentFailure] = Field(default_factory=list)
