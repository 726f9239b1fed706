"""Rendering rules interface implemented once per output format."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from adoc2dita.schemas import Block, DescriptionList, DocumentTree, ListNode, Section, Table

ContentSupplier = Callable[[], str]
DocumentConverter = Callable[[DocumentTree], str]


class DocumentVisitor(ABC):
    """Format-specific rules the converter calls for each node.

    A visitor holds the state of a single document conversion and must not be
    reused for another document. Structural content is handed over as a
    supplier so that a rule can set up its context before its children render.
    Suppliers and item lists always carry finished markup; raw text arguments
    (``text``, ``label``, ``alt``, ``path``) are unescaped.
    """

    @property
    @abstractmethod
    def document_name(self) -> str:
        """Base name the document is addressed by."""

    @property
    @abstractmethod
    def output_file_name(self) -> str:
        """File the converted document is reachable through."""

    @property
    @abstractmethod
    def produced_map(self) -> bool:
        """Whether the document was decomposed into a map."""

    @abstractmethod
    def on_document(self, document: DocumentTree, transform: str | None, content: ContentSupplier) -> str: ...

    @abstractmethod
    def on_section(self, section: Section, transform: str | None, content: ContentSupplier) -> str: ...

    @abstractmethod
    def on_listing(self, block: Block, transform: str | None, text: str) -> str: ...

    @abstractmethod
    def on_paragraph(self, block: Block, transform: str | None, content: ContentSupplier) -> str: ...

    @abstractmethod
    def on_preamble(self, block: Block, transform: str | None, content: ContentSupplier) -> str: ...

    @abstractmethod
    def on_image(self, block: Block, transform: str | None, alt: str, path: str) -> str: ...

    @abstractmethod
    def on_admonition(self, block: Block, transform: str | None, label: str, content: ContentSupplier) -> str: ...

    @abstractmethod
    def on_passthrough(self, block: Block, transform: str | None, text: str) -> str: ...

    @abstractmethod
    def on_quote(self, block: Block, transform: str | None, content: ContentSupplier) -> str: ...

    @abstractmethod
    def on_list(self, node: ListNode, transform: str | None, items: list[str]) -> str: ...

    @abstractmethod
    def on_description_list(
        self, node: DescriptionList, transform: str | None, entries: list[tuple[list[str], str]]
    ) -> str: ...

    @abstractmethod
    def on_table(self, table: Table, transform: str | None, convert_document: DocumentConverter) -> str: ...

    @abstractmethod
    def on_monospaced(self, text: str) -> str: ...

    @abstractmethod
    def on_strong(self, text: str) -> str: ...

    @abstractmethod
    def on_emphasis(self, text: str) -> str: ...

    @abstractmethod
    def on_xref(self, text: str, target: str | None, anchor: str | None) -> str: ...

    @abstractmethod
    def on_link(self, text: str, url: str) -> str: ...

    @abstractmethod
    def on_line(self, text: str) -> str: ...

    @abstractmethod
    def on_callout(self, text: str) -> str: ...
