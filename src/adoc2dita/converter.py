"""Dispatch document tree nodes to the rendering rules of a visitor."""

from __future__ import annotations

from typing import Sequence

from adoc2dita.aggregator import Aggregator, StagedWrites
from adoc2dita.dita import DitaVisitor
from adoc2dita.exceptions import MissingRequiredAttribute, UnsupportedNodeKind
from adoc2dita.options import ConversionOptions, OutputFormat
from adoc2dita.schemas import (
    Block,
    ConversionResult,
    DescriptionList,
    DocumentTree,
    InlineSpan,
    ListItem,
    ListNode,
    Section,
    Table,
)
from adoc2dita.visitor import DocumentVisitor

TABLE_TRANSFORM = "table"


class Converter:
    """Recursive renderer: matches node kind, then block context, then span type."""

    def __init__(self, visitor: DocumentVisitor, *, preamble_as_paragraph: bool = True) -> None:
        self._visitor = visitor
        self._preamble_as_paragraph = preamble_as_paragraph

    @property
    def visitor(self) -> DocumentVisitor:
        return self._visitor

    def convert(self, node: object, transform: str | None = None) -> str:
        """Render ``node`` and its descendants.

        Raises:
            UnsupportedNodeKind: If no rule exists for the node.
            MissingRequiredAttribute: If a rule lacks mandatory input.
        """
        visitor = self._visitor
        if isinstance(node, DocumentTree):
            return visitor.on_document(node, transform, lambda: self._convert_children(node.blocks))
        if isinstance(node, Section):
            return visitor.on_section(node, transform, lambda: self._convert_children(node.blocks))
        if isinstance(node, Block):
            return self._convert_block(node, transform)
        if isinstance(node, ListNode):
            return visitor.on_list(node, transform, [self._convert_item(item) for item in node.items])
        if isinstance(node, DescriptionList):
            entries = [
                (
                    [self._convert_item(term) for term in entry.terms],
                    self._convert_item(entry.description) if entry.description else "",
                )
                for entry in node.items
            ]
            return visitor.on_description_list(node, transform, entries)
        if isinstance(node, Table):
            return visitor.on_table(node, transform, lambda document: self.convert(document, TABLE_TRANSFORM))
        if isinstance(node, InlineSpan):
            return self._convert_span(node)
        raise UnsupportedNodeKind(getattr(node, "kind", None) or type(node).__name__)

    def _convert_block(self, block: Block, transform: str | None) -> str:
        visitor = self._visitor
        context = (block.context or "").lower()

        if context == "listing":
            return visitor.on_listing(block, transform, "\n".join(block.lines))
        if context == "paragraph":
            return visitor.on_paragraph(block, transform, lambda: self._block_content(block))
        if context == "preamble":
            if self._preamble_as_paragraph:
                return visitor.on_paragraph(block, transform, lambda: self._block_content(block))
            return visitor.on_preamble(block, transform, lambda: self._block_content(block))
        if context == "image":
            path = block.attributes.get("target")
            if not path:
                raise MissingRequiredAttribute("image", "target")
            return visitor.on_image(block, transform, block.attributes.get("alt") or path, path)
        if context == "admonition":
            label = block.attributes.get("textlabel") or "Note"
            return visitor.on_admonition(block, transform, label, lambda: self._block_content(block))
        if context == "pass":
            return visitor.on_passthrough(block, transform, "\n".join(block.lines))
        if context == "quote":
            return visitor.on_quote(block, transform, lambda: self._block_content(block))
        raise UnsupportedNodeKind(block.context)

    def _convert_span(self, span: InlineSpan) -> str:
        visitor = self._visitor
        span_type = (span.type or "").lower()

        if span_type == "monospaced":
            return visitor.on_monospaced(span.text)
        if span_type == "strong":
            return visitor.on_strong(span.text)
        if span_type == "emphasis":
            return visitor.on_emphasis(span.text)
        if span_type == "xref":
            return visitor.on_xref(span.text, span.target, span.anchor)
        if span_type == "link":
            url = span.target or span.text
            if not url:
                raise MissingRequiredAttribute("link", "target")
            return visitor.on_link(span.text, url)
        if span_type == "line":
            return visitor.on_line(span.text)
        if span_type == "callout":
            return visitor.on_callout(span.text)
        raise UnsupportedNodeKind(span.type)

    def _convert_children(self, nodes: Sequence[object]) -> str:
        return "\n".join(self.convert(node) for node in nodes)

    def _convert_inlines(self, spans: Sequence[InlineSpan]) -> str:
        return "".join(self._convert_span(span) for span in spans)

    def _block_content(self, block: Block) -> str:
        if block.blocks:
            return self._convert_children(block.blocks)
        if block.inlines:
            return self._convert_inlines(block.inlines)
        return self._visitor.on_line("\n".join(block.lines))

    def _convert_item(self, item: ListItem) -> str:
        text = self._convert_inlines(item.inlines) if item.inlines else self._visitor.on_line(item.text)
        if item.blocks:
            return text + "\n" + self._convert_children(item.blocks)
        return text


def create_visitor(
    output_format: OutputFormat,
    output: Aggregator | StagedWrites,
    *,
    name: str | None = None,
    options: ConversionOptions | None = None,
) -> DocumentVisitor:
    """Build a fresh visitor for one document conversion."""
    if output_format == OutputFormat.DITA:
        return DitaVisitor(output, name=name, options=options)
    raise ValueError(f"Unsupported output format: {output_format}")


def convert_document(
    document: DocumentTree,
    aggregator: Aggregator,
    *,
    name: str | None = None,
    options: ConversionOptions | None = None,
) -> ConversionResult:
    """Convert one document tree, writing its topics and map into ``aggregator``.

    Writes are staged and only reach the aggregator when the whole document
    converts. The root topic is always returned in the result; when the
    document produced no map the caller is responsible for persisting it
    under ``result.file_name``.

    Args:
        document: The parsed document tree.
        aggregator: Batch-wide output registry.
        name: Base name of the input file, used for the map and topic file
            names and for resolving references to this document.
        options: Conversion options. Uses defaults if None.

    Returns:
        The conversion result.

    Raises:
        UnsupportedNodeKind: If the tree holds a node without a rendering rule.
        MissingRequiredAttribute: If a node lacks mandatory attributes.
    """
    opts = options or ConversionOptions()
    staged = aggregator.stage(source=name)
    visitor = create_visitor(opts.output_format, staged, name=name, options=opts)
    converter = Converter(visitor, preamble_as_paragraph=opts.preamble_as_paragraph)

    content = converter.convert(document)
    staged.commit()

    return ConversionResult(
        name=visitor.document_name,
        content=content,
        file_name=visitor.output_file_name,
        is_map=visitor.produced_map,
    )