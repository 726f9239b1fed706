"""DITA rendering rules and section-to-topic decomposition."""

from __future__ import annotations

import logging
import re
from pathlib import PurePosixPath
from typing import Union

from adoc2dita.aggregator import Aggregator, StagedWrites
from adoc2dita.escaping import cdata, strip_unresolved_xrefs, xml_attr, xml_escape
from adoc2dita.ids import IdentifierRegistry
from adoc2dita.options import ConversionOptions
from adoc2dita.schemas import (
    Block,
    Cell,
    DescriptionList,
    DocumentTree,
    ListNode,
    Row,
    Section,
    Table,
)
from adoc2dita.sections import SectionTree
from adoc2dita.visitor import ContentSupplier, DocumentConverter, DocumentVisitor

logger = logging.getLogger(__name__)

Output = Union[Aggregator, StagedWrites]

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
_CONCEPT_DOCTYPE = '<!DOCTYPE concept PUBLIC "-//OASIS//DTD DITA Concept//EN" "concept.dtd">\n'
_MAP_DOCTYPE = '<!DOCTYPE map PUBLIC "-//OASIS//DTD DITA Map//EN" "map.dtd">\n'
_NOTE_TYPES = frozenset({"note", "tip", "warning", "caution", "important"})
_SOURCE_SUFFIX_RE = re.compile(r"\.(?:adoc|asciidoc|asc|ad|html?|json|dita|ditamap)$", re.IGNORECASE)
_REMOTE_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://|^data:")


class DitaVisitor(DocumentVisitor):
    """Renders one document tree as DITA concepts, plus a map when it has several sections.

    Every addressable section is written to the output as its own concept
    (``c-<id>.dita``) in addition to being embedded in its parent. When the
    section tree root (the first section entered) has children, a map
    (``dm-<name>.ditamap``) listing those concepts is written as well and the
    document's own concept is only returned. Otherwise the concept is returned
    and left for the caller to persist.
    """

    def __init__(
        self,
        output: Output,
        *,
        name: str | None = None,
        options: ConversionOptions | None = None,
    ) -> None:
        self._output = output
        self._name = name
        self._options = options or ConversionOptions()
        self._ids = IdentifierRegistry()
        self._sections: SectionTree | None = None
        self._document_id: str | None = None
        self._in_table = False
        self._section_depth = 0
        self._produced_map = False

    @property
    def document_name(self) -> str:
        return self._name or self._document_id or "document"

    @property
    def produced_map(self) -> bool:
        return self._produced_map

    @property
    def map_file_name(self) -> str:
        return self._options.map_file_name(self.document_name)

    @property
    def output_file_name(self) -> str:
        if self._produced_map:
            return self.map_file_name
        return self._options.topic_file_name(self.document_name)

    # Structure

    def on_document(self, document: DocumentTree, transform: str | None, content: ContentSupplier) -> str:
        if transform == "table" or self._in_table:
            return content()

        self._ids.clear()
        title = document.title
        document_id = self._ids.allocate(document.id, title or self._name) or "document"
        self._document_id = document_id
        self._sections = SectionTree()
        self._produced_map = False

        body = content()
        topic = self._concept(document_id, title or document_id, body)

        if self._sections.has_children():
            self._output.put(self.map_file_name, self._map(document_id, title or document_id))
            self._produced_map = True
            logger.debug(
                "%s decomposed into %s topics", self.map_file_name, len(self._sections.identifiers())
            )
        return topic

    def on_section(self, section: Section, transform: str | None, content: ContentSupplier) -> str:
        title = section.title
        identifier = self._ids.allocate(section.id, title)
        nested = self._section_depth > 0
        tree = self._tree()

        if identifier is not None:
            tree.enter(identifier, title)
        self._section_depth += 1
        try:
            body = content()
        finally:
            self._section_depth -= 1
            if identifier is not None:
                tree.leave()

        if identifier is not None:
            topic_name = self._options.topic_file_name(identifier)
            self._output.put(topic_name, self._concept(identifier, title or identifier, f"<section>{body}</section>"))
            logger.debug("Wrote section topic %s", topic_name)

        tag, title_tag = ("sectiondiv", "b") if nested else ("section", "title")
        id_attr = f' id="{xml_attr(identifier)}"' if identifier else ""
        heading = f"<{title_tag}>{xml_escape(title)}</{title_tag}>\n" if title else ""
        return f"<{tag}{id_attr}>{heading}{body}</{tag}>\n"

    # Blocks

    def on_listing(self, block: Block, transform: str | None, text: str) -> str:
        language = block.attributes.get("language")
        outputclass = f' outputclass="language-{xml_attr(language)}"' if language else ""
        return f"<codeblock{outputclass}>{xml_escape(text)}</codeblock>\n"

    def on_paragraph(self, block: Block, transform: str | None, content: ContentSupplier) -> str:
        if block.blocks or self._in_table:
            return content()
        return f"<p>{content()}</p>\n"

    def on_preamble(self, block: Block, transform: str | None, content: ContentSupplier) -> str:
        return f"<abstract>{content()}</abstract>\n"

    def on_image(self, block: Block, transform: str | None, alt: str, path: str) -> str:
        identifier = self._ids.allocate(block.id, path.replace("/", "_").replace(".", "_"))
        remote = bool(_REMOTE_RE.match(path))
        if not remote:
            self._output.add_resource(path)
        title = f"<title>{xml_escape(block.title)}</title>" if block.title else ""
        scope = ' scope="external"' if remote else ""
        return (
            f'<fig id="fig_{xml_attr(identifier)}">{title}'
            f'<image href="{xml_attr(path)}" id="image_{xml_attr(identifier)}"{scope}>'
            f"<alt>{xml_escape(alt)}</alt></image></fig>\n"
        )

    def on_admonition(self, block: Block, transform: str | None, label: str, content: ContentSupplier) -> str:
        return f'<note type="{_note_type(label)}">{content()}</note>\n'

    def on_passthrough(self, block: Block, transform: str | None, text: str) -> str:
        return text

    def on_quote(self, block: Block, transform: str | None, content: ContentSupplier) -> str:
        attribution = block.attributes.get("attribution")
        reftitle = f' reftitle="{xml_attr(attribution)}"' if attribution else ""
        return f"<lq{reftitle}>{content()}</lq>\n"

    def on_list(self, node: ListNode, transform: str | None, items: list[str]) -> str:
        tag = "ol" if node.style == "ordered" else "ul"
        body = "\n".join(f"<li>{item}</li>" for item in items)
        return f"<{tag}>\n{body}\n</{tag}>\n"

    def on_description_list(
        self, node: DescriptionList, transform: str | None, entries: list[tuple[list[str], str]]
    ) -> str:
        rendered = []
        for terms, description in entries:
            dts = "".join(f"<dt>{term}</dt>" for term in terms)
            rendered.append(f"<dlentry>{dts}<dd>{description}</dd></dlentry>")
        return "<dl>\n" + "\n".join(rendered) + "\n</dl>\n"

    def on_table(self, table: Table, transform: str | None, convert_document: DocumentConverter) -> str:
        # TODO: emit relcolwidth once column specs are part of the table model
        was_in_table = self._in_table
        self._in_table = True
        try:
            rows = self._rows(table.header, "sthead", convert_document)
            rows += self._rows(table.body, "strow", convert_document)
            rows += self._rows(table.footer, "strow", convert_document)
        finally:
            self._in_table = was_in_table
        id_attr = f' id="{xml_attr(table.id)}"' if table.id else ""
        return f'<simpletable frame="all"{id_attr}>\n' + "\n".join(rows) + "\n</simpletable>\n"

    # Inline

    def on_monospaced(self, text: str) -> str:
        return f"<codeph>{cdata(text)}</codeph>"

    def on_strong(self, text: str) -> str:
        return f"<b>{xml_escape(text)}</b>"

    def on_emphasis(self, text: str) -> str:
        return f"<i>{xml_escape(text)}</i>"

    def on_xref(self, text: str, target: str | None, anchor: str | None) -> str:
        name = _target_name(target) if target else self.document_name
        map_name = self._options.map_file_name(name)
        href = map_name if self._output.exists(map_name) else self._options.topic_file_name(name)
        if anchor:
            href += f"#{anchor}"
        label = text or anchor or name
        return f'<xref href="{xml_attr(href)}">{xml_escape(label)}</xref>'

    def on_link(self, text: str, url: str) -> str:
        return f'<xref href="{xml_attr(url)}" scope="external" format="html">{xml_escape(text or url)}</xref>'

    def on_line(self, text: str) -> str:
        return xml_escape(strip_unresolved_xrefs(text))

    def on_callout(self, text: str) -> str:
        return ""

    # Helpers

    def _tree(self) -> SectionTree:
        if self._sections is None:
            self._sections = SectionTree()
        return self._sections

    def _concept(self, identifier: str, title: str, body: str) -> str:
        return (
            _XML_DECLARATION
            + _CONCEPT_DOCTYPE
            + f'<concept id="{xml_attr(identifier)}" xml:lang="{xml_attr(self._options.lang)}">'
            + f"<title>{xml_escape(title)}</title>"
            + f"<conbody>{body}</conbody>"
            + "</concept>"
        )

    def _map(self, identifier: str, title: str) -> str:
        tree = self._tree()
        refs = self._topicref(tree, SectionTree.ROOT)
        return (
            _XML_DECLARATION
            + _MAP_DOCTYPE
            + f'<map id="{xml_attr(identifier)}" xml:lang="{xml_attr(self._options.lang)}">'
            + f"<title>{xml_escape(title)}</title>\n"
            + refs
            + "\n</map>"
        )

    def _topicref(self, tree: SectionTree, index: int) -> str:
        node = tree.node(index)
        href = xml_attr(self._options.topic_file_name(node.identifier))
        if not node.children:
            return f'<topicref href="{href}" />'
        nested = "\n".join(self._topicref(tree, child) for child in node.children)
        return f'<topicref href="{href}">\n{nested}\n</topicref>'

    def _rows(self, rows: list[Row], marker: str, convert_document: DocumentConverter) -> list[str]:
        rendered = []
        for row in rows:
            if not row.cells:
                continue
            entries = "".join(f"<stentry>{self._cell(cell, convert_document)}</stentry>\n" for cell in row.cells)
            rendered.append(f"<{marker}>{entries}</{marker}>")
        return rendered

    def _cell(self, cell: Cell, convert_document: DocumentConverter) -> str:
        if cell.embeds_markup:
            return convert_document(cell.inner_document)
        return xml_escape(cell.text)


def _note_type(label: str) -> str:
    note_type = label.strip().lower()
    return note_type if note_type in _NOTE_TYPES else "note"


def _target_name(target: str) -> str:
    """Reduce a cross-reference target path to the base name it is converted under."""
    name = PurePosixPath(target.replace("\\", "/")).name
    return _SOURCE_SUFFIX_RE.sub("", name)
