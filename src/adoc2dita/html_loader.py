"""Rebuild a document tree from Asciidoctor's HTML5 output."""

from __future__ import annotations

import logging
import re

from adoc2dita.exceptions import LoadError
from adoc2dita.schemas import (
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

try:
    from bs4 import BeautifulSoup
    from bs4.element import Comment, NavigableString, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise LoadError(
        "BeautifulSoup4 is required for HTML loading (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

_SECTION_RE = re.compile(r"^sect[0-6]$")
_HEADING_RE = re.compile(r"^h[1-6]$")
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
# Asciidoctor prefixes the ids it derives from titles with an underscore.
_GENERATED_ID_PREFIX = "_"
_ADMONITION_LABELS = ("note", "tip", "warning", "caution", "important")
_SKIPPED_TAGS = {"hr", "br", "script", "style"}

Node = Section | Block | ListNode | DescriptionList | Table


def parse_asciidoctor_html(html: str) -> DocumentTree:
    """Extract title and block/section structure from an Asciidoctor page."""
    soup = BeautifulSoup(html, "lxml")
    return DocumentTree(
        title=_extract_title(soup),
        blocks=_parse_children(_find_content_root(soup)),
    )


def _find_content_root(soup: BeautifulSoup) -> Tag:
    """Find the element holding the document body.

    Searches ``div#content`` (standalone pages), then ``<body>``, then falls
    back to the soup itself for embedded fragments.
    """
    content = soup.find("div", id="content")
    if content:
        return content
    if soup.body:
        return soup.body
    return soup


def _extract_title(soup: BeautifulSoup) -> str | None:
    header = soup.find("div", id="header")
    heading = header.find("h1") if header else None
    if heading:
        return _normalize_text(heading.get_text(" ", strip=True))
    if soup.title:
        return _normalize_text(soup.title.get_text(" ", strip=True))
    return None


def _parse_children(container: Tag) -> list[Node]:
    nodes: list[Node] = []
    for child in container.children:
        if not isinstance(child, Tag):
            continue
        nodes.extend(_parse_node(child))
    return nodes


def _parse_node(tag: Tag) -> list[Node]:
    classes = tag.get("class", [])

    if tag.name == "table" and "tableblock" in classes:
        return [_parse_table(tag)]
    if tag.name in _SKIPPED_TAGS or _HEADING_RE.match(tag.name):
        return []
    if tag.name != "div":
        logger.debug("Ignoring <%s> outside of a block", tag.name)
        return []

    if tag.get("id") == "preamble":
        body = tag.find("div", class_="sectionbody", recursive=False) or tag
        return [Block(context="preamble", blocks=_parse_children(body))]
    if any(_SECTION_RE.match(cls) for cls in classes):
        return [_parse_section(tag)]
    if "paragraph" in classes:
        return [_parse_paragraph(tag)]
    if "listingblock" in classes or "literalblock" in classes:
        return [_parse_listing(tag)]
    if "imageblock" in classes:
        return [_parse_image(tag)]
    if "admonitionblock" in classes:
        return [_parse_admonition(tag)]
    if "ulist" in classes or "olist" in classes:
        return [_parse_list(tag)]
    if "colist" in classes:
        return [_parse_callout_list(tag)]
    if "dlist" in classes:
        return [_parse_description_list(tag)]
    if "quoteblock" in classes or "verseblock" in classes:
        return [_parse_quote(tag)]
    if "title" in classes:
        return []

    # Wrappers (sectionbody, content, sidebar, example...) are transparent.
    return _parse_children(tag)


def _parse_section(tag: Tag) -> Section:
    heading = tag.find(_HEADING_RE, recursive=False)
    title = _normalize_text(heading.get_text(" ", strip=True)) if heading else None
    body = tag.find("div", class_="sectionbody", recursive=False) or tag
    return Section(id=_explicit_id(heading), title=title, blocks=_parse_children(body))


def _parse_paragraph(tag: Tag) -> Block:
    paragraph = tag.find("p") or tag
    return Block(
        context="paragraph",
        id=_explicit_id(tag),
        title=_block_title(tag),
        inlines=_parse_inlines(paragraph),
    )


def _parse_listing(tag: Tag) -> Block:
    pre = tag.find("pre")
    code = pre.find("code") if pre else None
    text = (pre or tag).get_text()
    attributes: dict[str, str] = {}
    language = code.get("data-lang") if code else None
    if language:
        attributes["language"] = language
    return Block(
        context="listing",
        id=_explicit_id(tag),
        title=_block_title(tag),
        attributes=attributes,
        lines=text.splitlines(),
    )


def _parse_image(tag: Tag) -> Block:
    img = tag.find("img")
    attributes: dict[str, str] = {}
    if img and img.get("src"):
        attributes["target"] = img["src"]
    if img and img.get("alt"):
        attributes["alt"] = img["alt"]
    return Block(context="image", id=_explicit_id(tag), title=_block_title(tag), attributes=attributes)


def _parse_admonition(tag: Tag) -> Block:
    classes = tag.get("class", [])
    label = next((cls for cls in classes if cls in _ADMONITION_LABELS), None)
    if label is None:
        icon_title = tag.select_one("td.icon .title")
        label = icon_title.get_text(strip=True) if icon_title else "note"
    content = tag.find("td", class_="content") or tag
    block_children = [child for child in content.children if isinstance(child, Tag) and child.name == "div"]
    if block_children:
        return Block(
            context="admonition",
            id=_explicit_id(tag),
            attributes={"textlabel": label.capitalize()},
            blocks=_parse_children(content),
        )
    return Block(
        context="admonition",
        id=_explicit_id(tag),
        attributes={"textlabel": label.capitalize()},
        inlines=_parse_inlines(content),
    )


def _parse_list(tag: Tag) -> ListNode:
    list_tag = tag.find(["ul", "ol"])
    style = "ordered" if list_tag is not None and list_tag.name == "ol" else "unordered"
    items = [_parse_list_item(li) for li in list_tag.find_all("li", recursive=False)] if list_tag else []
    return ListNode(style=style, id=_explicit_id(tag), items=items)


def _parse_list_item(li: Tag) -> ListItem:
    text_tag = li.find("p", recursive=False)
    nested = [child for child in li.children if isinstance(child, Tag) and child.name == "div"]
    blocks: list[Node] = []
    for child in nested:
        blocks.extend(_parse_node(child))
    if text_tag is None and not nested:
        text_tag = li
    return ListItem(inlines=_parse_inlines(text_tag) if text_tag else [], blocks=blocks)


def _parse_callout_list(tag: Tag) -> ListNode:
    items: list[ListItem] = []
    for row in tag.find_all("tr"):
        cells = row.find_all("td", recursive=False)
        if cells:
            items.append(ListItem(inlines=_parse_inlines(cells[-1])))
    if not items:
        for li in tag.find_all("li"):
            items.append(_parse_list_item(li))
    return ListNode(style="ordered", id=_explicit_id(tag), items=items)


def _parse_description_list(tag: Tag) -> DescriptionList:
    entries: list[DescriptionListEntry] = []
    dl = tag.find("dl")
    if dl is None:
        return DescriptionList(id=_explicit_id(tag))
    current: DescriptionListEntry | None = None
    for child in dl.children:
        if not isinstance(child, Tag):
            continue
        if child.name == "dt":
            if current is None or current.description is not None:
                current = DescriptionListEntry()
                entries.append(current)
            current.terms.append(ListItem(inlines=_parse_inlines(child)))
        elif child.name == "dd":
            if current is None:
                current = DescriptionListEntry()
                entries.append(current)
            current.description = _parse_list_item(child)
    return DescriptionList(id=_explicit_id(tag), items=entries)


def _parse_quote(tag: Tag) -> Block:
    quote = tag.find(["blockquote", "pre"]) or tag
    attributes: dict[str, str] = {}
    attribution = tag.find("div", class_="attribution")
    if attribution:
        attributes["attribution"] = _normalize_text(attribution.get_text(" ", strip=True)).lstrip("\u2014 ").strip()
    block_children = [child for child in quote.children if isinstance(child, Tag) and child.name == "div"]
    if block_children:
        return Block(context="quote", id=_explicit_id(tag), attributes=attributes, blocks=_parse_children(quote))
    return Block(context="quote", id=_explicit_id(tag), attributes=attributes, inlines=_parse_inlines(quote))


def _parse_table(table: Tag) -> Table:
    caption = table.find("caption")
    sections: dict[str, list[Row]] = {"thead": [], "tbody": [], "tfoot": []}
    for part in sections:
        for group in table.find_all(part, recursive=False):
            for row in group.find_all("tr", recursive=False):
                sections[part].append(_parse_row(row))
    return Table(
        id=_explicit_id(table),
        title=_normalize_text(caption.get_text(" ", strip=True)) if caption else None,
        header=sections["thead"],
        body=sections["tbody"],
        footer=sections["tfoot"],
    )


def _parse_row(row: Tag) -> Row:
    return Row(cells=[_parse_cell(cell) for cell in row.find_all(["th", "td"], recursive=False)])


def _parse_cell(cell: Tag) -> Cell:
    content = cell.find("div", class_="content", recursive=False)
    if content is not None:
        return Cell(style="asciidoc", inner_document=DocumentTree(blocks=_parse_children(content)))
    paragraphs = cell.find_all("p", class_="tableblock")
    if paragraphs:
        text = "\n".join(_normalize_text(p.get_text(" ", strip=True)) for p in paragraphs)
    else:
        text = _normalize_text(cell.get_text(" ", strip=True))
    return Cell(text=text)


def _parse_inlines(tag: Tag) -> list[InlineSpan]:
    spans: list[InlineSpan] = []
    for child in tag.children:
        spans.extend(_parse_inline(child))
    return _merge_lines(spans)


def _parse_inline(node: Tag | NavigableString) -> list[InlineSpan]:
    if isinstance(node, Comment):
        return []
    if isinstance(node, NavigableString):
        text = str(node)
        return [InlineSpan(type="line", text=text)] if text else []

    classes = node.get("class", [])
    text = node.get_text()

    if "conum" in classes:
        return [InlineSpan(type="callout", text=text)]
    if node.name == "br":
        return [InlineSpan(type="line", text="\n")]
    if node.name == "code":
        return [InlineSpan(type="monospaced", text=text)]
    if node.name in {"strong", "b"}:
        return [InlineSpan(type="strong", text=text)]
    if node.name in {"em", "i"}:
        return [InlineSpan(type="emphasis", text=text)]
    if node.name == "a":
        return [_parse_anchor(node)]
    if node.name == "div":
        # Block-level leftovers inside an inline container
        return [InlineSpan(type="line", text=_normalize_text(text))]
    return _merge_lines([span for child in node.children for span in _parse_inline(child)])


def _parse_anchor(node: Tag) -> InlineSpan:
    href = node.get("href")
    text = node.get_text()
    if not href:
        return InlineSpan(type="line", text=text)
    if href.startswith("#"):
        return InlineSpan(type="xref", text=text, anchor=href[1:] or None)
    if _SCHEME_RE.match(href):
        return InlineSpan(type="link", text=text, target=href)
    path, _, anchor = href.partition("#")
    return InlineSpan(type="xref", text=text, target=path, anchor=anchor or None)


def _merge_lines(spans: list[InlineSpan]) -> list[InlineSpan]:
    merged: list[InlineSpan] = []
    for span in spans:
        if merged and span.type == "line" and merged[-1].type == "line":
            merged[-1] = InlineSpan(type="line", text=merged[-1].text + span.text)
        else:
            merged.append(span)
    return merged


def _explicit_id(tag: Tag | None) -> str | None:
    if tag is None:
        return None
    identifier = tag.get("id")
    if not identifier or identifier.startswith(_GENERATED_ID_PREFIX):
        return None
    return identifier


def _block_title(tag: Tag) -> str | None:
    title = tag.find("div", class_="title", recursive=False)
    if not title:
        return None
    return _normalize_text(title.get_text(" ", strip=True))


def _normalize_text(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()
