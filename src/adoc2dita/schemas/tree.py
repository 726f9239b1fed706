"""Document tree models consumed by the converter.

The tree mirrors what an AsciiDoc parser exposes per node: a kind, an optional
explicit identifier, a title (documents and sections), an attribute mapping and
either raw lines or child nodes. Block contexts and inline span types are kept
as plain strings so that the renderer, not the loader, decides what it
supports.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class InlineSpan(BaseModel):
    """An inline phrase (monospaced, strong, emphasis, xref, link, line, callout)."""

    type: str
    text: str = ""
    target: str | None = None
    anchor: str | None = None


class ListItem(BaseModel):
    """A list item: inline text followed by optional nested blocks."""

    text: str = ""
    inlines: list[InlineSpan] = Field(default_factory=list)
    blocks: list["Node"] = Field(default_factory=list)


class DescriptionListEntry(BaseModel):
    """One term group of a description list."""

    terms: list[ListItem] = Field(default_factory=list)
    description: ListItem | None = None


class Block(BaseModel):
    """A block node; ``context`` selects the rendering rule."""

    kind: Literal["block"] = "block"
    context: str
    id: str | None = None
    title: str | None = None
    attributes: dict[str, str] = Field(default_factory=dict)
    lines: list[str] = Field(default_factory=list)
    inlines: list[InlineSpan] = Field(default_factory=list)
    blocks: list["Node"] = Field(default_factory=list)


class ListNode(BaseModel):
    """An ordered or unordered list."""

    kind: Literal["list"] = "list"
    style: Literal["unordered", "ordered"] = "unordered"
    id: str | None = None
    items: list[ListItem] = Field(default_factory=list)


class DescriptionList(BaseModel):
    """A term/description list."""

    kind: Literal["dlist"] = "dlist"
    id: str | None = None
    items: list[DescriptionListEntry] = Field(default_factory=list)


class Cell(BaseModel):
    """A table cell holding literal text or an embedded document."""

    text: str = ""
    style: str | None = None
    inner_document: "DocumentTree | None" = None

    @property
    def embeds_markup(self) -> bool:
        return (self.style or "").lower() == "asciidoc" and self.inner_document is not None


class Row(BaseModel):
    """A table row."""

    cells: list[Cell] = Field(default_factory=list)


class Table(BaseModel):
    """A table split into header, body and footer rows."""

    kind: Literal["table"] = "table"
    id: str | None = None
    title: str | None = None
    header: list[Row] = Field(default_factory=list)
    body: list[Row] = Field(default_factory=list)
    footer: list[Row] = Field(default_factory=list)


class Section(BaseModel):
    """A titled section; nesting depth is implied by its position."""

    kind: Literal["section"] = "section"
    id: str | None = None
    title: str | None = None
    blocks: list["Node"] = Field(default_factory=list)


class DocumentTree(BaseModel):
    """Root of one parsed input document."""

    kind: Literal["document"] = "document"
    id: str | None = None
    title: str | None = None
    attributes: dict[str, str] = Field(default_factory=dict)
    blocks: list["Node"] = Field(default_factory=list)


Node = Annotated[
    Union[Section, Block, ListNode, DescriptionList, Table],
    Field(discriminator="kind"),
]

for _model in (
    ListItem,
    DescriptionListEntry,
    Block,
    ListNode,
    DescriptionList,
    Cell,
    Row,
    Table,
    Section,
    DocumentTree,
):
    _model.model_rebuild()
