"""Tests for two-pass batch conversion."""

from __future__ import annotations

import pytest

from adoc2dita.aggregator import Aggregator
from adoc2dita.batch import SourceDocument, convert_batch
from adoc2dita.converter import convert_document
from adoc2dita.exceptions import DocumentConversionError, UnsupportedNodeKind
from adoc2dita.options import ConversionOptions
from adoc2dita.schemas import Block, DocumentTree, InlineSpan, Section


def _referencing_document() -> SourceDocument:
    paragraph = Block(
        context="paragraph",
        inlines=[
            InlineSpan(type="line", text="See "),
            InlineSpan(type="xref", text="the guide", target="y.adoc"),
        ],
    )
    return SourceDocument(name="x", tree=DocumentTree(title="X", blocks=[paragraph]))


def _sectioned_document() -> SourceDocument:
    tree = DocumentTree(
        title="Y",
        blocks=[
            Section(title="S1", blocks=[Block(context="paragraph", lines=["one"])]),
            Section(title="S2", blocks=[Block(context="paragraph", lines=["two"])]),
        ],
    )
    return SourceDocument(name="y", tree=tree)


def _broken_document() -> SourceDocument:
    tree = DocumentTree(
        title="Broken",
        blocks=[
            Section(title="Fine", blocks=[Block(context="paragraph", lines=["ok"])]),
            Block(context="sidebar", lines=["nope"]),
        ],
    )
    return SourceDocument(name="broken", tree=tree)


class TestConvertBatch:
    """Tests for convert_batch."""

    def test_first_pass_alone_points_at_topic(self) -> None:
        """Converting the referrer before its target cannot see the map yet."""
        aggregator = Aggregator()

        result = convert_document(_referencing_document().tree, aggregator, name="x")

        assert '<xref href="c-y.dita">the guide</xref>' in result.content

    def test_second_pass_resolves_forward_reference(self) -> None:
        """After two passes the reference points at the target's map."""
        result, aggregator = convert_batch([_referencing_document(), _sectioned_document()])

        assert '<xref href="dm-y.ditamap">the guide</xref>' in aggregator.get("c-x.dita")
        assert aggregator.pass_number == 2
        assert [doc.name for doc in result.documents] == ["x", "y"]
        assert result.failures == []

    def test_flat_documents_are_persisted_under_topic_name(self) -> None:
        """Documents without a map are written as c-<name>.dita."""
        _, aggregator = convert_batch([_referencing_document(), _sectioned_document()])

        assert sorted(aggregator) == ["c-S1.dita", "c-S2.dita", "c-x.dita", "dm-y.ditamap"]
        assert "c-y.dita" not in aggregator

    def test_uses_given_aggregator(self) -> None:
        """A caller-provided registry is filled and returned."""
        registry = Aggregator()

        _, returned = convert_batch([_referencing_document()], aggregator=registry)

        assert returned is registry
        assert "c-x.dita" in registry

    def test_failure_aborts_by_default(self) -> None:
        """A failing document stops the batch in the first pass."""
        with pytest.raises(DocumentConversionError) as exc_info:
            convert_batch([_referencing_document(), _broken_document()])

        error = exc_info.value
        assert error.name == "broken"
        assert error.pass_number == 1
        assert isinstance(error.cause, UnsupportedNodeKind)
        assert "sidebar" in str(error)

    def test_failed_document_writes_nothing(self) -> None:
        """Topics staged before the failure never reach the registry."""
        registry = Aggregator()

        with pytest.raises(DocumentConversionError):
            convert_batch([_referencing_document(), _broken_document()], aggregator=registry)

        assert "c-Fine.dita" not in registry
        assert "c-x.dita" in registry
        assert registry.pass_number == 1

    def test_skip_failed_records_and_continues(self) -> None:
        """With skip_failed the batch finishes without the broken document."""
        options = ConversionOptions(skip_failed=True)

        result, aggregator = convert_batch(
            [_broken_document(), _referencing_document(), _sectioned_document()], options=options
        )

        assert len(result.failures) == 1
        failure = result.failures[0]
        assert failure.name == "broken"
        assert failure.pass_number == 1
        assert "sidebar" in failure.error
        assert [doc.name for doc in result.documents] == ["x", "y"]
        assert "c-Fine.dita" not in aggregator
        assert '<xref href="dm-y.ditamap">' in aggregator.get("c-x.dita")

    def test_empty_batch(self) -> None:
        """No documents produce no output."""
        result, aggregator = convert_batch([])

        assert result.documents == []
        assert len(aggregator) == 0
