"""Tests for input discovery and loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from adoc2dita.exceptions import LoadError
from adoc2dita.loading import discover_sources, load_document, load_documents
from adoc2dita.schemas import DocumentTree


def _write_tree(path: Path, tree: DocumentTree) -> Path:
    path.write_text(tree.model_dump_json(), encoding="utf-8")
    return path


class TestDiscoverSources:
    """Tests for discover_sources function."""

    def test_directory_lists_supported_files(self, tmp_path: Path) -> None:
        """Hidden, excluded and unsupported files are skipped; results are sorted."""
        for name in ["b.json", "a.html", "c.htm", ".hidden.json", "skip.json", "notes.txt"]:
            (tmp_path / name).write_text("{}", encoding="utf-8")
        (tmp_path / "sub").mkdir()

        sources = discover_sources(tmp_path, excludes=["skip.json"])

        assert [path.name for path in sources] == ["a.html", "b.json", "c.htm"]

    def test_single_file(self, tmp_path: Path) -> None:
        """A file source yields just that file."""
        path = tmp_path / "one.json"
        path.write_text("{}", encoding="utf-8")

        assert discover_sources(path) == [path]

    def test_missing_source(self, tmp_path: Path) -> None:
        """A missing source is a load error."""
        with pytest.raises(LoadError, match="doesn't exist"):
            discover_sources(tmp_path / "absent")


class TestLoadDocument:
    """Tests for load_document function."""

    def test_json_tree(self, tmp_path: Path, guide_tree: DocumentTree) -> None:
        """JSON files are validated into document trees named after the stem."""
        path = _write_tree(tmp_path / "guide.json", guide_tree)

        document = load_document(path)

        assert document.name == "guide"
        assert document.tree == guide_tree

    def test_json_discriminates_node_kinds(self, tmp_path: Path) -> None:
        """Raw JSON children are resolved by their kind field."""
        path = tmp_path / "raw.json"
        path.write_text(
            '{"title": "Raw", "blocks": ['
            '{"kind": "section", "title": "S", "blocks": [{"kind": "block", "context": "paragraph", "lines": ["x"]}]},'
            '{"kind": "list", "items": [{"text": "a"}]}'
            "]}",
            encoding="utf-8",
        )

        tree = load_document(path).tree

        assert [node.kind for node in tree.blocks] == ["section", "list"]
        assert tree.blocks[0].blocks[0].context == "paragraph"

    def test_invalid_json_tree(self, tmp_path: Path) -> None:
        """Content that is not a tree is reported with the file name."""
        path = tmp_path / "bad.json"
        path.write_text('{"blocks": [{"kind": "mystery"}]}', encoding="utf-8")

        with pytest.raises(LoadError, match="bad.json"):
            load_document(path)

    def test_html_page(self, tmp_path: Path) -> None:
        """HTML files go through the Asciidoctor loader."""
        path = tmp_path / "page.html"
        path.write_text(
            '<div id="header"><h1>Page</h1></div><div id="content"><div class="paragraph"><p>hi</p></div></div>',
            encoding="utf-8",
        )

        document = load_document(path)

        assert document.name == "page"
        assert document.tree.title == "Page"
        assert document.tree.blocks[0].inlines[0].text == "hi"

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        """Unknown file types are rejected."""
        path = tmp_path / "notes.txt"
        path.write_text("plain", encoding="utf-8")

        with pytest.raises(LoadError, match="Unsupported input file"):
            load_document(path)

    def test_unreadable_file(self, tmp_path: Path) -> None:
        """Read failures are wrapped in LoadError."""
        with pytest.raises(LoadError, match="Unable to read"):
            load_document(tmp_path / "missing.json")

    def test_load_documents_keeps_order(self, tmp_path: Path, flat_tree: DocumentTree) -> None:
        """Documents are returned in the order of their paths."""
        paths = [_write_tree(tmp_path / f"{name}.json", flat_tree) for name in ("z", "a")]

        assert [document.name for document in load_documents(paths)] == ["z", "a"]
