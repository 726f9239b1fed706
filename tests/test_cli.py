"""Tests for the adoc2dita command line."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

import pytest

from adoc2dita.cli import build_parser, main
from adoc2dita.schemas import Block, DocumentTree


@pytest.fixture
def source_dir(tmp_path: Path, guide_tree: DocumentTree, flat_tree: DocumentTree) -> Path:
    source = tmp_path / "docs"
    (source / "images").mkdir(parents=True)
    (source / "images" / "logo.png").write_bytes(b"png")
    with_image = DocumentTree(
        title="Logo",
        blocks=[Block(context="image", attributes={"target": "images/logo.png"})],
    )
    (source / "guide.json").write_text(guide_tree.model_dump_json(), encoding="utf-8")
    (source / "hello.json").write_text(flat_tree.model_dump_json(), encoding="utf-8")
    (source / "logo.json").write_text(with_image.model_dump_json(), encoding="utf-8")
    (source / "draft.json").write_text("not json", encoding="utf-8")
    return source


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        """Flags default to formatted output with paragraphs for preambles."""
        args = build_parser().parse_args(["in", "out"])

        assert args.source == Path("in")
        assert args.target == Path("out")
        assert args.exclude == []
        assert args.bundle == []
        assert args.pretty is True
        assert args.preamble_as_paragraph is True
        assert args.skip_failed is False

    def test_repeatable_options(self) -> None:
        """Excludes and bundles may be given several times."""
        args = build_parser().parse_args(
            ["in", "out", "--exclude", "a.json", "--exclude", "b.json", "--bundle", "zip", "--bundle", "tar.gz"]
        )

        assert args.exclude == ["a.json", "b.json"]
        assert args.bundle == ["zip", "tar.gz"]

    def test_entry_points_are_documented(self) -> None:
        """The parser builder and main carry docstrings for pydoc."""
        assert build_parser.__doc__
        assert main.__doc__

    def test_rejects_unknown_bundle(self) -> None:
        """Only known archive formats are accepted."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["in", "out", "--bundle", "rar"])


class TestMain:
    """Tests for the main entry point."""

    def test_converts_directory(self, tmp_path: Path, source_dir: Path) -> None:
        """Every input is converted and its resources copied."""
        target = tmp_path / "out"

        code = main([str(source_dir), str(target), "--exclude", "draft.json", "--no-format"])

        assert code == 0
        produced = sorted(path.name for path in target.iterdir() if path.is_file())
        assert produced == ["c-A.dita", "c-B.dita", "c-hello.dita", "c-logo.dita", "dm-guide.ditamap"]
        assert (target / "images" / "logo.png").read_bytes() == b"png"
        assert (target / "c-hello.dita").read_text(encoding="utf-8").endswith("</concept>")

    def test_bundles_output(self, tmp_path: Path, source_dir: Path) -> None:
        """Requested bundles are written beside the output directory."""
        target = tmp_path / "out"

        code = main([str(source_dir), str(target), "--exclude", "draft.json", "--bundle", "zip"])

        assert code == 0
        archive = tmp_path / "out-dita-bundle.zip"
        with zipfile.ZipFile(archive) as bundle:
            assert "dm-guide.ditamap" in bundle.namelist()

    def test_load_error_fails(self, tmp_path: Path, source_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
        """An unreadable input aborts with a non-zero status."""
        with caplog.at_level(logging.ERROR):
            code = main([str(source_dir), str(tmp_path / "out")])

        assert code == 1
        assert "draft.json" in caplog.text
        assert not (tmp_path / "out").exists()

    def test_conversion_failure_with_skip(
        self, tmp_path: Path, source_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Skipped documents are reported and the exit status is non-zero."""
        broken = DocumentTree(title="Broken", blocks=[Block(context="sidebar")])
        (source_dir / "broken.json").write_text(broken.model_dump_json(), encoding="utf-8")
        target = tmp_path / "out"

        with caplog.at_level(logging.ERROR):
            code = main([str(source_dir), str(target), "--exclude", "draft.json", "--skip-failed", "--no-format"])

        assert code == 1
        assert "broken failed in pass 1" in caplog.text
        assert (target / "c-hello.dita").exists()
        assert not (target / "c-broken.dita").exists()

    def test_conversion_failure_aborts(
        self, tmp_path: Path, source_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Without --skip-failed a broken document stops the run."""
        broken = DocumentTree(title="Broken", blocks=[Block(context="sidebar")])
        (source_dir / "broken.json").write_text(broken.model_dump_json(), encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            code = main([str(source_dir), str(tmp_path / "out"), "--exclude", "draft.json"])

        assert code == 1
        assert "Failed to convert 'broken'" in caplog.text

    def test_single_file_cannot_be_bundled(
        self, tmp_path: Path, source_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Bundling a single-file conversion is skipped with a warning."""
        with caplog.at_level(logging.WARNING):
            code = main([str(source_dir / "hello.json"), str(tmp_path / "out"), "--bundle", "zip"])

        assert code == 0
        assert (tmp_path / "out" / "c-hello.dita").exists()
        assert not (tmp_path / "out-dita-bundle.zip").exists()
        assert "can't be bundled" in caplog.text
