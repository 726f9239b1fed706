"""Locate and load input document trees from disk."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from adoc2dita.batch import SourceDocument
from adoc2dita.config import SUPPORTED_SUFFIXES
from adoc2dita.exceptions import LoadError
from adoc2dita.html_loader import parse_asciidoctor_html
from adoc2dita.schemas import DocumentTree


def discover_sources(source: Path, *, excludes: Iterable[str] | None = None) -> list[Path]:
    """List the input files of a batch.

    A directory yields its supported files, skipping hidden and excluded
    names, sorted by name; a file yields itself.

    Raises:
        LoadError: If ``source`` does not exist.
    """
    if not source.exists():
        raise LoadError(f"{source} doesn't exist")
    if source.is_file():
        return [source]

    excluded = set(excludes or [])
    return sorted(
        path
        for path in source.iterdir()
        if path.is_file()
        and not path.name.startswith(".")
        and path.suffix.lower() in SUPPORTED_SUFFIXES
        and path.name not in excluded
    )


def load_document(path: Path) -> SourceDocument:
    """Load one input file as a named document tree.

    ``.json`` files hold a serialized :class:`DocumentTree`; ``.html`` and
    ``.htm`` files are Asciidoctor HTML5 output. The document is named after
    the file stem.

    Raises:
        LoadError: If the file cannot be read or does not describe a tree.
    """
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LoadError(f"Unable to read {path}: {exc}") from exc

    if suffix == ".json":
        try:
            tree = DocumentTree.model_validate_json(text)
        except ValidationError as exc:
            raise LoadError(f"{path} is not a valid document tree: {exc}") from exc
    elif suffix in {".html", ".htm"}:
        tree = parse_asciidoctor_html(text)
    else:
        raise LoadError(f"Unsupported input file: {path}")

    return SourceDocument(name=path.stem, tree=tree)


def load_documents(paths: Iterable[Path]) -> list[SourceDocument]:
    return [load_document(path) for path in paths]
