"""Test setup for adoc2dita."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from adoc2dita.aggregator import Aggregator  # noqa: E402
from adoc2dita.schemas import Block, DocumentTree, InlineSpan, Section  # noqa: E402


@pytest.fixture
def aggregator() -> Aggregator:
    """A fresh, empty batch registry."""
    return Aggregator()


@pytest.fixture
def guide_tree() -> DocumentTree:
    """A document titled "Guide" with two flat top-level sections."""
    return DocumentTree(
        title="Guide",
        blocks=[
            Section(title="A", blocks=[Block(context="paragraph", lines=["alpha"])]),
            Section(title="B", blocks=[Block(context="paragraph", lines=["beta"])]),
        ],
    )


@pytest.fixture
def flat_tree() -> DocumentTree:
    """A document without sections holding one paragraph."""
    return DocumentTree(
        title="Hello",
        blocks=[Block(context="paragraph", inlines=[InlineSpan(type="line", text="hello")])],
    )
