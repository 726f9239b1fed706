"""Section hierarchy visited during one document conversion."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


@dataclass
class VisitedSection:
    """A node of the section tree.

    ``parent`` is an index into the owning tree, used for lookups only; the
    tree's arena owns every node.
    """

    identifier: str
    title: str | None = None
    parent: int | None = None
    children: list[int] = field(default_factory=list)


class SectionTree:
    """Arena of visited sections with a cursor.

    The first section entered becomes the root. Every later section is
    attached under the cursor, and leaving a section without a parent keeps
    the cursor on the root, so later top-level sections hang off the root
    as well. A document is decomposed into a map only once the root has
    children.
    """

    ROOT = 0

    def __init__(self) -> None:
        self._nodes: list[VisitedSection] = []
        self._cursor: int | None = None

    @property
    def root(self) -> VisitedSection | None:
        return self._nodes[self.ROOT] if self._nodes else None

    @property
    def current(self) -> VisitedSection | None:
        return self._nodes[self._cursor] if self._cursor is not None else None

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, index: int) -> VisitedSection:
        return self._nodes[index]

    def has_children(self) -> bool:
        """True when a root exists and at least one section hangs off it."""
        return bool(self._nodes) and bool(self._nodes[self.ROOT].children)

    def enter(self, identifier: str, title: str | None = None) -> int:
        """Make the section the root, or attach it under the cursor, and move the cursor onto it."""
        index = len(self._nodes)
        if self._cursor is None:
            self._nodes.append(VisitedSection(identifier, title))
        else:
            self._nodes.append(VisitedSection(identifier, title, parent=self._cursor))
            self._nodes[self._cursor].children.append(index)
        self._cursor = index
        return index

    def leave(self) -> VisitedSection | None:
        """Move the cursor back to the parent of the current section (the root if it has none)."""
        if self._cursor is None:
            return None
        left = self._nodes[self._cursor]
        self._cursor = left.parent if left.parent is not None else self.ROOT
        return left

    def children_of(self, index: int) -> list[VisitedSection]:
        return [self._nodes[child] for child in self._nodes[index].children]

    def walk(self) -> Iterable[tuple[int, VisitedSection]]:
        """Yield ``(depth, node)`` pairs depth-first, starting with the root at depth 0."""

        def _walk(node_index: int, depth: int) -> Iterable[tuple[int, VisitedSection]]:
            yield depth, self._nodes[node_index]
            for child in self._nodes[node_index].children:
                yield from _walk(child, depth + 1)

        if not self._nodes:
            return iter(())
        return _walk(self.ROOT, 0)

    def identifiers(self) -> list[str]:
        """Identifiers of every visited section, in tree order."""
        return [node.identifier for _, node in self.walk()]
