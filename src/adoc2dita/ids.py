"""Identifier allocation scoped to one document conversion."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s")


def slugify_title(title: str) -> str:
    """Derive an identifier base from a title (whitespace becomes ``_``)."""
    return _WHITESPACE_RE.sub("_", title.strip())


class IdentifierRegistry:
    """Hands out identifiers that are unique within the current document."""

    def __init__(self) -> None:
        self._allocated: set[str] = set()

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._allocated

    def __len__(self) -> int:
        return len(self._allocated)

    def clear(self) -> None:
        self._allocated.clear()

    def allocate(self, candidate: str | None, title: str | None = None) -> str | None:
        """Allocate an identifier from an explicit id, else from a title.

        Returns None when neither is usable. A taken base gets the first free
        integer suffix appended (``Overview``, ``Overview1``, ``Overview2``...).
        """
        base = candidate.strip() if candidate and candidate.strip() else None
        if base is None and title and title.strip():
            base = slugify_title(title)
        if base is None:
            return None

        identifier = base
        suffix = 1
        while identifier in self._allocated:
            identifier = f"{base}{suffix}"
            suffix += 1
        self._allocated.add(identifier)
        return identifier
