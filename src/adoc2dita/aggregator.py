"""Batch-wide registry of rendered output files and referenced resources."""

from __future__ import annotations

import logging
from typing import Iterator

logger = logging.getLogger(__name__)


class Aggregator:
    """Output file name -> rendered content, shared by every document of a batch.

    Later writes to the same name overwrite earlier ones; the second batch pass
    relies on this to replace first-pass output.
    """

    def __init__(self) -> None:
        self._documents: dict[str, str] = {}
        self._resources: list[str] = []
        self._pass_number = 0
        # name -> document that wrote it during the current pass
        self._writers: dict[str, str | None] = {}

    @property
    def documents(self) -> dict[str, str]:
        return dict(self._documents)

    @property
    def resources(self) -> list[str]:
        return list(self._resources)

    @property
    def pass_number(self) -> int:
        return self._pass_number

    def __contains__(self, name: object) -> bool:
        return name in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[str]:
        return iter(self._documents)

    def begin_pass(self, number: int) -> None:
        """Mark the start of a batch pass."""
        self._pass_number = number
        self._writers.clear()

    def put(self, name: str, content: str, *, source: str | None = None) -> None:
        """Store ``content`` under ``name``, replacing any previous value."""
        if name in self._writers:
            previous = self._writers[name]
            if source is not None and previous is not None and previous != source:
                logger.warning(
                    "%s written by both %s and %s in pass %s; keeping the latter",
                    name,
                    previous,
                    source,
                    self._pass_number,
                )
        elif name in self._documents:
            logger.debug("Overwriting %s from an earlier pass", name)
        self._documents[name] = content
        self._writers[name] = source

    def get(self, name: str) -> str | None:
        return self._documents.get(name)

    def exists(self, name: str) -> bool:
        return name in self._documents

    def add_resource(self, path: str) -> None:
        """Record a referenced resource path (kept once, in first-seen order)."""
        if path not in self._resources:
            self._resources.append(path)

    def stage(self, source: str | None = None) -> StagedWrites:
        """Open a write buffer for one document conversion."""
        return StagedWrites(self, source=source)


class StagedWrites:
    """Per-document write buffer committed to an Aggregator on success.

    Lookups see both the buffered writes and the target, so a document can
    resolve references against what the batch already knows.
    """

    def __init__(self, target: Aggregator, *, source: str | None = None) -> None:
        self._target = target
        self._source = source
        self._documents: dict[str, str] = {}
        self._resources: list[str] = []

    @property
    def documents(self) -> dict[str, str]:
        return dict(self._documents)

    def put(self, name: str, content: str) -> None:
        self._documents[name] = content

    def get(self, name: str) -> str | None:
        if name in self._documents:
            return self._documents[name]
        return self._target.get(name)

    def exists(self, name: str) -> bool:
        return name in self._documents or self._target.exists(name)

    def add_resource(self, path: str) -> None:
        if path not in self._resources:
            self._resources.append(path)

    def commit(self) -> None:
        """Flush buffered writes into the target aggregator."""
        for name, content in self._documents.items():
            self._target.put(name, content, source=self._source)
        for path in self._resources:
            self._target.add_resource(path)
        self._documents.clear()
        self._resources.clear()
