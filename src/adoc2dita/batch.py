"""Two-pass batch conversion of related documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from adoc2dita.aggregator import Aggregator
from adoc2dita.converter import convert_document
from adoc2dita.exceptions import ConversionError, DocumentConversionError
from adoc2dita.options import ConversionOptions
from adoc2dita.schemas import BatchResult, ConversionResult, DocumentFailure, DocumentTree

logger = logging.getLogger(__name__)

PASSES = 2


@dataclass
class SourceDocument:
    """A parsed input document and the base name it is addressed by."""

    name: str
    tree: DocumentTree


def convert_batch(
    documents: Sequence[SourceDocument],
    *,
    aggregator: Aggregator | None = None,
    options: ConversionOptions | None = None,
) -> tuple[BatchResult, Aggregator]:
    """Convert every document twice so that cross-document references resolve.

    The first pass fills the aggregator with every map and topic name; the
    second pass re-renders each document against that complete picture and
    overwrites the first-pass output. Flat documents (no map) are persisted
    under their own topic file name after each conversion.

    Args:
        documents: The input documents, converted in order.
        aggregator: Registry to write into. A new one is created if None.
        options: Conversion options. Uses defaults if None.

    Returns:
        Tuple of (result, aggregator) where the aggregator holds every output
        file and the referenced resources.

    Raises:
        DocumentConversionError: If a document fails and ``skip_failed`` is
            not set. A failure during the first pass aborts before the second
            pass starts.
    """
    opts = options or ConversionOptions()
    registry = aggregator if aggregator is not None else Aggregator()
    failures: list[DocumentFailure] = []
    pending = list(documents)
    results: list[ConversionResult] = []

    for pass_number in range(1, PASSES + 1):
        registry.begin_pass(pass_number)
        logger.debug("Starting pass %s over %s documents", pass_number, len(pending))
        results = []
        converted: list[SourceDocument] = []

        for source in pending:
            try:
                result = convert_document(source.tree, registry, name=source.name, options=opts)
            except ConversionError as exc:
                if not opts.skip_failed:
                    raise DocumentConversionError(source.name, pass_number, exc) from exc
                logger.warning("Skipping %s (pass %s): %s", source.name, pass_number, exc)
                failures.append(DocumentFailure(name=source.name, pass_number=pass_number, error=str(exc)))
                continue

            if not result.is_map:
                registry.put(result.file_name, result.content, source=source.name)
            results.append(result)
            converted.append(source)

        # Documents that failed are not retried in the next pass.
        pending = converted

    logger.debug("Batch produced %s files and %s resources", len(registry), len(registry.resources))
    return BatchResult(documents=results, failures=failures), registry
