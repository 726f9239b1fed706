"""adoc2dita: convert parsed AsciiDoc document trees into DITA topics and maps."""

from adoc2dita.aggregator import Aggregator
from adoc2dita.batch import SourceDocument, convert_batch
from adoc2dita.converter import Converter, convert_document
from adoc2dita.exceptions import (
    Adoc2ditaError,
    BundleError,
    ConversionError,
    DocumentConversionError,
    LoadError,
    MissingRequiredAttribute,
    UnsupportedNodeKind,
)
from adoc2dita.options import ConversionOptions, OutputFormat
from adoc2dita.schemas import BatchResult, ConversionResult, DocumentTree

__all__ = [
    "Adoc2ditaError",
    "Aggregator",
    "BatchResult",
    "BundleError",
    "ConversionError",
    "ConversionOptions",
    "ConversionResult",
    "Converter",
    "DocumentConversionError",
    "DocumentTree",
    "LoadError",
    "MissingRequiredAttribute",
    "OutputFormat",
    "SourceDocument",
    "UnsupportedNodeKind",
    "convert_batch",
    "convert_document",
]
