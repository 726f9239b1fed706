"""Per-batch conversion options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from adoc2dita.config import (
    ADOC2DITA_LANG,
    ADOC2DITA_MAP_EXTENSION,
    ADOC2DITA_MAP_PREFIX,
    ADOC2DITA_PREAMBLE_AS_PARAGRAPH,
    ADOC2DITA_TOPIC_EXTENSION,
    ADOC2DITA_TOPIC_PREFIX,
)


class OutputFormat(str, Enum):
    """Supported output formats, chosen once per batch."""

    DITA = "dita"


@dataclass
class ConversionOptions:
    """Options for a conversion batch.

    Attributes:
        output_format: Which visitor renders the trees.
        preamble_as_paragraph: Render preambles as plain content instead of
            an ``<abstract>`` element.
        lang: Value of the ``xml:lang`` attribute on topics and maps.
        topic_extension: File extension of topic files.
        map_extension: File extension of map files.
        topic_prefix: File name prefix of topic files.
        map_prefix: File name prefix of map files.
        skip_failed: Record failing documents and carry on instead of
            aborting the batch.
    """

    output_format: OutputFormat = OutputFormat.DITA
    preamble_as_paragraph: bool = ADOC2DITA_PREAMBLE_AS_PARAGRAPH
    lang: str = ADOC2DITA_LANG
    topic_extension: str = ADOC2DITA_TOPIC_EXTENSION
    map_extension: str = ADOC2DITA_MAP_EXTENSION
    topic_prefix: str = ADOC2DITA_TOPIC_PREFIX
    map_prefix: str = ADOC2DITA_MAP_PREFIX
    skip_failed: bool = False

    def topic_file_name(self, identifier: str) -> str:
        return f"{self.topic_prefix}{identifier}{self.topic_extension}"

    def map_file_name(self, name: str) -> str:
        return f"{self.map_prefix}{name}{self.map_extension}"
