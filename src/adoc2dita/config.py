"""Local configuration for adoc2dita."""

from __future__ import annotations

import os


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


DEFAULT_LANG = "en"
DEFAULT_TOPIC_EXTENSION = ".dita"
DEFAULT_MAP_EXTENSION = ".ditamap"
DEFAULT_TOPIC_PREFIX = "c-"
DEFAULT_MAP_PREFIX = "dm-"
DEFAULT_PREAMBLE_AS_PARAGRAPH = "true"
DEFAULT_PRETTY_PRINT = "true"
DEFAULT_INDENT = 2

ADOC2DITA_LANG = os.getenv("ADOC2DITA_LANG", DEFAULT_LANG)
ADOC2DITA_TOPIC_EXTENSION = os.getenv("ADOC2DITA_TOPIC_EXTENSION", DEFAULT_TOPIC_EXTENSION)
ADOC2DITA_MAP_EXTENSION = os.getenv("ADOC2DITA_MAP_EXTENSION", DEFAULT_MAP_EXTENSION)
ADOC2DITA_TOPIC_PREFIX = os.getenv("ADOC2DITA_TOPIC_PREFIX", DEFAULT_TOPIC_PREFIX)
ADOC2DITA_MAP_PREFIX = os.getenv("ADOC2DITA_MAP_PREFIX", DEFAULT_MAP_PREFIX)
ADOC2DITA_PREAMBLE_AS_PARAGRAPH = _env_flag("ADOC2DITA_PREAMBLE_AS_PARAGRAPH", DEFAULT_PREAMBLE_AS_PARAGRAPH)
ADOC2DITA_PRETTY_PRINT = _env_flag("ADOC2DITA_PRETTY_PRINT", DEFAULT_PRETTY_PRINT)
ADOC2DITA_INDENT = int(os.getenv("ADOC2DITA_INDENT", str(DEFAULT_INDENT)))

# Input suffixes the loaders understand.
SUPPORTED_SUFFIXES = (".json", ".html", ".htm")
