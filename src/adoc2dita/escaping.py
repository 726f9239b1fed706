"""XML escaping and sanitization helpers shared by the DITA rules."""

from __future__ import annotations

import re

# An ampersand that does not already start a character or entity reference.
_BARE_AMPERSAND_RE = re.compile(r"&(?!(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);)")
# Unresolved ``<<target>>`` or ``<<target,label>>`` cross-reference syntax.
_UNRESOLVED_XREF_RE = re.compile(r"<<([A-Za-z_:][\w:.#/-]*)(?:,\s*([^<>]*?))?>>")
_CDATA_END = "]]>"


def xml_escape(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for XML text content.

    Existing entity references are left alone, so escaping twice yields the
    same result as escaping once.
    """
    text = _BARE_AMPERSAND_RE.sub("&amp;", text)
    return text.replace("<", "&lt;").replace(">", "&gt;")


def xml_attr(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    return xml_escape(value).replace('"', "&quot;")


def cdata(text: str) -> str:
    """Wrap text in a CDATA section, splitting any embedded terminator."""
    return "<![CDATA[" + text.replace(_CDATA_END, "]]]]><![CDATA[>") + "]]>"


def strip_unresolved_xrefs(text: str) -> str:
    """Replace unresolved ``<<target>>`` syntax in raw text by its label or target.

    Shift operators and other ``<<``/``>>`` uses with spaces around the
    operand are left alone.
    """
    return _UNRESOLVED_XREF_RE.sub(lambda match: (match.group(2) or match.group(1)).strip(), text)
