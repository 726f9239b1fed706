"""Best-effort indentation of generated DITA files."""

from __future__ import annotations

import logging

from lxml import etree

from adoc2dita.config import ADOC2DITA_INDENT

logger = logging.getLogger(__name__)


def pretty_print(xml: str, *, indent: int = ADOC2DITA_INDENT) -> str:
    """Re-indent an XML document, keeping its declaration and doctype.

    DTDs are never fetched. Content that does not parse is returned unchanged
    and the failure is logged; formatting never fails a conversion.
    """
    parser = etree.XMLParser(
        load_dtd=False,
        no_network=True,
        resolve_entities=False,
        remove_blank_text=True,
        strip_cdata=False,
    )
    try:
        tree = etree.fromstring(xml.encode("utf-8"), parser).getroottree()
    except etree.XMLSyntaxError as exc:
        logger.warning("Leaving unformatted output: %s", exc)
        return xml

    etree.indent(tree, space=" " * indent)
    return etree.tostring(
        tree,
        encoding="UTF-8",
        xml_declaration=True,
        doctype=tree.docinfo.doctype or None,
    ).decode("utf-8")
