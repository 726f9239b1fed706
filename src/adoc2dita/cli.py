"""Command line entry point: convert a directory of document trees to DITA."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from adoc2dita.batch import convert_batch
from adoc2dita.config import ADOC2DITA_LANG, ADOC2DITA_PREAMBLE_AS_PARAGRAPH, ADOC2DITA_PRETTY_PRINT
from adoc2dita.exceptions import Adoc2ditaError
from adoc2dita.loading import discover_sources, load_documents
from adoc2dita.options import ConversionOptions
from adoc2dita.output import BUNDLE_FORMATS, bundle_directory, write_outputs

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the adoc2dita command."""
    parser = argparse.ArgumentParser(
        prog="adoc2dita",
        description="Convert parsed AsciiDoc documents (JSON trees or Asciidoctor HTML) into DITA topics and maps.",
    )
    parser.add_argument("source", type=Path, help="Input file or directory")
    parser.add_argument("target", type=Path, help="Output directory")
    parser.add_argument("--exclude", action="append", default=[], metavar="NAME", help="File name to skip")
    parser.add_argument("--lang", default=ADOC2DITA_LANG, help="xml:lang of generated topics")
    parser.add_argument(
        "--no-preamble-as-paragraph",
        dest="preamble_as_paragraph",
        action="store_false",
        default=ADOC2DITA_PREAMBLE_AS_PARAGRAPH,
        help="Render preambles as <abstract> elements",
    )
    parser.add_argument(
        "--no-format",
        dest="pretty",
        action="store_false",
        default=ADOC2DITA_PRETTY_PRINT,
        help="Write output without re-indenting it",
    )
    parser.add_argument("--assets", type=Path, help="Directory image paths are relative to (default: source dir)")
    parser.add_argument(
        "--bundle",
        action="append",
        default=[],
        choices=BUNDLE_FORMATS,
        help="Also archive the output directory",
    )
    parser.add_argument("--skip-failed", action="store_true", help="Skip documents that fail to convert")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run a conversion batch from the command line and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    options = ConversionOptions(
        preamble_as_paragraph=args.preamble_as_paragraph,
        lang=args.lang,
        skip_failed=args.skip_failed,
    )

    try:
        sources = discover_sources(args.source, excludes=args.exclude)
        documents = load_documents(sources)
        result, aggregator = convert_batch(documents, options=options)
    except Adoc2ditaError as exc:
        logger.error("%s", exc)
        return 1

    assets = args.assets or (args.source if args.source.is_dir() else args.source.parent)
    write_outputs(aggregator, args.target, assets_dir=assets, pretty=args.pretty)

    if args.bundle:
        if not args.source.is_dir():
            logger.warning("A single file can't be bundled; use source/target directories")
        else:
            for archive_format in args.bundle:
                archive = args.target.parent / f"{args.target.name}-dita-bundle.{archive_format}"
                bundle_directory(args.target, archive, archive_format)

    for failure in result.failures:
        logger.error("%s failed in pass %s: %s", failure.name, failure.pass_number, failure.error)
    return 1 if result.failures else 0


if __name__ == "__main__":
    sys.exit(main())
