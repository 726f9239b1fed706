"""Persist converted output: files, resources and archive bundles."""

from __future__ import annotations

import logging
import shutil
import tarfile
import zipfile
from pathlib import Path
from typing import Iterable

from adoc2dita.aggregator import Aggregator
from adoc2dita.exceptions import BundleError
from adoc2dita.formatting import pretty_print

logger = logging.getLogger(__name__)

BUNDLE_FORMATS = ("zip", "tar.gz")


def write_outputs(
    aggregator: Aggregator,
    target_dir: Path,
    *,
    assets_dir: Path | None = None,
    pretty: bool = True,
) -> list[Path]:
    """Write every aggregated file into ``target_dir`` and copy its resources.

    Args:
        aggregator: The populated batch registry.
        target_dir: Output directory, created if missing.
        assets_dir: Root that resource paths are relative to. Resources are
            not copied when None.
        pretty: Re-indent each file before writing.

    Returns:
        Paths of the written files (resources excluded).
    """
    target_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, content in aggregator.documents.items():
        output_path = target_dir / name
        output_path.write_text(pretty_print(content) if pretty else content, encoding="utf-8")
        logger.info("Created %s", output_path)
        written.append(output_path)

    if assets_dir is not None:
        copy_resources(aggregator.resources, assets_dir, target_dir)
    return written


def copy_resources(resources: Iterable[str], assets_dir: Path, target_dir: Path) -> list[Path]:
    """Copy resources from ``assets_dir`` to ``target_dir`` keeping relative paths.

    Resources that are missing, or that would escape either directory, are
    skipped with a warning.
    """
    copied: list[Path] = []
    source_root = assets_dir.resolve()
    target_root = target_dir.resolve()
    for resource in resources:
        source = (source_root / resource).resolve()
        destination = (target_root / resource).resolve()
        if not source.is_relative_to(source_root) or not destination.is_relative_to(target_root):
            logger.warning("Skipping resource outside of the asset root: %s", resource)
            continue
        if not source.is_file():
            logger.warning("Missing resource %s (looked in %s)", resource, source_root)
            continue
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)
        copied.append(destination)
    return copied


def bundle_directory(source_dir: Path, archive_path: Path, archive_format: str) -> Path:
    """Archive the content of ``source_dir`` as ``zip`` or ``tar.gz``.

    Entry names are relative to ``source_dir`` and use ``/`` separators.

    Raises:
        BundleError: If the format is not supported.
    """
    fmt = archive_format.lower()
    if fmt not in BUNDLE_FORMATS:
        raise BundleError(f"{archive_format} is not supported (expected one of {', '.join(BUNDLE_FORMATS)})")

    archive_path.parent.mkdir(parents=True, exist_ok=True)
    entries = sorted(path for path in source_dir.rglob("*") if path.resolve() != archive_path.resolve())

    if fmt == "zip":
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for path in entries:
                archive.write(path, path.relative_to(source_dir).as_posix())
    else:
        with tarfile.open(archive_path, "w:gz") as archive:
            for path in entries:
                archive.add(path, arcname=path.relative_to(source_dir).as_posix(), recursive=False)

    logger.info("Bundled %s into %s", source_dir, archive_path)
    return archive_path
