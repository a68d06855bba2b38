"""Document writer — store generated sitemaps as ``<name>.xml`` files."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from routemap._errors import ExportError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from routemap.observability.collector import SitemapCollector


@dataclass(frozen=True, slots=True)
class WrittenFile:
    """Record of a single document written to disk.

    Attributes:
        name: Document name (``sitemap``, ``sitemap-part-1``, ...).
        output_path: Absolute filesystem path to the written file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to write this file.

    """

    name: str
    output_path: Path
    size_bytes: int
    duration_ms: float


def write_sitemaps(
    documents: Mapping[str, str],
    output_dir: Path,
    *,
    collector: SitemapCollector | None = None,
) -> tuple[WrittenFile, ...]:
    """Write every document to ``output_dir / f"{name}.xml"`` (UTF-8).

    Creates *output_dir* if needed and overwrites existing files.

    Raises:
        ExportError: If the directory or a file cannot be written.

    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot create output directory {output_dir}: {exc}"
        raise ExportError(msg) from exc

    written: list[WrittenFile] = []
    for name, xml in documents.items():
        t0 = time.perf_counter()
        path = output_dir / f"{name}.xml"
        data = xml.encode("utf-8")
        try:
            path.write_bytes(data)
        except OSError as exc:
            msg = f"Cannot write {path}: {exc}"
            raise ExportError(msg) from exc
        elapsed = (time.perf_counter() - t0) * 1000

        if collector is not None:
            collector.record_write(name, str(path), size_bytes=len(data))
        written.append(WrittenFile(
            name=name,
            output_path=path,
            size_bytes=len(data),
            duration_ms=elapsed,
        ))

    return tuple(written)
