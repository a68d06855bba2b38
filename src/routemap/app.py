"""Build entry point — load config, generate sitemaps, write them out.

``build()`` is what ``routemap build`` runs::

    routemap.build("my-site/")
    routemap.build("my-site/", base_url="https://example.com", pretty=True)

"""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

from routemap.config_loader import load_config
from routemap.generator import generate_sitemaps_sync
from routemap.observability.collector import SitemapCollector
from routemap.observability.events import DocumentRendered, EntriesMerged
from routemap.writer import write_sitemaps

if TYPE_CHECKING:
    from routemap.writer import WrittenFile


# ---------------------------------------------------------------------------
# ANSI helpers: respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def _style(text: str, code: str) -> str:
    if not _supports_color():
        return text
    return f"\033[{code}m{text}\033[0m"


def build(
    root: str | Path = ".",
    *,
    collector: SitemapCollector | None = None,
    **kwargs: object,
) -> tuple[WrittenFile, ...]:
    """Generate the sitemaps of the project at *root* and write them.

    Args:
        root: Project root containing ``routemap.yaml`` (or ``.toml``).
        collector: Optional collector for generation and write events.
        **kwargs: Override configuration keys (``base_url``, ``output``,
            ``trailing_slash``, ``pretty``, ...).

    Returns:
        Records of the written files, in document order.

    """
    t0 = time.perf_counter()
    settings = load_config(Path(root), **kwargs)
    collector = collector if collector is not None else SitemapCollector()

    documents = generate_sitemaps_sync(settings.config, collector=collector)
    written = write_sitemaps(documents, settings.output, collector=collector)

    merges = collector.log.query(event_type=EntriesMerged, limit=1)
    total_urls = merges[0].total if merges else 0
    _print_summary(written, collector, total_urls, settings.output, (time.perf_counter() - t0) * 1000)
    return written


def _print_summary(
    written: tuple[WrittenFile, ...],
    collector: SitemapCollector,
    total_urls: int,
    output_dir: Path,
    duration_ms: float,
) -> None:
    """Print build completion summary to stderr."""
    count = len(written)
    lines = [
        "",
        "─" * 41,
        "  " + _style(
            f"Wrote {count} document{'s' if count != 1 else ''} "
            f"({total_urls} URL{'s' if total_urls != 1 else ''})",
            "32",
        ),
    ]
    for f in written:
        rendered = collector.log.query(event_type=DocumentRendered, document=f.name, limit=1)
        render_ms = rendered[0].duration_ms if rendered else 0.0
        lines.append(f"    {f.output_path.name}  {f.size_bytes} bytes  (rendered in {render_ms:.1f}ms)")
    lines.append(f"  Output: {output_dir}")
    lines.append(_style(f"  Done in {duration_ms:.0f}ms", "2"))

    print("\n".join(lines), file=sys.stderr)
