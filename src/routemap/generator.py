"""Sitemap generation pipeline.

Runs the full transformation for one configuration::

    validate_config -> expand_routes + url_entries -> merge_entries
                    -> paginate -> render_urlset / render_index

and returns a fresh mapping of document name to XML text.  Either the
complete document set is returned or an exception propagates; nothing is
written anywhere.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from routemap.merge import merge_entries, url_entries
from routemap.paginate import INDEX_NAME, MAX_ENTRIES, paginate
from routemap.routes import expand_routes
from routemap.serialize import render_index, render_urlset
from routemap.validation import validate_config

if TYPE_CHECKING:
    from collections.abc import Callable

    from routemap._types import Documents
    from routemap.config import SitemapConfig
    from routemap.observability.collector import SitemapCollector


def _render(
    name: str,
    count: int,
    render: Callable[[], str],
    collector: SitemapCollector | None,
) -> str:
    t0 = time.perf_counter()
    xml = render()
    if collector is not None:
        collector.record_render(
            name,
            entries=count,
            size_bytes=len(xml.encode("utf-8")),
            duration_ms=(time.perf_counter() - t0) * 1000,
        )
    return xml


async def generate_sitemaps(
    config: SitemapConfig,
    *,
    collector: SitemapCollector | None = None,
    max_entries: int = MAX_ENTRIES,
) -> Documents:
    """Generate every sitemap document for *config*.

    Args:
        config: Sitemap configuration.
        collector: Optional collector receiving pipeline events.
        max_entries: Per-document entry cap.

    Returns:
        ``{"sitemap": xml}``, or ``{"sitemap-part-1": xml, ...,
        "sitemap-index": xml}`` when the entry cap is exceeded.

    Raises:
        ConfigurationError: If a partial location is used without ``base_url``.
        ValidationError: On malformed metadata, routes or slugs.

    """
    validate_config(config)

    route_entries = await expand_routes(config, collector)
    explicit = url_entries(config)
    entries = merge_entries(route_entries, explicit)

    if collector is not None:
        collector.record_merge(
            route_entries=len(route_entries),
            url_entries=len(explicit),
            total=len(entries),
        )

    pagination = paginate(entries, config.base_url, max_entries=max_entries)

    documents: Documents = {}
    for chunk in pagination.chunks:
        documents[chunk.name] = _render(
            chunk.name,
            len(chunk.entries),
            lambda chunk=chunk: render_urlset(chunk.entries, pretty=config.pretty),
            collector,
        )

    if pagination.has_index:
        documents[INDEX_NAME] = _render(
            INDEX_NAME,
            len(pagination.index),
            lambda: render_index(pagination.index, pretty=config.pretty),
            collector,
        )

    return documents


def generate_sitemaps_sync(
    config: SitemapConfig,
    *,
    collector: SitemapCollector | None = None,
    max_entries: int = MAX_ENTRIES,
) -> Documents:
    """Blocking wrapper around :func:`generate_sitemaps`.

    Must not be called from a running event loop.
    """
    return asyncio.run(
        generate_sitemaps(config, collector=collector, max_entries=max_entries)
    )
