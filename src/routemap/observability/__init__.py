"""Generation observability — events recorded while building sitemaps.

All events are frozen dataclasses with nanosecond timestamps, stored in a
bounded, lock-protected event log.

Quick Start:
    >>> from routemap.observability import EventLog, SitemapCollector
    >>> log = EventLog()
    >>> collector = SitemapCollector(log)
    >>> # documents = await generate_sitemaps(config, collector=collector)
    >>> # log.query(event_type=RouteExpanded)

"""

from routemap.observability.collector import SitemapCollector
from routemap.observability.events import (
    DocumentRendered,
    EntriesMerged,
    RouteExpanded,
    SitemapEvent,
    SitemapWritten,
    now_ns,
)
from routemap.observability.log import EventLog

__all__ = [
    "DocumentRendered",
    "EntriesMerged",
    "EventLog",
    "RouteExpanded",
    "SitemapCollector",
    "SitemapEvent",
    "SitemapWritten",
    "now_ns",
]
