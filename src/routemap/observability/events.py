"""Event model for sitemap generation.

Defines one event type per pipeline stage worth inspecting: route
expansion, merging, rendering and writing.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import TypeAlias


# ---------------------------------------------------------------------------
# Generation events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RouteExpanded:
    """A route definition was expanded into entries.

    Attributes:
        path: Route path template.
        entries: Number of distinct entries produced.
        duration_ms: Time spent expanding, including awaiting the slug source.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    entries: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class EntriesMerged:
    """Route and URL entries were merged into the final entry list.

    Attributes:
        route_entries: Entries coming from routes.
        url_entries: Entries coming from explicit URLs.
        total: Entries left after deduplication.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    route_entries: int
    url_entries: int
    total: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class DocumentRendered:
    """A sitemap (or sitemap index) document was serialized.

    Attributes:
        name: Document name (``sitemap``, ``sitemap-part-N``, ``sitemap-index``).
        entries: Number of ``<url>`` or ``<sitemap>`` elements.
        size_bytes: UTF-8 size of the document.
        duration_ms: Time spent rendering.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    name: str
    entries: int
    size_bytes: int
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Output events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SitemapWritten:
    """A document was written to disk.

    Attributes:
        name: Document name.
        path: Filesystem path of the written file.
        size_bytes: Bytes written.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    name: str
    path: str
    size_bytes: int
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

SitemapEvent: TypeAlias = (
    RouteExpanded
    | EntriesMerged
    | DocumentRendered
    | SitemapWritten
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
