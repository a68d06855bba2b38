"""Event log — bounded, thread-safe store of generation events.

``SitemapCollector`` appends to it; ``build()`` reads the merge total back
from it.  Lookups can be narrowed to the events of one document.
"""

import threading
from collections import deque

from routemap.observability.events import DocumentRendered, SitemapEvent, SitemapWritten


def _for_document(event: SitemapEvent, document: str) -> bool:
    return isinstance(event, (DocumentRendered, SitemapWritten)) and event.name == document


class EventLog:
    """Events of one or more generation runs, oldest dropped first.

    Args:
        max_events: Capacity of the buffer.

    """

    __slots__ = ("_events", "_lock")

    def __init__(self, max_events: int = 10_000) -> None:
        self._events: deque[SitemapEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: SitemapEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        document: str | None = None,
        limit: int = 100,
    ) -> list[SitemapEvent]:
        """Return matching events, newest first.

        Args:
            event_type: Keep only events of this class.
            document: Keep only render/write events of this document name
                (``sitemap``, ``sitemap-part-2``, ``sitemap-index``).
            limit: Maximum number of events returned.

        """
        with self._lock:
            snapshot = list(self._events)

        results: list[SitemapEvent] = []
        for event in reversed(snapshot):
            if len(results) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if document is not None and not _for_document(event, document):
                continue
            results.append(event)
        return results

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
