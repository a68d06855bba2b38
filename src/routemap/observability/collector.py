"""Sitemap collector — records pipeline events into an event log.

The generator, the writer and the CLI receive an optional collector and
call one ``record_*`` method per stage.  Passing no collector disables
recording entirely.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

from routemap.observability.events import (
    DocumentRendered,
    EntriesMerged,
    RouteExpanded,
    SitemapWritten,
    now_ns,
)
from routemap.observability.log import EventLog


class SitemapCollector:
    """Event collector for sitemap generation.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_route(self, path: str, *, entries: int = 0, duration_ms: float = 0.0) -> None:
        """Record the expansion of one route."""
        self._log.append(
            RouteExpanded(
                path=path,
                entries=entries,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_merge(self, *, route_entries: int, url_entries: int, total: int) -> None:
        """Record the merge of route and URL entries."""
        self._log.append(
            EntriesMerged(
                route_entries=route_entries,
                url_entries=url_entries,
                total=total,
                timestamp_ns=now_ns(),
            )
        )

    def record_render(
        self,
        name: str,
        *,
        entries: int = 0,
        size_bytes: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        """Record the serialization of one document."""
        self._log.append(
            DocumentRendered(
                name=name,
                entries=entries,
                size_bytes=size_bytes,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_write(self, name: str, path: str, *, size_bytes: int = 0) -> None:
        """Record a document written to disk."""
        self._log.append(
            SitemapWritten(
                name=name,
                path=path,
                size_bytes=size_bytes,
                timestamp_ns=now_ns(),
            )
        )
