"""Merging route entries with explicitly configured URLs.

Route entries come first.  A URL entry whose location is already present
replaces that entry in place: its metadata wins, the position is kept.
Remaining URL entries are appended in configuration order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from routemap.config import Entry
from routemap.location import resolve_location
from routemap.validation import build_entry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from routemap.config import SitemapConfig


def url_entries(config: SitemapConfig) -> list[Entry]:
    """Resolve the configured URLs into entries.

    Metadata of each entry is its own overrides laid over the global
    defaults.

    """
    entries: list[Entry] = []
    for url in config.urls:
        if isinstance(url, Entry):
            location, meta = url.loc, config.defaults.overlay(url.meta)
        else:
            location, meta = url, config.defaults
        loc = resolve_location(location, config.base_url, config.trailing_slash)
        entries.append(build_entry(loc, meta, f"URL {location!r}"))
    return entries


def merge_entries(route_entries: Iterable[Entry], urls: Iterable[Entry]) -> list[Entry]:
    """Merge *route_entries* and *urls* into a list unique by location.

    Between routes the first entry for a location is kept.  Reassigning an
    existing key of the dict keeps its insertion position.

    """
    merged: dict[str, Entry] = {}
    for entry in route_entries:
        merged.setdefault(entry.loc, entry)
    for entry in urls:
        merged[entry.loc] = entry
    return list(merged.values())
