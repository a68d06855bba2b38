"""Pagination — split entries over several documents when needed.

The sitemaps.org protocol caps a sitemap at 50,000 URLs.  Up to that
count a single ``sitemap`` document is produced.  Above it, entries are
split into ``sitemap-part-1``, ``sitemap-part-2``, ... and a
``sitemap-index`` lists the location of every part.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from routemap.location import encode_location, has_scheme

if TYPE_CHECKING:
    from collections.abc import Sequence

    from routemap.config import Entry

MAX_ENTRIES = 50_000

SINGLE_NAME = "sitemap"
PART_PREFIX = "sitemap-part-"
INDEX_NAME = "sitemap-index"


@dataclass(frozen=True, slots=True)
class Chunk:
    """A named slice of the final entry list.

    Attributes:
        name: Document name, without extension.
        entries: Entries of this document, in output order.

    """

    name: str
    entries: tuple[Entry, ...]


@dataclass(frozen=True, slots=True)
class Pagination:
    """Result of :func:`paginate`.

    Attributes:
        chunks: Sitemap documents in emission order.
        index: Locations of every part for the sitemap index, or an empty
            tuple when a single document suffices.

    """

    chunks: tuple[Chunk, ...]
    index: tuple[str, ...] = ()

    @property
    def has_index(self) -> bool:
        return bool(self.index)


def part_location(name: str, base_url: str) -> str:
    """Location of a part document as listed in the sitemap index."""
    filename = f"/{name}.xml"
    if base_url and has_scheme(base_url):
        return encode_location(base_url.rstrip("/") + filename)
    return filename


def paginate(
    entries: Sequence[Entry],
    base_url: str = "",
    *,
    max_entries: int = MAX_ENTRIES,
) -> Pagination:
    """Split *entries* into documents of at most *max_entries* each.

    Args:
        entries: Final, deduplicated entry list.
        base_url: Site origin, used for the index locations.
        max_entries: Per-document cap.

    Returns:
        One ``sitemap`` chunk, or numbered parts plus index locations.

    """
    if max_entries < 1:
        msg = f"max_entries must be positive, got {max_entries}"
        raise ValueError(msg)

    if len(entries) <= max_entries:
        return Pagination(chunks=(Chunk(SINGLE_NAME, tuple(entries)),))

    chunks = tuple(
        Chunk(f"{PART_PREFIX}{number}", tuple(entries[start:start + max_entries]))
        for number, start in enumerate(range(0, len(entries), max_entries), start=1)
    )
    index = tuple(part_location(chunk.name, base_url) for chunk in chunks)
    return Pagination(chunks=chunks, index=index)
