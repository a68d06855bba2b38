"""Routemap configuration and entry records.

SitemapConfig is the central configuration object, frozen after creation.
Entries, metadata records and route definitions are frozen as well so a
configuration can be shared freely and every generation starts from the
same input.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from routemap._types import ChangeFreq, LastModInput, Slug, SlugSource

# Token that marks a catch-all route (never listed)
CATCH_ALL = "*"

# ``:name`` path parameters; an optional ``?`` suffix is not part of the name
_PARAM_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)\??")


@dataclass(frozen=True, slots=True)
class EntryMeta:
    """Sparse ``<url>`` metadata record.

    Used at every level of the override chain: global defaults, route,
    URL entry and slug.  ``None`` means "not set at this level".

    Attributes:
        lastmod: Last modification time (date string, epoch milliseconds,
            ``date`` or ``datetime``).
        changefreq: One of the sitemap change frequencies.
        priority: Relative priority between 0.0 and 1.0.

    """

    lastmod: LastModInput | None = None
    changefreq: ChangeFreq | None = None
    priority: float | None = None

    def overlay(self, other: EntryMeta) -> EntryMeta:
        """Return a new record where every field set in *other* wins."""
        return EntryMeta(
            lastmod=other.lastmod if other.lastmod is not None else self.lastmod,
            changefreq=other.changefreq if other.changefreq is not None else self.changefreq,
            priority=other.priority if other.priority is not None else self.priority,
        )


@dataclass(frozen=True, slots=True)
class Entry:
    """A single sitemap ``<url>`` entry.

    As input (an explicit URL in the configuration), ``loc`` may be partial
    and the metadata fields hold raw values.  Entries produced by the
    pipeline always carry an absolute, percent-encoded ``loc`` and
    normalized metadata.
    """

    loc: str
    lastmod: LastModInput | None = None
    changefreq: ChangeFreq | None = None
    priority: float | None = None

    @property
    def meta(self) -> EntryMeta:
        """Metadata of this entry as a sparse record."""
        return EntryMeta(lastmod=self.lastmod, changefreq=self.changefreq, priority=self.priority)


@dataclass(frozen=True, slots=True)
class RouteDefinition:
    """A route of the site, static or parametrized.

    Attributes:
        path: Path template, e.g. ``/about`` or ``/article/:category/:title``.
        name: Optional route name, used in error messages.
        loc: Fixed location replacing ``path`` for a parameterless route.
        meta: Route-level metadata overrides.
        slugs: Literal slug list for a parametrized route.
        slug_source: Zero-argument callable (sync or async) returning slugs.
            Mutually exclusive with ``slugs``.
        ignore: Exclude this route from the sitemap.

    """

    path: str
    name: str | None = None
    loc: str | None = None
    meta: EntryMeta = field(default_factory=EntryMeta)
    slugs: Sequence[Slug] | None = None
    slug_source: SlugSource | None = None
    ignore: bool = False

    @property
    def params(self) -> tuple[str, ...]:
        """Named parameters of the path template, in order of appearance.

        ``/article/:category/:title`` -> ``("category", "title")``

        """
        return tuple(dict.fromkeys(_PARAM_RE.findall(self.path)))

    def fill(self, values: Mapping[str, str]) -> str:
        """Substitute parameter *values* into the path template."""
        return _PARAM_RE.sub(lambda match: values[match.group(1)], self.path)

    @property
    def excluded(self) -> bool:
        """True for the catch-all route and routes marked ``ignore``."""
        return self.ignore or self.path == CATCH_ALL

    @property
    def label(self) -> str:
        """Human-readable identifier for diagnostics."""
        if self.name:
            return f"{self.path!r} ({self.name})"
        return repr(self.path)


@dataclass(frozen=True, slots=True)
class SitemapConfig:
    """Input of a single sitemap generation.

    Attributes:
        base_url: Site origin (e.g. ``"https://example.com"``).  Required
            as soon as a route or a partial URL is present.
        defaults: Global metadata applied to every entry.
        routes: Route definitions, expanded in order.
        urls: Explicit URLs, as strings or :class:`Entry` records.
        trailing_slash: Ensure a trailing ``/`` on every path instead of
            stripping it.
        pretty: Indent the XML output with newlines and tabs.

    """

    base_url: str = ""
    defaults: EntryMeta = field(default_factory=EntryMeta)
    routes: tuple[RouteDefinition, ...] = ()
    urls: tuple[str | Entry, ...] = ()
    trailing_slash: bool = False
    pretty: bool = False

    def __post_init__(self) -> None:
        # Accept any sequence but store tuples so the config stays immutable.
        if not isinstance(self.routes, tuple):
            object.__setattr__(self, "routes", tuple(self.routes))
        if not isinstance(self.urls, tuple):
            object.__setattr__(self, "urls", tuple(self.urls))
