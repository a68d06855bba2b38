"""Route expansion — turn route definitions into concrete sitemap entries.

A route without parameters becomes exactly one entry.  A parametrized
route becomes one entry per slug::

    /article/:title            + ["a", "b"]
        -> /article/a, /article/b
    /article/:category/:title  + [{"category": "blog", "title": "a"}]
        -> /article/blog/a

Metadata is resolved as an ordered overlay, later levels winning:

    config.defaults  <  route.meta  <  slug metadata

Slug sources may be literal lists or zero-argument callables, sync or
async.  All routes are expanded concurrently in a task group, so one
failing route cancels the others; the returned entries always
follow route order, then slug order.
"""

from __future__ import annotations

import asyncio
import inspect
import time
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from routemap._errors import ValidationError
from routemap.config import EntryMeta
from routemap.location import resolve_location
from routemap.validation import build_entry, coerce_meta, validate_slugs

if TYPE_CHECKING:
    from routemap._types import Slug
    from routemap.config import Entry, RouteDefinition, SitemapConfig
    from routemap.observability.collector import SitemapCollector


async def resolve_slugs(route: RouteDefinition) -> Sequence[Slug]:
    """Return the slug list of a parametrized route.

    Calls ``slug_source`` when set and awaits its result if needed.

    Raises:
        ValidationError: If the route has no slug source, or the slugs do
            not match the route parameters.

    """
    if route.slug_source is not None:
        slugs = route.slug_source()
        if inspect.isawaitable(slugs):
            slugs = await slugs
    elif route.slugs is not None:
        slugs = route.slugs
    else:
        msg = f"route {route.label}: dynamic route is missing slugs"
        raise ValidationError(msg)

    validate_slugs(route, slugs)
    return slugs


def _substitute(route: RouteDefinition, params: tuple[str, ...], slug: Slug) -> tuple[str, EntryMeta]:
    """Fill the route template from *slug* and pick its metadata overrides."""
    if isinstance(slug, Mapping):
        values = {param: str(slug[param]) for param in params}
        return route.fill(values), coerce_meta(slug)
    return route.fill({params[0]: str(slug)}), EntryMeta()


async def expand_route(route: RouteDefinition, config: SitemapConfig) -> list[Entry]:
    """Expand a single route into its entries.

    Excluded routes (catch-all or ``ignore``) expand to nothing.  Duplicate
    locations produced by several slugs keep the first occurrence.

    """
    if route.excluded:
        return []

    where = f"route {route.label}"
    route_meta = config.defaults.overlay(route.meta)
    params = route.params

    if not params:
        loc = resolve_location(route.loc or route.path, config.base_url, config.trailing_slash)
        return [build_entry(loc, route_meta, where)]

    slugs = await resolve_slugs(route)

    entries: dict[str, Entry] = {}
    for slug in slugs:
        path, slug_meta = _substitute(route, params, slug)
        loc = resolve_location(path, config.base_url, config.trailing_slash)
        if loc in entries:
            continue
        entries[loc] = build_entry(loc, route_meta.overlay(slug_meta), where)

    return list(entries.values())


async def expand_routes(
    config: SitemapConfig,
    collector: SitemapCollector | None = None,
) -> list[Entry]:
    """Expand every route of *config*, concurrently, in route order.

    Args:
        config: Sitemap configuration.
        collector: Optional collector receiving one event per route.

    Returns:
        Entries of all routes, route order first, slug order second.

    """

    async def _expand(route: RouteDefinition) -> list[Entry]:
        t0 = time.perf_counter()
        entries = await expand_route(route, config)
        if collector is not None and not route.excluded:
            collector.record_route(
                route.path,
                entries=len(entries),
                duration_ms=(time.perf_counter() - t0) * 1000,
            )
        return entries

    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(_expand(route)) for route in config.routes]
    except ExceptionGroup as failures:
        # Sibling expansions are cancelled by now; re-raise the first error unwrapped
        error = failures.exceptions[0]
    else:
        return [entry for task in tasks for entry in task.result()]
    raise error
