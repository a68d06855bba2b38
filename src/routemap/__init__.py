"""Routemap — sitemap.xml generation from declared routes and URLs.

Turns a declarative description of a site's pages (static URLs and
parametrized routes with per-entry metadata) into sitemaps.org documents,
plus a sitemap index when there are more than 50,000 entries.

Quick start::

    import routemap

    config = routemap.SitemapConfig(
        base_url="https://example.com",
        routes=(
            routemap.RouteDefinition("/"),
            routemap.RouteDefinition("/article/:title", slugs=["hello", "world"]),
        ),
        urls=("/about",),
    )
    documents = routemap.generate_sitemaps_sync(config)
    documents["sitemap"]      # '<?xml version="1.0" encoding="UTF-8"?><urlset ...'

From an async context::

    documents = await routemap.generate_sitemaps(config)

From a project directory with a ``routemap.yaml``::

    routemap.build("my-site/")

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "Entry",
    "EntryMeta",
    "RouteDefinition",
    "RoutemapError",
    "SitemapConfig",
    "ValidationError",
    "__version__",
    "build",
    "config_from_mapping",
    "generate_sitemaps",
    "generate_sitemaps_sync",
]

_LAZY: dict[str, str] = {
    "Entry": "routemap.config",
    "EntryMeta": "routemap.config",
    "RouteDefinition": "routemap.config",
    "SitemapConfig": "routemap.config",
    "ConfigurationError": "routemap._errors",
    "RoutemapError": "routemap._errors",
    "ValidationError": "routemap._errors",
    "config_from_mapping": "routemap.config_loader",
    "generate_sitemaps": "routemap.generator",
    "generate_sitemaps_sync": "routemap.generator",
    "build": "routemap.app",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routemap`` fast while providing a clean top-level API.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
