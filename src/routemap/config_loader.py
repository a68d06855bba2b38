"""Load SitemapConfig from routemap.yaml / routemap.toml or a plain mapping.

Merges file config with keyword overrides. Overrides take precedence.

Raw mapping shape::

    base_url: https://example.com      # or baseURL
    trailing_slash: false              # or trailingSlash
    pretty: false
    defaults: {changefreq: weekly, priority: 0.5}
    routes:
      - path: /article/:title
        meta:
          sitemap:                     # other meta keys are ignored
            slugs: [a, b]              # or "package.module:callable"
            priority: 0.8
    urls: ["/", {loc: /about, changefreq: monthly}]
    output: dist                       # file / CLI only
"""

from __future__ import annotations

import importlib
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from routemap._errors import ConfigurationError
from routemap.config import Entry, EntryMeta, RouteDefinition, SitemapConfig
from routemap.validation import coerce_meta

CONFIG_FILENAMES = ("routemap.yaml", "routemap.yml", "routemap.toml")

_KEY_ALIASES: dict[str, str] = {
    "baseURL": "base_url",
    "baseUrl": "base_url",
    "trailingSlash": "trailing_slash",
    "ignoreRoute": "ignore_route",
    "slugSource": "slug_source",
}

_CONFIG_KEYS = frozenset({"base_url", "defaults", "routes", "urls", "trailing_slash", "pretty"})
_FILE_KEYS = _CONFIG_KEYS | {"output"}


@dataclass(frozen=True, slots=True)
class BuildSettings:
    """Everything ``routemap build`` needs.

    Attributes:
        config: Sitemap configuration.
        root: Project root (absolute).
        output: Output directory for the documents (absolute).

    """

    config: SitemapConfig
    root: Path = field(default_factory=Path.cwd)
    output: Path = field(default_factory=lambda: Path("dist"))


def _canonical(data: Mapping[str, Any]) -> dict[str, Any]:
    return {_KEY_ALIASES.get(key, key): value for key, value in data.items()}


# ---------------------------------------------------------------------------
# Mapping -> SitemapConfig
# ---------------------------------------------------------------------------


def import_object(dotted: str) -> Any:
    """Import ``package.module:attribute`` and return the attribute.

    Raises:
        ConfigurationError: If the module or attribute cannot be found.

    """
    module_name, sep, attr = dotted.partition(":")
    if not sep or not module_name or not attr:
        msg = f"Invalid import path {dotted!r} (expected 'package.module:attribute')"
        raise ConfigurationError(msg)
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import {module_name!r} for {dotted!r}: {exc}"
        raise ConfigurationError(msg) from exc
    try:
        return getattr(module, attr)
    except AttributeError as exc:
        msg = f"Module {module_name!r} has no attribute {attr!r}"
        raise ConfigurationError(msg) from exc


def _meta_from(data: object, where: str) -> EntryMeta:
    if data is None:
        return EntryMeta()
    if not isinstance(data, Mapping):
        msg = f"{where}: metadata must be a mapping, got {type(data).__name__}"
        raise ConfigurationError(msg)
    return coerce_meta(data)


def route_from_mapping(data: Mapping[str, Any]) -> RouteDefinition:
    """Build a RouteDefinition from its raw form.

    Sitemap options are read from ``meta.sitemap`` (or a top-level
    ``sitemap`` key); any other ``meta`` entry belongs to someone else and
    is ignored.

    """
    path = data.get("path")
    if not isinstance(path, str) or not path:
        msg = f"Route {dict(data)!r}: 'path' must be a non-empty string"
        raise ConfigurationError(msg)

    meta = data.get("meta") or {}
    if not isinstance(meta, Mapping):
        msg = f"Route {path!r}: 'meta' must be a mapping"
        raise ConfigurationError(msg)
    options = meta.get("sitemap", data.get("sitemap")) or {}
    if not isinstance(options, Mapping):
        msg = f"Route {path!r}: sitemap options must be a mapping"
        raise ConfigurationError(msg)
    options = _canonical(options)

    slugs = options.get("slugs")
    slug_source = options.get("slug_source")
    if isinstance(slugs, str):
        slugs = import_object(slugs)
    if isinstance(slug_source, str):
        slug_source = import_object(slug_source)
    if callable(slugs):
        if slug_source is not None:
            msg = f"Route {path!r}: 'slugs' and 'slug_source' are mutually exclusive"
            raise ConfigurationError(msg)
        slugs, slug_source = None, slugs

    return RouteDefinition(
        path=path,
        name=data.get("name"),
        loc=options.get("loc"),
        meta=coerce_meta(options),
        slugs=slugs,
        slug_source=slug_source,
        ignore=_flag(options.get("ignore_route"), "ignore_route"),
    )


def _url_from(item: object) -> str | Entry:
    if isinstance(item, (str, Entry)):
        return item
    if isinstance(item, Mapping):
        loc = item.get("loc")
        if not isinstance(loc, str):
            msg = f"URL entry {dict(item)!r}: 'loc' must be a string"
            raise ConfigurationError(msg)
        meta = coerce_meta(item)
        return Entry(loc=loc, lastmod=meta.lastmod, changefreq=meta.changefreq, priority=meta.priority)
    msg = f"URL entries must be strings or mappings, got {type(item).__name__}"
    raise ConfigurationError(msg)


def _list_of(data: Mapping[str, Any], key: str) -> list[Any]:
    value = data.get(key) or []
    if not isinstance(value, (list, tuple)):
        msg = f"'{key}' must be a list, got {type(value).__name__}"
        raise ConfigurationError(msg)
    return list(value)


def config_from_mapping(data: Mapping[str, Any]) -> SitemapConfig:
    """Build a SitemapConfig from a raw mapping (see module docstring).

    Raises:
        ConfigurationError: On unknown keys or wrongly shaped values.

    """
    data = _canonical(data)
    unknown = sorted(set(data) - _CONFIG_KEYS)
    if unknown:
        msg = f"Unknown configuration key(s): {', '.join(unknown)}"
        raise ConfigurationError(msg)

    base_url = data.get("base_url") or ""
    if not isinstance(base_url, str):
        msg = f"'base_url' must be a string, got {type(base_url).__name__}"
        raise ConfigurationError(msg)

    routes = tuple(
        item if isinstance(item, RouteDefinition) else route_from_mapping(_require_mapping(item, "routes"))
        for item in _list_of(data, "routes")
    )

    return SitemapConfig(
        base_url=base_url,
        defaults=_meta_from(data.get("defaults"), "defaults"),
        routes=routes,
        urls=tuple(_url_from(item) for item in _list_of(data, "urls")),
        trailing_slash=_flag(data.get("trailing_slash"), "trailing_slash"),
        pretty=_flag(data.get("pretty"), "pretty"),
    )


def _flag(value: object, key: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        msg = f"'{key}' must be true or false, got {value!r}"
        raise ConfigurationError(msg)
    return value


def _require_mapping(item: object, key: str) -> Mapping[str, Any]:
    if not isinstance(item, Mapping):
        msg = f"'{key}' items must be mappings, got {type(item).__name__}"
        raise ConfigurationError(msg)
    return item


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


def load_config(root: Path, **overrides: object) -> BuildSettings:
    """Load BuildSettings from root, optionally merging routemap.yaml.

    Looks for routemap.yaml, routemap.yml, or routemap.toml in root. If
    found, loads and merges with overrides. Overrides that are not None
    take precedence.
    """
    root = root.resolve()
    file_config = read_config_file(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}

    output = Path(str(merged.pop("output", "dist")))
    if not output.is_absolute():
        output = root / output

    return BuildSettings(config=config_from_mapping(merged), root=root, output=output)


def read_config_file(root: Path) -> dict[str, Any]:
    """Read routemap config from yaml/toml if present. Returns empty dict otherwise.

    Raises:
        ConfigurationError: If the file exists but cannot be parsed.

    """
    for name in CONFIG_FILENAMES:
        path = root / name
        if not path.is_file():
            continue
        if path.suffix == ".toml":
            return _parse_toml(path)
        return _parse_yaml(path)
    return {}


def _parse_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"Cannot parse {path}: {exc}"
        raise ConfigurationError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path}: top level must be a mapping"
        raise ConfigurationError(msg)
    return _flatten_routemap_section(data)


def _parse_toml(path: Path) -> dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Cannot parse {path}: {exc}"
        raise ConfigurationError(msg) from exc
    return _flatten_routemap_section(data)


def _flatten_routemap_section(data: dict[str, Any]) -> dict[str, Any]:
    """Extract routemap.* keys into top-level config."""
    result: dict[str, Any] = {}
    for k, v in _canonical(data).items():
        if k in _FILE_KEYS:
            result[k] = v
    section = data.get("routemap")
    if isinstance(section, dict):
        result.update(_canonical(section))
    return result
