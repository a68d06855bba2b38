"""Configuration validation and metadata normalization.

:func:`validate_config` checks the shape of a :class:`SitemapConfig` before
any resolution work begins, so a malformed configuration fails fast and
never produces a partial document set.  :func:`validate_slugs` applies the
same slug rules to results of slug producers once they have resolved.

Metadata values are normalized here as well:

    lastmod     "2020-01-01"            -> "2020-01-01"
                "December 17, 1995"     -> "1995-12-17T00:00:00.000Z"
                1578485826000           -> "2020-01-08T12:17:06.000Z"
    changefreq  one of CHANGE_FREQUENCIES
    priority    number in [0.0, 1.0]
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime, timezone
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING, Any

from routemap._errors import ConfigurationError, ValidationError
from routemap.config import Entry, EntryMeta
from routemap.location import has_scheme

if TYPE_CHECKING:
    from routemap.config import RouteDefinition, SitemapConfig

CHANGE_FREQUENCIES: frozenset[str] = frozenset({
    "always",
    "hourly",
    "daily",
    "weekly",
    "monthly",
    "yearly",
    "never",
})

# Keys of a slug mapping that carry metadata rather than parameter values
METADATA_KEYS: frozenset[str] = frozenset({"lastmod", "changefreq", "priority"})

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Free-form date layouts tried after ISO-8601 and RFC 2822
_DATE_FORMATS = (
    "%B %d, %Y %H:%M:%S",
    "%B %d, %Y %H:%M",
    "%B %d, %Y",
    "%b %d, %Y %H:%M:%S",
    "%b %d, %Y %H:%M",
    "%b %d, %Y",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
)


# ---------------------------------------------------------------------------
# Metadata values
# ---------------------------------------------------------------------------


def check_changefreq(value: object, where: str) -> None:
    """Raise ValidationError unless *value* is a known change frequency."""
    if not isinstance(value, str) or value not in CHANGE_FREQUENCIES:
        allowed = ", ".join(sorted(CHANGE_FREQUENCIES))
        msg = f"{where}: invalid changefreq {value!r} (expected one of: {allowed})"
        raise ValidationError(msg)


def check_priority(value: object, where: str) -> float:
    """Validate a priority and return it as a float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"{where}: priority must be a number, got {type(value).__name__}"
        raise ValidationError(msg)
    if not 0.0 <= value <= 1.0:
        msg = f"{where}: priority {value!r} is outside [0.0, 1.0]"
        raise ValidationError(msg)
    return float(value)


def _format_instant(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{moment.microsecond // 1000:03d}Z"


def _parse_date_string(value: str) -> datetime | None:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def normalize_lastmod(value: object, where: str) -> str:
    """Normalize a ``lastmod`` value to a W3C date or a UTC instant.

    Plain calendar dates (``YYYY-MM-DD`` strings and ``date`` values) keep
    their day precision.  Everything else becomes
    ``YYYY-MM-DDTHH:MM:SS.sssZ``; naive values are read as UTC and numbers
    are epoch milliseconds.

    Raises:
        ValidationError: If the value cannot be interpreted as a point in time.

    """
    if isinstance(value, datetime):
        return _format_instant(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            moment = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            msg = f"{where}: lastmod {value!r} is not a valid epoch timestamp"
            raise ValidationError(msg) from exc
        return _format_instant(moment)
    if isinstance(value, str):
        text = value.strip()
        if _DATE_RE.match(text):
            try:
                return date.fromisoformat(text).isoformat()
            except ValueError as exc:
                msg = f"{where}: lastmod {value!r} is not a valid date"
                raise ValidationError(msg) from exc
        moment = _parse_date_string(text)
        if moment is not None:
            return _format_instant(moment)
        msg = f"{where}: cannot parse lastmod {value!r}"
        raise ValidationError(msg)

    msg = f"{where}: lastmod must be a date string, a timestamp or a date, got {type(value).__name__}"
    raise ValidationError(msg)


def normalize_meta(meta: EntryMeta, where: str) -> EntryMeta:
    """Validate every field set on *meta* and return the normalized record."""
    lastmod = None if meta.lastmod is None else normalize_lastmod(meta.lastmod, where)
    if meta.changefreq is not None:
        check_changefreq(meta.changefreq, where)
    priority = None if meta.priority is None else check_priority(meta.priority, where)
    return EntryMeta(lastmod=lastmod, changefreq=meta.changefreq, priority=priority)


def build_entry(loc: str, meta: EntryMeta, where: str) -> Entry:
    """Create a final entry at *loc* with normalized *meta*."""
    normalized = normalize_meta(meta, where)
    return Entry(
        loc=loc,
        lastmod=normalized.lastmod,
        changefreq=normalized.changefreq,
        priority=normalized.priority,
    )


def coerce_meta(data: Mapping[str, Any]) -> EntryMeta:
    """Pick the metadata keys out of a mapping (other keys are ignored)."""
    return EntryMeta(
        lastmod=data.get("lastmod"),
        changefreq=data.get("changefreq"),
        priority=data.get("priority"),
    )


# ---------------------------------------------------------------------------
# Slugs
# ---------------------------------------------------------------------------


def _check_slug(route: RouteDefinition, params: tuple[str, ...], slug: object, index: int) -> None:
    where = f"route {route.label}, slug #{index}"

    if slug is None:
        msg = f"{where}: slug is empty (None)"
        raise ValidationError(msg)

    if isinstance(slug, Mapping):
        for param in params:
            if slug.get(param) is None:
                msg = f"{where}: missing value for parameter {param!r}"
                raise ValidationError(msg)
        extra = [key for key in slug if key not in params and key not in METADATA_KEYS]
        if extra:
            msg = f"{where}: unknown parameter(s) {', '.join(map(repr, extra))}"
            raise ValidationError(msg)
        normalize_meta(coerce_meta(slug), where)
        return

    if len(params) != 1:
        msg = (
            f"{where}: route declares parameters {', '.join(params)}; "
            f"each slug must be a mapping, got {type(slug).__name__}"
        )
        raise ValidationError(msg)
    if isinstance(slug, bool) or not isinstance(slug, (str, int, float)):
        msg = f"{where}: slug must be a string or a number, got {type(slug).__name__}"
        raise ValidationError(msg)


def validate_slugs(route: RouteDefinition, slugs: object) -> None:
    """Check a (resolved) slug list against the parameters of *route*.

    Raises:
        ValidationError: If *slugs* is not a list, contains ``None``, or a
            slug misses or adds a parameter.

    """
    if not isinstance(slugs, (list, tuple)):
        msg = f"route {route.label}: slugs must be a list, got {type(slugs).__name__}"
        raise ValidationError(msg)
    params = route.params
    for index, slug in enumerate(slugs):
        _check_slug(route, params, slug, index)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def _needs_origin(config: SitemapConfig) -> str | None:
    """Return the first location that needs a base URL, if any."""
    for route in config.routes:
        if route.excluded:
            continue
        location = route.loc or route.path
        if isinstance(location, str) and not has_scheme(location):
            return f"route {route.label}"
    for url in config.urls:
        location = url.loc if isinstance(url, Entry) else url
        if isinstance(location, str) and not has_scheme(location):
            return f"URL {location!r}"
    return None


def _validate_route(route: RouteDefinition, defaults: EntryMeta) -> None:
    where = f"route {route.label}"
    if not isinstance(route.path, str) or not route.path:
        msg = f"{where}: path must be a non-empty string"
        raise ValidationError(msg)

    if route.loc is not None and (not isinstance(route.loc, str) or not route.loc):
        msg = f"{where}: 'loc' must be a non-empty string"
        raise ValidationError(msg)

    normalize_meta(defaults.overlay(route.meta), where)

    if route.slugs is not None and route.slug_source is not None:
        msg = f"{where}: 'slugs' and 'slug_source' are mutually exclusive"
        raise ValidationError(msg)

    params = route.params
    if not params:
        return

    if route.loc is not None:
        msg = f"{where}: 'loc' can only override routes without parameters"
        raise ValidationError(msg)
    if route.slugs is None and route.slug_source is None:
        msg = f"{where}: dynamic route is missing slugs for parameter(s) {', '.join(params)}"
        raise ValidationError(msg)
    if route.slug_source is not None and not callable(route.slug_source):
        msg = f"{where}: slug_source must be callable"
        raise ValidationError(msg)
    if route.slugs is not None:
        validate_slugs(route, route.slugs)


def _validate_url(url: object) -> None:
    if isinstance(url, str):
        if not url:
            msg = "URL entries must not be empty"
            raise ValidationError(msg)
        return
    if not isinstance(url, Entry):
        msg = f"URL entries must be strings or Entry records, got {type(url).__name__}"
        raise ValidationError(msg)
    if not isinstance(url.loc, str) or not url.loc:
        msg = f"URL entry {url!r}: 'loc' must be a non-empty string"
        raise ValidationError(msg)
    normalize_meta(url.meta, f"URL {url.loc!r}")


def validate_config(config: SitemapConfig) -> None:
    """Check *config* before generation.

    Side-effect free; returns nothing on success.

    Raises:
        ConfigurationError: If a route or partial URL is present without a
            ``base_url``.
        ValidationError: On invalid metadata, slugs or route definitions.

    """
    if not config.base_url:
        offender = _needs_origin(config)
        if offender is not None:
            msg = f"{offender} is relative but base_url is not configured"
            raise ConfigurationError(msg)

    normalize_meta(config.defaults, "defaults")

    for route in config.routes:
        if route.excluded:
            continue
        _validate_route(route, config.defaults)

    for url in config.urls:
        _validate_url(url)
