"""Location resolution — turn configured locations into final ``<loc>`` values.

A location is either absolute (``https://example.com/about``) and used
as-is, or partial (``/about``) and joined onto the configured base URL.
The trailing-slash policy is then applied to the path component and the
result is percent-encoded.  XML escaping (``&`` -> ``&amp;``) is left to
the serializer.
"""

from __future__ import annotations

import re
from urllib.parse import quote, urlsplit, urlunsplit

from routemap._errors import ConfigurationError

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")

# URL delimiters kept verbatim.  ``%`` is kept so that already-encoded
# input is not encoded twice; ``'`` is not, so it never reaches the XML.
_SAFE_CHARS = ";,/?:@&=+$!*()#%~"

# A ``%`` that does not start a ``%XX`` escape
_LONE_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def has_scheme(location: str) -> bool:
    """Return True if *location* is absolute (carries a ``scheme://``)."""
    return _SCHEME_RE.match(location) is not None


def join_origin(location: str, base_url: str) -> str:
    """Join a partial *location* onto *base_url* with exactly one ``/``.

    Raises:
        ConfigurationError: If *base_url* is empty.

    """
    if not base_url:
        msg = f"Cannot resolve partial location {location!r}: base_url is not configured"
        raise ConfigurationError(msg)
    return base_url.rstrip("/") + "/" + location.lstrip("/")


def apply_trailing_slash(url: str, trailing_slash: bool) -> str:
    """Apply the trailing-slash policy to the path component of *url*.

    With the policy enabled the path ends in exactly one ``/``; disabled,
    any trailing ``/`` is stripped except on the root path ``/``.

    """
    parts = urlsplit(url)
    path = parts.path
    if trailing_slash:
        path = path.rstrip("/") + "/"
    elif path:
        # A path made only of slashes collapses to the root
        path = path.rstrip("/") or "/"
    return urlunsplit(parts._replace(path=path))


def encode_location(url: str) -> str:
    """Percent-encode *url* (spaces, quotes, non-ASCII and other unsafe characters)."""
    return quote(_LONE_PERCENT_RE.sub("%25", url), safe=_SAFE_CHARS)


def resolve_location(location: str, base_url: str = "", trailing_slash: bool = False) -> str:
    """Resolve a configured location to its final absolute form.

    Args:
        location: Absolute URL or path relative to the origin.
        base_url: Site origin, required for partial locations.
        trailing_slash: Trailing-slash policy (see :func:`apply_trailing_slash`).

    Returns:
        Absolute, percent-encoded URL.

    Raises:
        ConfigurationError: If *location* is partial and *base_url* is empty.

    """
    url = location if has_scheme(location) else join_origin(location, base_url)
    return encode_location(apply_trailing_slash(url, trailing_slash))
