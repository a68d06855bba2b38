"""Serialization — render entries into sitemaps.org XML documents.

Two document kinds are produced, both in the sitemap 0.9 namespace::

    <urlset>        one <url> per entry: <loc>, <lastmod>, <changefreq>, <priority>
    <sitemapindex>  one <sitemap><loc> per part document

Documents are compact (a single line) unless ``pretty`` is set, in which
case elements are separated by newlines and indented with tabs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, SubElement, indent, tostring

if TYPE_CHECKING:
    from collections.abc import Iterable

    from routemap.config import Entry

# XML namespace for sitemaps
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def format_priority(value: float) -> str:
    """Render a priority as a decimal, always with a decimal point.

    ``1`` -> ``"1.0"``, ``0.0`` -> ``"0.0"``, ``0.35`` -> ``"0.35"``

    """
    text = f"{float(value):f}".rstrip("0")
    if text.endswith("."):
        text += "0"
    return text


def _to_document(root: Element, pretty: bool) -> str:
    if pretty:
        indent(root, space="\t")
    body = tostring(root, encoding="unicode", short_empty_elements=False)
    if pretty:
        return _XML_DECLARATION + "\n" + body + "\n"
    return _XML_DECLARATION + body


def render_urlset(entries: Iterable[Entry], pretty: bool = False) -> str:
    """Render *entries* as a ``<urlset>`` sitemap document.

    Tags appear in the fixed order ``loc``, ``lastmod``, ``changefreq``,
    ``priority``; unset metadata is omitted.

    """
    urlset = Element("urlset")
    urlset.set("xmlns", SITEMAP_NS)

    for entry in entries:
        url_el = SubElement(urlset, "url")
        SubElement(url_el, "loc").text = entry.loc
        if entry.lastmod is not None:
            SubElement(url_el, "lastmod").text = str(entry.lastmod)
        if entry.changefreq is not None:
            SubElement(url_el, "changefreq").text = entry.changefreq
        if entry.priority is not None:
            SubElement(url_el, "priority").text = format_priority(entry.priority)

    return _to_document(urlset, pretty)


def render_index(locations: Iterable[str], pretty: bool = False) -> str:
    """Render part *locations* as a ``<sitemapindex>`` document."""
    index = Element("sitemapindex")
    index.set("xmlns", SITEMAP_NS)

    for location in locations:
        sitemap_el = SubElement(index, "sitemap")
        SubElement(sitemap_el, "loc").text = location

    return _to_document(index, pretty)
