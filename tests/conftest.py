"""Shared test fixtures for routemap."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from routemap.serialize import SITEMAP_NS

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


@pytest.fixture
def wrap_urlset() -> Callable[..., str]:
    """Return a helper wrapping ``<url>`` markup in a compact urlset document."""

    def _wrap(*parts: str) -> str:
        return f'{XML_DECLARATION}<urlset xmlns="{SITEMAP_NS}">' + "".join(parts) + "</urlset>"

    return _wrap


@pytest.fixture
def wrap_index() -> Callable[..., str]:
    """Return a helper wrapping ``<sitemap>`` markup in a compact index document."""

    def _wrap(*parts: str) -> str:
        return f'{XML_DECLARATION}<sitemapindex xmlns="{SITEMAP_NS}">' + "".join(parts) + "</sitemapindex>"

    return _wrap


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create a minimal project with a routemap.yaml.

    Returns the path to the project root.
    """
    (tmp_path / "routemap.yaml").write_text(
        "base_url: https://example.com\n"
        "defaults:\n"
        "  changefreq: weekly\n"
        "routes:\n"
        "  - path: /\n"
        "  - path: /article/:title\n"
        "    meta:\n"
        "      sitemap:\n"
        "        slugs: [hello, world]\n"
        "  - path: '*'\n"
        "urls:\n"
        "  - /about\n"
        "  - loc: /contact\n"
        "    priority: 0.3\n",
        encoding="utf-8",
    )
    return tmp_path
