"""Shared type definitions for routemap."""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from datetime import date, datetime
from typing import Any, Literal, TypeAlias

# Sitemap <changefreq> values
ChangeFreq: TypeAlias = Literal["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"]

# Anything accepted as a <lastmod> value before normalization
LastModInput: TypeAlias = str | int | float | date | datetime

# A single slug: scalar for one-parameter routes, mapping otherwise
Slug: TypeAlias = str | int | float | Mapping[str, Any]

# Zero-argument producer of slugs, sync or async
SlugSource: TypeAlias = Callable[[], Sequence[Slug] | Awaitable[Sequence[Slug]]]

# Document name (``sitemap``, ``sitemap-part-N``, ``sitemap-index``)
DocumentName: TypeAlias = str

# Name -> XML text
Documents: TypeAlias = dict[DocumentName, str]
