"""Routemap error hierarchy.

All routemap-specific errors inherit from RoutemapError for easy catching.
"""


class RoutemapError(Exception):
    """Base error for all routemap operations."""


class ValidationError(RoutemapError):
    """Malformed metadata, slugs, or route definitions."""


class ConfigurationError(ValidationError):
    """Invalid or missing configuration (e.g. no base URL for a partial location)."""


class ExportError(RoutemapError):
    """Error while writing sitemap documents to disk."""
