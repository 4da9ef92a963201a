"""rstpreview - resolve sandbox-safe HTML previews for reStructuredText documents."""

__version__ = "0.1.0"
