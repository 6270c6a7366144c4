"""Local Markdown notes: store, list filtering and a highlighting editor."""

__version__ = "0.1.0"
