"""Book table of contents API."""

__version__ = "0.1.0"
