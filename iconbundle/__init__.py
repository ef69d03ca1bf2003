"""Icon stylesheet bundling and icon delivery tools."""

__version__ = "0.1.0"
