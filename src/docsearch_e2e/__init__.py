"""End-to-end checks for the DocSearch modal widget."""

__version__ = "0.1.0"
