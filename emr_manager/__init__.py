"""Command-line Electronic Medical Records manager."""

__version__ = "0.1.0"
