"""Pagestage - a small static page server with legacy redirects."""

__version__ = "0.1.0"
