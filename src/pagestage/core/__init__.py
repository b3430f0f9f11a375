"""Core resolution and serving logic."""
