"""Raven ski instructor booking backend."""

__version__ = "1.0.0"
