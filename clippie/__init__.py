"""Clippie - clipboard history daemon and terminal browser."""

__version__ = "1.0.0"
