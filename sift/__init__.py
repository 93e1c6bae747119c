"""Sift - organize a directory tree by file type or modification date."""

__version__ = "1.0.0"
