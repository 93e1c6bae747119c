"""Command-line interface for sift."""

from .main import cli

__all__ = ["cli"]
