"""Command-line interface for slimxml."""

from .main import main

__all__ = ["main"]
