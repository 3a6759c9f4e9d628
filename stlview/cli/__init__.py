"""Command-line interface for stlview."""

from stlview.cli.app import app, main

__all__ = ["app", "main"]
