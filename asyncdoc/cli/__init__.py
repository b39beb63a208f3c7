"""Command line interface for asyncdoc."""

from asyncdoc.cli.main import app, main

__all__ = ["app", "main"]
