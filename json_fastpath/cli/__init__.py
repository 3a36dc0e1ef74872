"""Command line interface for json-fastpath."""

from json_fastpath.cli.main import app, main

__all__ = ["app", "main"]
