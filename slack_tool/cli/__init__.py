"""Command-line surface of the installed slack-tool."""

from .app import create_parser, main

__all__ = ["create_parser", "main"]
