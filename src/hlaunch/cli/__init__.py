"""Command-line interface for hlaunch."""

from hlaunch.cli.app import entrypoint, main

__all__ = [
    "entrypoint",
    "main",
]
