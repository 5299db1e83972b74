"""Main CLI module for logfocus.

This module re-exports the CLI for convenience. The main implementation
is in __main__.py.
"""

from logfocus.__main__ import cli

__all__ = ["cli"]
