"""CLI layer for book-search.

This module provides the command-line interface for book-search,
built on Typer with Rich formatting support.

Usage:
    book-search search novel.txt "white whale"
    book-search chapters novel.txt
"""

from book_search.cli.app import app, main
from book_search.cli.options import (
    BookArgument,
    CaseSensitiveOption,
    ConfigPathOption,
    FormatChoice,
    FormatOption,
    VerboseOption,
    WholeWordOption,
)

__all__ = [
    # App
    "app",
    "main",
    # Options
    "BookArgument",
    "CaseSensitiveOption",
    "ConfigPathOption",
    "FormatChoice",
    "FormatOption",
    "VerboseOption",
    "WholeWordOption",
]
