"""Shared CLI options for book-search commands.

This module provides reusable Typer options that are shared across
multiple commands.
"""

from enum import Enum
from typing import Annotated

import typer

from book_search.config.schema import OutputFormat


class FormatChoice(str, Enum):
    """Output format choices for CLI."""

    PLAIN = "plain"
    JSON = "json"
    RICH = "rich"


# Type aliases for common CLI options
FormatOption = Annotated[
    FormatChoice | None,
    typer.Option(
        "--format",
        "-f",
        help="Output format (plain, json, rich). Defaults to config setting.",
        case_sensitive=False,
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Show session details and debug logging.",
    ),
]

BookArgument = Annotated[
    str,
    typer.Argument(help="Book file (.txt, .md, .html) or directory of chapter files."),
]

CaseSensitiveOption = Annotated[
    bool,
    typer.Option("--case-sensitive", "-c", help="Match case exactly."),
]

WholeWordOption = Annotated[
    bool,
    typer.Option("--whole-word", "-w", help="Only match whole words."),
]

ConfigPathOption = Annotated[
    str | None,
    typer.Option(
        "--config",
        help="Path to a config file. Defaults to ~/.config/book-search/config.toml.",
    ),
]


def get_output_format(
    format_choice: FormatChoice | None, default: OutputFormat | str = OutputFormat.RICH
) -> OutputFormat:
    """Convert CLI format choice to OutputFormat.

    Args:
        format_choice: CLI format choice or None.
        default: Default format if none specified.

    Returns:
        OutputFormat enum value.
    """
    if format_choice is None:
        return OutputFormat(default)
    return OutputFormat(format_choice.value)
