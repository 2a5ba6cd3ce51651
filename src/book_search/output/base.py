"""Output formatter protocol and base classes."""

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from book_search.config.schema import OutputFormat
from book_search.search.controller import SearchReport
from book_search.search.snippet import Snippet, build_snippet

MAX_RESULTS_NOTICE = (
    "Showing first {count} results. Refine your search for more specific results."
)


class OutputFormatter(ABC):
    """Abstract base class for output formatters.

    Formatters render search reports and chapter listings to the terminal
    in different formats (plain text, JSON, rich formatted). Escaping for
    the target medium is the formatter's job.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the formatter.

        Args:
            stream: Output stream (defaults to stdout).
            error_stream: Error stream (defaults to stderr).
            verbose: Whether to show verbose output.
        """
        self._stream = stream or sys.stdout
        self._error_stream = error_stream or sys.stderr
        self._verbose = verbose

    @property
    def stream(self) -> TextIO:
        """Get the output stream."""
        return self._stream

    @property
    def error_stream(self) -> TextIO:
        """Get the error stream."""
        return self._error_stream

    @property
    def verbose(self) -> bool:
        """Whether verbose output is enabled."""
        return self._verbose

    @property
    @abstractmethod
    def format_type(self) -> OutputFormat:
        """Get the format type of this formatter."""

    @abstractmethod
    def format_report(self, report: SearchReport) -> str:
        """Format a search report.

        Args:
            report: The search snapshot to render.

        Returns:
            Formatted string representation.
        """

    @abstractmethod
    def format_chapters(self, title: str, chapters: list[str]) -> str:
        """Format a book's chapter listing.

        Args:
            title: Book title.
            chapters: Chapter titles in order.

        Returns:
            Formatted string representation.
        """

    @abstractmethod
    def format_error(self, message: str) -> str:
        """Format an error message."""

    def snippet(self, report: SearchReport, index: int) -> Snippet:
        """Build the display snippet for one result of a report."""
        result = report.results[index]
        return build_snippet(
            result.text,
            result.match_start,
            result.match_length,
            report.snippet_window,
        )

    def chapter_heading(self, report: SearchReport, chapter_index: int) -> str:
        title = ""
        if 0 <= chapter_index < len(report.chapter_titles):
            title = report.chapter_titles[chapter_index]
        return f"Ch. {chapter_index + 1}: {title}" if title else f"Ch. {chapter_index + 1}"

    def empty_message(self, report: SearchReport) -> str:
        """Message shown when a report has no results."""
        if not report.query:
            return "Type to search across the book"
        if report.query_too_short:
            return f"Type at least {report.min_query_length} characters"
        return "No results found"

    def print_report(self, report: SearchReport) -> None:
        print(self.format_report(report), file=self._stream)

    def print_chapters(self, title: str, chapters: list[str]) -> None:
        print(self.format_chapters(title, chapters), file=self._stream)

    def print_error(self, message: str) -> None:
        print(self.format_error(message), file=self._error_stream)
