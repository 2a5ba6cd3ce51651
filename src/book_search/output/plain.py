"""Plain text output formatter."""

from typing import TextIO

from book_search.config.schema import OutputFormat
from book_search.output.base import MAX_RESULTS_NOTICE, OutputFormatter
from book_search.search.controller import SearchReport


class PlainFormatter(OutputFormatter):
    """Plain text output formatter.

    Produces simple, unformatted text output suitable for piping to
    other commands. Matches are wrapped in ``highlight`` markers.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
        highlight: tuple[str, str] = ("[", "]"),
    ) -> None:
        """Initialize plain formatter.

        Args:
            stream: Output stream.
            error_stream: Error stream.
            verbose: Whether to show verbose output.
            highlight: Markers placed around each match.
        """
        super().__init__(stream, error_stream, verbose)
        self._highlight = highlight

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.PLAIN

    def format_report(self, report: SearchReport) -> str:
        """Format a search report as plain text."""
        lines: list[str] = []

        title = f'Search: "{report.query}"'
        lines.append(title)
        lines.append("-" * len(title))

        if not report.results:
            lines.append(self.empty_message(report))
            self._append_failures(report, lines)
            return "\n".join(lines)

        lines.append(report.counter_text())
        open_mark, close_mark = self._highlight

        for chapter_index, results in report.grouped():
            lines.append("")
            lines.append(f"{self.chapter_heading(report, chapter_index)} ({len(results)})")
            for result in results:
                snippet = self.snippet(report, result.index)
                prefix = "..." if snippet.truncated_start else ""
                suffix = "..." if snippet.truncated_end else ""
                marker = ">" if result.index == report.selected_index else " "
                lines.append(
                    f"{marker} {result.index + 1:>4}. {prefix}{snippet.before}"
                    f"{open_mark}{snippet.matched}{close_mark}{snippet.after}{suffix}"
                )

        if report.cap_reached:
            lines.append("")
            lines.append(MAX_RESULTS_NOTICE.format(count=report.max_results))

        self._append_failures(report, lines)

        if self._verbose:
            lines.append("")
            lines.append("---")
            lines.append(f"state: {report.state.value}")
            lines.append(f"chapters: {report.chapters_scanned}/{report.total_chapters}")

        return "\n".join(lines)

    def _append_failures(self, report: SearchReport, lines: list[str]) -> None:
        if report.failed_chapters:
            skipped = ", ".join(str(i + 1) for i in report.failed_chapters)
            lines.append("")
            lines.append(f"Skipped unreadable chapters: {skipped}")

    def format_chapters(self, title: str, chapters: list[str]) -> str:
        """Format a chapter listing as plain text."""
        lines = [title, "-" * len(title), ""]
        for i, chapter in enumerate(chapters):
            lines.append(f"  {i + 1:>3}. {chapter}")
        return "\n".join(lines)

    def format_error(self, message: str) -> str:
        return f"Error: {message}"
