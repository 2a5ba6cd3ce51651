"""JSON output formatter."""

import json
from typing import Any, TextIO

from book_search.config.schema import OutputFormat
from book_search.output.base import OutputFormatter
from book_search.search.controller import SearchReport


class JSONFormatter(OutputFormatter):
    """JSON output formatter.

    Produces structured JSON output suitable for programmatic
    consumption and integration with other tools.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
        indent: int | None = 2,
        ensure_ascii: bool = False,
    ) -> None:
        """Initialize JSON formatter.

        Args:
            stream: Output stream.
            error_stream: Error stream.
            verbose: Whether to show verbose output.
            indent: JSON indentation (None for compact).
            ensure_ascii: Whether to escape non-ASCII characters.
        """
        super().__init__(stream, error_stream, verbose)
        self._indent = indent
        self._ensure_ascii = ensure_ascii

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.JSON

    def _to_json(self, data: Any) -> str:
        """Convert data to JSON string."""
        return json.dumps(
            data,
            indent=self._indent,
            ensure_ascii=self._ensure_ascii,
            default=str,
        )

    def format_report(self, report: SearchReport) -> str:
        """Format a search report as JSON."""
        results: list[dict[str, Any]] = []
        for result in report.results:
            entry = result.to_dict()
            snippet = self.snippet(report, result.index)
            entry["snippet"] = {
                "before": snippet.before,
                "matched": snippet.matched,
                "after": snippet.after,
                "truncated_start": snippet.truncated_start,
                "truncated_end": snippet.truncated_end,
            }
            if not self._verbose:
                entry.pop("text")
            results.append(entry)

        output: dict[str, Any] = {
            "success": True,
            "query": report.query,
            "options": {
                "case_sensitive": report.options.case_sensitive,
                "whole_word": report.options.whole_word,
            },
            "state": report.state.value,
            "count": len(report.results),
            "cap_reached": report.cap_reached,
            "chapters_scanned": report.chapters_scanned,
            "total_chapters": report.total_chapters,
            "failed_chapters": report.failed_chapters,
            "selected_index": report.selected_index,
            "results": results,
        }
        return self._to_json(output)

    def format_chapters(self, title: str, chapters: list[str]) -> str:
        """Format a chapter listing as JSON."""
        output: dict[str, Any] = {
            "success": True,
            "title": title,
            "chapters": [{"index": i, "title": t} for i, t in enumerate(chapters)],
            "count": len(chapters),
        }
        return self._to_json(output)

    def format_error(self, message: str) -> str:
        return self._to_json({"success": False, "error": message})
