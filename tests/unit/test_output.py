"""Unit tests for output formatters."""

import json
from io import StringIO

import pytest

from book_search.output import (
    JSONFormatter,
    OutputFormat,
    PlainFormatter,
    RichFormatter,
    get_formatter,
)
from book_search.search.controller import SearchReport
from book_search.search.matcher import QueryOptions
from book_search.search.results import SearchResult
from book_search.search.session import SessionState


def _report(**kwargs) -> SearchReport:
    results = [
        SearchResult(0, 1, "The fox ran.", 4, 3, index=0),
        SearchResult(0, 3, "A fox slept.", 2, 3, index=1),
        SearchResult(2, 0, "Fox [bold]tracks[/bold] in snow.", 0, 3, index=2),
    ]
    fields = {
        "query": "fox",
        "options": QueryOptions(),
        "results": results,
        "chapter_titles": ["Morning", "Noon", "Night"],
        "state": SessionState.COMPLETED,
        "chapters_scanned": 3,
        "total_chapters": 3,
    }
    fields.update(kwargs)
    return SearchReport(**fields)


def _empty(query: str) -> SearchReport:
    return _report(query=query, results=[])


class TestPlainFormatter:
    """Tests for PlainFormatter."""

    def test_format_type(self) -> None:
        """Test format type."""
        assert PlainFormatter().format_type == OutputFormat.PLAIN

    def test_results_grouped_by_chapter(self) -> None:
        """Test chapter headings and highlighted matches."""
        output = PlainFormatter().format_report(_report())

        assert 'Search: "fox"' in output
        assert "3 results" in output
        assert "Ch. 1: Morning (2)" in output
        assert "Ch. 3: Night (1)" in output
        assert "Ch. 2" not in output
        assert "The [fox] ran." in output
        assert "[Fox] [bold]tracks[/bold] in snow." in output

    def test_selected_result_marked(self) -> None:
        """Test that the selected result is flagged."""
        output = PlainFormatter().format_report(_report(selected_index=1))

        assert ">    2. A [fox] slept." in output
        assert "2 of 3" in output

    def test_custom_highlight(self) -> None:
        """Test custom highlight markers."""
        output = PlainFormatter(highlight=("**", "**")).format_report(_report())

        assert "The **fox** ran." in output

    def test_cap_notice(self) -> None:
        """Test that hitting the cap prints a notice."""
        output = PlainFormatter().format_report(_report(cap_reached=True, max_results=3))

        assert "Showing first 3 results." in output

    def test_failed_chapters(self) -> None:
        """Test that skipped chapters are listed."""
        output = PlainFormatter().format_report(_report(failed_chapters=[1]))

        assert "Skipped unreadable chapters: 2" in output

    @pytest.mark.parametrize(
        ("query", "message"),
        [
            ("", "Type to search across the book"),
            ("f", "Type at least 2 characters"),
            ("zebra", "No results found"),
        ],
    )
    def test_empty_states(self, query: str, message: str) -> None:
        """Test the three empty-result messages."""
        assert message in PlainFormatter().format_report(_empty(query))

    def test_verbose_shows_state(self) -> None:
        """Test verbose session details."""
        output = PlainFormatter(verbose=True).format_report(_report())

        assert "state: completed" in output
        assert "chapters: 3/3" in output

    def test_format_chapters(self) -> None:
        """Test chapter listing."""
        output = PlainFormatter().format_chapters("story", ["One", "Two"])

        assert output.splitlines()[0] == "story"
        assert "  1. One" in output
        assert "  2. Two" in output

    def test_print_report_to_stream(self) -> None:
        """Test printing to a custom stream."""
        stream = StringIO()
        PlainFormatter(stream=stream).print_report(_report())

        assert "The [fox] ran." in stream.getvalue()

    def test_print_error(self) -> None:
        """Test that errors go to the error stream."""
        stream, error_stream = StringIO(), StringIO()
        PlainFormatter(stream=stream, error_stream=error_stream).print_error("bad")

        assert error_stream.getvalue() == "Error: bad\n"
        assert stream.getvalue() == ""


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_format_type(self) -> None:
        """Test format type."""
        assert JSONFormatter().format_type == OutputFormat.JSON

    def test_report_structure(self) -> None:
        """Test the JSON report fields."""
        data = json.loads(JSONFormatter().format_report(_report(cap_reached=True)))

        assert data["success"] is True
        assert data["query"] == "fox"
        assert data["state"] == "completed"
        assert data["count"] == 3
        assert data["cap_reached"] is True
        assert data["options"] == {"case_sensitive": False, "whole_word": False}
        first = data["results"][0]
        assert first["chapter_index"] == 0
        assert first["sentence_index"] == 1
        assert first["snippet"]["matched"] == "fox"
        assert first["snippet"]["before"] == "The "
        assert "text" not in first

    def test_verbose_includes_text(self) -> None:
        """Test that verbose output keeps full sentence text."""
        data = json.loads(JSONFormatter(verbose=True).format_report(_report()))

        assert data["results"][0]["text"] == "The fox ran."

    def test_compact(self) -> None:
        """Test compact JSON output."""
        output = JSONFormatter(indent=None).format_chapters("story", ["One"])

        assert "\n" not in output
        assert json.loads(output)["chapters"] == [{"index": 0, "title": "One"}]

    def test_format_error(self) -> None:
        """Test JSON error output."""
        data = json.loads(JSONFormatter().format_error("bad"))

        assert data == {"success": False, "error": "bad"}


class TestRichFormatter:
    """Tests for RichFormatter."""

    def test_format_type(self) -> None:
        """Test format type."""
        assert RichFormatter().format_type == OutputFormat.RICH

    def test_book_text_is_not_markup(self) -> None:
        """Test that markup-like book text is printed literally."""
        output = RichFormatter(width=120, color=False).format_report(_report())

        assert "[bold]tracks[/bold]" in output
        assert "Ch. 1: Morning (2)" in output

    def test_empty_report(self) -> None:
        """Test rendering with no results."""
        output = RichFormatter(width=80, color=False).format_report(_empty("zebra"))

        assert "No results found" in output

    def test_cap_and_failures(self) -> None:
        """Test notices for the cap and skipped chapters."""
        output = RichFormatter(width=120, color=False).format_report(
            _report(cap_reached=True, max_results=3, failed_chapters=[1])
        )

        assert "Showing first 3 results." in output
        assert "Skipped unreadable chapters: 2" in output

    def test_format_chapters(self) -> None:
        """Test chapter listing panel."""
        output = RichFormatter(width=60, color=False).format_chapters("story [draft]", ["One"])

        assert "story [draft]" in output
        assert "One" in output


class TestGetFormatter:
    """Tests for get_formatter."""

    @pytest.mark.parametrize(
        ("name", "formatter_class"),
        [
            ("plain", PlainFormatter),
            ("JSON", JSONFormatter),
            (OutputFormat.RICH, RichFormatter),
        ],
    )
    def test_get_formatter(self, name: object, formatter_class: type) -> None:
        """Test formatter lookup by name or enum."""
        assert isinstance(get_formatter(name), formatter_class)

    def test_verbose_passed_through(self) -> None:
        """Test that verbose reaches the formatter."""
        assert get_formatter("plain", verbose=True).verbose is True

    def test_unknown_format(self) -> None:
        """Test that unknown formats raise ValueError."""
        with pytest.raises(ValueError):
            get_formatter("xml")
