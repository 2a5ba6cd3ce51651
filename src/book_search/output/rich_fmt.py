"""Rich terminal output formatter."""

from io import StringIO
from typing import TextIO

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from book_search.config.schema import OutputFormat
from book_search.output.base import MAX_RESULTS_NOTICE, OutputFormatter
from book_search.search.controller import SearchReport
from book_search.search.results import SearchResult


class RichFormatter(OutputFormatter):
    """Rich terminal output formatter.

    Renders results as one table per chapter with the match highlighted.
    Book text is added through ``Text`` objects and chapter titles are
    markup-escaped, so nothing from the book is interpreted as markup.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
        width: int | None = None,
        color: bool = True,
        highlight_style: str = "bold black on yellow",
    ) -> None:
        """Initialize rich formatter.

        Args:
            stream: Output stream.
            error_stream: Error stream.
            verbose: Whether to show verbose output.
            width: Console width (None for auto-detect).
            color: Whether to emit colors.
            highlight_style: Style applied to matched text.
        """
        super().__init__(stream, error_stream, verbose)
        self._width = width
        self._color = color
        self._highlight_style = highlight_style

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.RICH

    def _render(self, *renderables: object) -> str:
        """Render to a string through a temporary console."""
        string_io = StringIO()
        temp_console = Console(
            file=string_io,
            width=self._width,
            force_terminal=self._color,
            no_color=not self._color,
        )
        for renderable in renderables:
            temp_console.print(renderable)
        return string_io.getvalue().rstrip()

    def _snippet_text(self, report: SearchReport, result: SearchResult) -> Text:
        snippet = self.snippet(report, result.index)
        text = Text()
        if snippet.truncated_start:
            text.append("...", style="dim")
        text.append(snippet.before)
        text.append(snippet.matched, style=self._highlight_style)
        text.append(snippet.after)
        if snippet.truncated_end:
            text.append("...", style="dim")
        return text

    def format_report(self, report: SearchReport) -> str:
        """Format a search report with Rich tables."""
        header = Text()
        header.append("Search ", style="bold")
        header.append(f'"{report.query}"', style="cyan")
        options = []
        if report.options.case_sensitive:
            options.append("case-sensitive")
        if report.options.whole_word:
            options.append("whole word")
        if options:
            header.append(f"  ({', '.join(options)})", style="dim")

        if not report.results:
            parts: list[object] = [header, Text(self.empty_message(report), style="dim")]
            parts.extend(self._failure_notes(report))
            return self._render(*parts)

        renderables: list[object] = [header, Text(report.counter_text(), style="dim")]

        for chapter_index, results in report.grouped():
            table = Table(
                title=escape(f"{self.chapter_heading(report, chapter_index)} ({len(results)})"),
                title_justify="left",
                show_header=False,
                box=None,
                padding=(0, 1),
            )
            table.add_column("#", style="dim", justify="right", no_wrap=True)
            table.add_column("Snippet")
            for result in results:
                number = str(result.index + 1)
                if result.index == report.selected_index:
                    number = f"> {number}"
                table.add_row(number, self._snippet_text(report, result))
            renderables.append(table)

        if report.cap_reached:
            renderables.append(
                Text(MAX_RESULTS_NOTICE.format(count=report.max_results), style="yellow")
            )

        renderables.extend(self._failure_notes(report))

        if self._verbose:
            meta = Table(title="Session", show_header=False, box=None)
            meta.add_column("Key", style="dim")
            meta.add_column("Value", style="dim")
            meta.add_row("state", report.state.value)
            meta.add_row("chapters", f"{report.chapters_scanned}/{report.total_chapters}")
            renderables.append(meta)

        return self._render(*renderables)

    def _failure_notes(self, report: SearchReport) -> list[Text]:
        if not report.failed_chapters:
            return []
        skipped = ", ".join(str(i + 1) for i in report.failed_chapters)
        return [Text(f"Skipped unreadable chapters: {skipped}", style="red")]

    def format_chapters(self, title: str, chapters: list[str]) -> str:
        """Format a chapter listing as a Rich panel."""
        table = Table(show_header=False, box=None)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Chapter")
        for i, chapter in enumerate(chapters):
            table.add_row(str(i + 1), Text(chapter))
        return self._render(Panel(Group(table), title=escape(title)))

    def format_error(self, message: str) -> str:
        return self._render(Text(f"Error: {message}", style="bold red"))
