"""Main CLI application for book-search."""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from book_search import __version__
from book_search.book import BookChapterSource, load_book
from book_search.cli.options import (
    BookArgument,
    CaseSensitiveOption,
    ConfigPathOption,
    FormatOption,
    VerboseOption,
    WholeWordOption,
    get_output_format,
)
from book_search.config import BookSearchConfig, get_config, load_config
from book_search.config.defaults import get_config_path
from book_search.config.schema import OutputFormat
from book_search.exceptions import BookSearchError, ConfigNotFoundError, InvalidArgumentError
from book_search.output import get_formatter
from book_search.search import QueryOptions, SearchController, SearchReport, SessionListener
from book_search.utils.logging import setup_logging

app = typer.Typer(
    name="book-search",
    help="Incremental full-text search across book chapters",
    add_completion=False,
    no_args_is_help=True,
)

# Rich consoles for output
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"book-search version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Incremental full-text search across book chapters."""


def _read_config(config_path: str | None) -> BookSearchConfig:
    """Load the config named on the command line, or the default one."""
    if not config_path:
        return get_config()
    path = Path(config_path)
    if not path.exists():
        raise ConfigNotFoundError(f"Config file not found: {path}")
    return load_config(path)


def _load_settings(config_path: str | None, verbose: bool) -> BookSearchConfig:
    """Load config and configure logging for a command."""
    config = _read_config(config_path)
    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
        use_color=config.output.color,
    )
    return config


class _ProgressListener(SessionListener):
    """Feeds session progress into a Rich progress bar."""

    def __init__(self, progress: Progress, task_id: int) -> None:
        self._progress = progress
        self._task_id = task_id

    def on_progress(self, scanned: int, total: int) -> None:
        self._progress.update(
            self._task_id,
            completed=scanned,
            total=total,
            description=f"Searching... {scanned}/{total} chapters",
        )


async def _run_search(
    controller: SearchController,
    query: str,
    options: QueryOptions,
    select: int | None,
) -> SearchReport:
    controller.search(query, options)
    await controller.wait()
    if select is not None:
        controller.select(select - 1)
    return controller.report()


@app.command()
def search(
    book: BookArgument,
    query: str = typer.Argument(..., help="Text to find (matched literally)."),
    case_sensitive: CaseSensitiveOption = False,
    whole_word: WholeWordOption = False,
    max_results: int | None = typer.Option(
        None, "--max-results", "-n", min=1, help="Stop after this many results."
    ),
    select: int | None = typer.Option(
        None, "--select", "-s", help="Mark result number N as selected."
    ),
    format: FormatOption = None,
    config_path: ConfigPathOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Search every chapter of a book for a literal phrase."""
    try:
        config = _load_settings(config_path, verbose)
        output_format = get_output_format(format, config.output.default_format)
        formatter = get_formatter(output_format, verbose=verbose)

        if select is not None and select < 1:
            raise InvalidArgumentError("--select must be 1 or greater")

        search_config = config.search
        if max_results is not None:
            search_config = search_config.model_copy(update={"max_results": max_results})

        options = QueryOptions(
            case_sensitive=case_sensitive or search_config.case_sensitive,
            whole_word=whole_word or search_config.whole_word,
        )

        source = BookChapterSource(load_book(book), config.loading)

        if output_format is OutputFormat.JSON:
            controller = SearchController(source, search_config)
            report = asyncio.run(_run_search(controller, query, options, select))
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                console=err_console,
                transient=True,
            ) as progress:
                task_id = progress.add_task(
                    description="Searching...", total=source.chapter_count
                )
                controller = SearchController(
                    source,
                    search_config,
                    listener=_ProgressListener(progress, task_id),
                )
                report = asyncio.run(_run_search(controller, query, options, select))

        formatter.print_report(report)

    except BookSearchError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None


@app.command()
def chapters(
    book: BookArgument,
    format: FormatOption = None,
    config_path: ConfigPathOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List the chapters of a book."""
    try:
        config = _load_settings(config_path, verbose)
        output_format = get_output_format(format, config.output.default_format)
        formatter = get_formatter(output_format, verbose=verbose)

        parsed = load_book(book)
        formatter.print_chapters(parsed.title, parsed.chapter_titles())

    except BookSearchError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None


@app.command("config")
def config_cmd(
    show_path: bool = typer.Option(
        False,
        "--path",
        "-p",
        help="Show config file path.",
    ),
    config_path: ConfigPathOption = None,
) -> None:
    """Show current configuration."""
    if show_path:
        console.print(str(Path(config_path) if config_path else get_config_path()))
        return

    try:
        config = _read_config(config_path)
    except BookSearchError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None

    console.print("[bold]book-search configuration[/bold]\n")
    console.print(f"Config file: {escape(str(config_path or get_config_path()))}")
    console.print(f"Max results: {config.search.max_results}")
    console.print(f"Min query length: {config.search.min_query_length}")
    console.print(f"Snippet window: {config.search.snippet_window}")
    console.print(f"Case sensitive: {config.search.case_sensitive}")
    console.print(f"Whole word: {config.search.whole_word}")
    console.print(f"Load attempts: {config.loading.retry_attempts}")
    console.print(f"Output format: {OutputFormat(config.output.default_format).value}")
    console.print(f"Log level: {config.logging.level}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
