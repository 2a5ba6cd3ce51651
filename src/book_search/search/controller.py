"""Search controller.

The controller is the caller-side owner of a search: it keeps the current
query and options, holds at most one live session handle, and owns the
ResultStore that the live session writes into. Starting a new search
always cancels the previous one and clears its results first, so only
one session's results are ever visible.
"""

import logging
from dataclasses import dataclass, field

from book_search.book.source import ChapterSource
from book_search.config.schema import SearchConfig
from book_search.search.matcher import QueryOptions
from book_search.search.results import ResultStore, SearchResult, SelectCallback
from book_search.search.session import (
    SearchSession,
    SessionHandle,
    SessionListener,
    SessionState,
)

logger = logging.getLogger(__name__)


@dataclass
class SearchReport:
    """Snapshot of a search for display."""

    query: str
    options: QueryOptions
    results: list[SearchResult]
    chapter_titles: list[str]
    state: SessionState = SessionState.IDLE
    cap_reached: bool = False
    max_results: int = 200
    chapters_scanned: int = 0
    total_chapters: int = 0
    failed_chapters: list[int] = field(default_factory=list)
    selected_index: int = -1
    snippet_window: int = 80
    min_query_length: int = 2

    @property
    def query_too_short(self) -> bool:
        return len(self.query) < self.min_query_length

    @property
    def searching(self) -> bool:
        return self.state is SessionState.RUNNING

    def counter_text(self) -> str:
        """Result counter in the form "3 results" or "2 of 3"."""
        if not self.results:
            return ""
        suffix = "+" if self.searching else ""
        if self.selected_index >= 0:
            return f"{self.selected_index + 1} of {len(self.results)}{suffix}"
        return f"{len(self.results)}{suffix} results"

    def grouped(self) -> list[tuple[int, list[SearchResult]]]:
        """Results grouped by chapter, in document order."""
        groups: list[tuple[int, list[SearchResult]]] = []
        for result in self.results:
            if groups and groups[-1][0] == result.chapter_index:
                groups[-1][1].append(result)
            else:
                groups.append((result.chapter_index, [result]))
        return groups


class SearchController:
    """Runs searches over a chapter source, one session at a time."""

    def __init__(
        self,
        source: ChapterSource,
        config: SearchConfig | None = None,
        *,
        listener: SessionListener | None = None,
        on_select: SelectCallback | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            source: Chapters to search.
            config: Search settings (cap, minimum query length, defaults).
            listener: Receives events from every session this controller
                starts.
            on_select: Selection-change callback
                ``(chapter_index, sentence_index)``.
        """
        self.source = source
        self.config = config or SearchConfig()
        self.store = ResultStore(on_select=on_select)
        self.query = ""
        self.options = QueryOptions(
            case_sensitive=self.config.case_sensitive,
            whole_word=self.config.whole_word,
        )
        self._listener = listener
        self._handle: SessionHandle | None = None

    @property
    def handle(self) -> SessionHandle | None:
        """Handle of the most recent session, live or finished."""
        return self._handle

    @property
    def session(self) -> SearchSession | None:
        return self._handle.session if self._handle else None

    @property
    def is_searching(self) -> bool:
        session = self.session
        return session is not None and session.state is SessionState.RUNNING

    def search(
        self,
        query: str | None = None,
        options: QueryOptions | None = None,
    ) -> SessionHandle:
        """Start a new search, aborting the current one.

        Must be called from inside a running event loop.

        Args:
            query: New query (keeps the current one if None).
            options: New matching options (keeps the current ones if None).

        Returns:
            Handle on the new session.
        """
        if query is not None:
            self.query = query
        if options is not None:
            self.options = options

        self.cancel()
        self.store.clear()

        session = SearchSession(
            self.query.strip(),
            self.options,
            chapter_count=self.source.chapter_count,
            load_chapter=self.source.load_chapter,
            resident=self.source.resident,
            store=self.store,
            listener=self._listener,
            max_results=self.config.max_results,
            min_query_length=self.config.min_query_length,
        )
        logger.debug("Starting session %s for %r", session.id, session.query)
        self._handle = session.start()
        return self._handle

    def set_options(self, options: QueryOptions) -> SessionHandle | None:
        """Change matching options, re-running the search if it is searchable.

        Args:
            options: New matching options.

        Returns:
            Handle on the new session, or None if the query is too short
            to search.
        """
        self.options = options
        if len(self.query.strip()) >= self.config.min_query_length:
            return self.search()
        return None

    def cancel(self) -> None:
        """Abort the live session, if any, and drop its partial results."""
        if self._handle is not None and not self._handle.session.is_terminal:
            self._handle.cancel()
            self.store.clear()

    def close(self) -> None:
        """Abort any search and forget the query, results and selection."""
        self.cancel()
        self._handle = None
        self.store.clear()
        self.query = ""

    async def wait(self) -> SearchSession | None:
        """Wait for the current session to stop."""
        if self._handle is None:
            return None
        return await self._handle.wait()

    def select(self, index: int) -> SearchResult | None:
        return self.store.select(index)

    def next(self) -> SearchResult | None:
        return self.store.next()

    def prev(self) -> SearchResult | None:
        return self.store.prev()

    def results(self) -> list[SearchResult]:
        return self.store.all()

    def report(self) -> SearchReport:
        """Snapshot the current search for display."""
        session = self.session
        return SearchReport(
            query=self.query.strip(),
            options=self.options,
            results=self.store.all(),
            chapter_titles=[
                self.source.chapter_title(i) for i in range(self.source.chapter_count)
            ],
            state=session.state if session else SessionState.IDLE,
            cap_reached=session.cap_reached if session else False,
            max_results=self.config.max_results,
            chapters_scanned=session.chapters_scanned if session else 0,
            total_chapters=self.source.chapter_count,
            failed_chapters=list(session.failed_chapters) if session else [],
            selected_index=self.store.current_index(),
            snippet_window=self.config.snippet_window,
            min_query_length=self.config.min_query_length,
        )
