"""Cancellable, incremental search sessions.

A SearchSession scans every chapter of a book in order, loading chapters
on demand, and appends the first match of each matching sentence to a
ResultStore. It runs as an asyncio task and hands control back to the
event loop between chapters so a long scan never blocks other work.

Cancellation is cooperative. ``cancel()`` only raises a flag; the scan
notices it at its two suspension points (the chapter load and the
inter-chapter yield) and stops there without appending anything else.
"""

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum

from book_search.exceptions import SessionStateError
from book_search.search.matcher import (
    MIN_QUERY_LENGTH,
    MatchFn,
    QueryOptions,
    compile_matcher,
    is_noop,
)
from book_search.search.results import ResultStore, SearchResult
from book_search.utils.logging import log_with_context

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 200

LoadChapter = Callable[[int], Awaitable[Sequence[str]]]
ResidentLookup = Callable[[int], Sequence[str] | None]
ProgressCallback = Callable[[int, int], None]


class SessionState(str, Enum):
    """Lifecycle state of a search session."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


class SessionListener:
    """Receives notifications from a running session.

    Subclass and override the hooks you need; all of them default to
    doing nothing.
    """

    def on_progress(self, scanned: int, total: int) -> None:
        """A chapter finished scanning (or was skipped)."""

    def on_results(self, results: list[SearchResult]) -> None:
        """A chapter produced results, already appended to the store."""

    def on_chapter_error(self, chapter_index: int, error: Exception) -> None:
        """A chapter failed to load and was skipped."""

    def on_cap_reached(self) -> None:
        """The result cap stopped the scan early."""

    def on_finished(self, session: "SearchSession") -> None:
        """The session reached a terminal state."""


class SearchSession:
    """One run of a search request over every chapter of a book."""

    def __init__(
        self,
        query: str,
        options: QueryOptions | None = None,
        *,
        chapter_count: int,
        load_chapter: LoadChapter,
        resident: ResidentLookup | None = None,
        store: ResultStore | None = None,
        listener: SessionListener | None = None,
        on_chapter_scanned: ProgressCallback | None = None,
        text_filter: Callable[[str], str] | None = None,
        max_results: int = DEFAULT_MAX_RESULTS,
        min_query_length: int = MIN_QUERY_LENGTH,
    ) -> None:
        """Create an idle session.

        Args:
            query: Literal text to find.
            options: Matching options.
            chapter_count: Number of chapters to scan.
            load_chapter: Coroutine function returning a chapter's sentences.
            resident: Returns sentences for chapters already in memory,
                or None when the chapter must be loaded.
            store: Result store to append to (a fresh one if None).
            listener: Receives progress, result and lifecycle events.
            on_chapter_scanned: Called with ``(scanned, total)`` after
                each chapter.
            text_filter: Converts each sentence to plain text before
                matching (e.g. HTML stripping).
            max_results: Result cap for the session.
            min_query_length: Shortest query that is actually searched.
        """
        self.id = uuid.uuid4().hex[:12]
        self.query = query
        self.options = options or QueryOptions()
        self.chapter_count = chapter_count
        self.store = store if store is not None else ResultStore()
        self.max_results = max_results
        self.min_query_length = min_query_length

        self._load_chapter = load_chapter
        self._resident = resident
        self._listener = listener or SessionListener()
        self._on_chapter_scanned = on_chapter_scanned
        self._text_filter = text_filter

        self.state = SessionState.IDLE
        self.results_found = 0
        self.chapters_scanned = 0
        self.cap_reached = False
        self.failed_chapters: list[int] = []
        self._cancelled = False
        self._started = False

    def __repr__(self) -> str:
        return (
            f"SearchSession(id={self.id!r}, query={self.query!r}, "
            f"state={self.state.value}, results_found={self.results_found})"
        )

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def is_terminal(self) -> bool:
        return self.state in (SessionState.COMPLETED, SessionState.ABORTED)

    def cancel(self) -> None:
        """Abort the session.

        Takes effect immediately for the session's state; the scan itself
        stops at its next suspension point. A started session owns its
        store, so the partial results are dropped with it. Cancelling a
        finished session does nothing.
        """
        if self.is_terminal:
            return
        self._cancelled = True
        if self._started:
            self.store.clear()
        self._finish(SessionState.ABORTED)

    def start(self) -> "SessionHandle":
        """Schedule the scan on the running event loop.

        Returns:
            Handle for cancelling and awaiting the session.

        Raises:
            SessionStateError: If the session was already started.
            RuntimeError: If no event loop is running.
        """
        self._claim_start()
        task = asyncio.get_running_loop().create_task(self._run())
        return SessionHandle(self, task)

    async def run(self) -> "SearchSession":
        """Scan all chapters in order.

        Returns:
            This session, in a terminal state.

        Raises:
            SessionStateError: If the session was already started.
        """
        self._claim_start()
        return await self._run()

    def _claim_start(self) -> None:
        if self._started or self.state is not SessionState.IDLE:
            raise SessionStateError(f"Session {self.id} was already started")
        self._started = True

    async def _run(self) -> "SearchSession":
        # Cancelled between start() and the task's first step
        if self._cancelled:
            return self

        self.state = SessionState.RUNNING
        log_with_context(
            logger,
            logging.DEBUG,
            "Search started",
            session_id=self.id,
            query=self.query,
            chapters=self.chapter_count,
        )

        try:
            await self._scan()
        except BaseException:
            self.cancel()
            raise

        return self

    async def _scan(self) -> None:
        matcher = compile_matcher(
            self.query, self.options, min_length=self.min_query_length
        )
        if is_noop(matcher):
            self._finish(SessionState.COMPLETED)
            return

        for chapter_index in range(self.chapter_count):
            if self._cancelled:
                return

            sentences = await self._chapter_sentences(chapter_index)
            if self._cancelled:
                return

            if sentences is not None:
                batch = self._match_chapter(chapter_index, sentences, matcher)
                if batch:
                    added = self.store.append(batch)
                    self._listener.on_results(added)
                    if self._cancelled:
                        return

            self.chapters_scanned += 1
            self._report_progress()
            if self._cancelled:
                return

            if self.results_found >= self.max_results:
                self.cap_reached = True
                self._listener.on_cap_reached()
                self._finish(SessionState.COMPLETED)
                return

            # Cooperative yield between chapters
            await asyncio.sleep(0)

        if not self._cancelled:
            self._finish(SessionState.COMPLETED)

    async def _chapter_sentences(self, chapter_index: int) -> Sequence[str] | None:
        """Resident sentences, or the loaded ones; None if loading failed."""
        if self._resident is not None:
            sentences = self._resident(chapter_index)
            if sentences is not None:
                return sentences

        try:
            return await self._load_chapter(chapter_index)
        except Exception as e:
            if self._cancelled:
                return None
            log_with_context(
                logger,
                logging.WARNING,
                f"Failed to load chapter {chapter_index} for search: {e}",
                session_id=self.id,
                chapter_index=chapter_index,
            )
            self.failed_chapters.append(chapter_index)
            self._listener.on_chapter_error(chapter_index, e)
            return None

    def _match_chapter(
        self,
        chapter_index: int,
        sentences: Sequence[str],
        matcher: MatchFn,
    ) -> list[SearchResult]:
        """Match every sentence, keeping the first hit of each."""
        batch: list[SearchResult] = []
        for sentence_index, sentence in enumerate(sentences):
            text = self._text_filter(sentence) if self._text_filter else sentence
            matches = matcher(text)
            if matches:
                first = matches[0]
                batch.append(
                    SearchResult(
                        chapter_index=chapter_index,
                        sentence_index=sentence_index,
                        text=text,
                        match_start=first.start,
                        match_length=first.length,
                    )
                )
                self.results_found += 1
                if self.results_found >= self.max_results:
                    break
        return batch

    def _report_progress(self) -> None:
        self._listener.on_progress(self.chapters_scanned, self.chapter_count)
        if self._on_chapter_scanned is not None:
            self._on_chapter_scanned(self.chapters_scanned, self.chapter_count)

    def _finish(self, state: SessionState) -> None:
        self.state = state
        log_with_context(
            logger,
            logging.DEBUG,
            f"Search {state.value}",
            session_id=self.id,
            results=self.results_found,
            scanned=self.chapters_scanned,
            cap_reached=self.cap_reached,
        )
        self._listener.on_finished(self)


class SessionHandle:
    """Caller-side handle on a started session."""

    def __init__(self, session: SearchSession, task: "asyncio.Task[SearchSession]") -> None:
        self._session = session
        self._task = task

    @property
    def session(self) -> SearchSession:
        return self._session

    @property
    def done(self) -> bool:
        """Whether the scan has stopped running."""
        return self._task.done()

    def cancel(self) -> None:
        """Abort the session and discard its partial results."""
        self._session.cancel()

    async def wait(self) -> SearchSession:
        """Wait for the scan to stop and return the session."""
        return await self._task

    def __await__(self):
        return self.wait().__await__()


def start_session(
    query: str,
    options: QueryOptions | None,
    chapter_count: int,
    load_chapter: LoadChapter,
    on_chapter_scanned: ProgressCallback | None = None,
    **kwargs,
) -> SessionHandle:
    """Create and start a search session.

    Must be called from inside a running event loop.

    Args:
        query: Literal text to find.
        options: Matching options.
        chapter_count: Number of chapters to scan.
        load_chapter: Coroutine function returning a chapter's sentences.
        on_chapter_scanned: Progress callback ``(scanned, total)``.
        **kwargs: Further SearchSession arguments (store, resident,
            listener, max_results, ...).

    Returns:
        Handle for the running session.
    """
    session = SearchSession(
        query,
        options,
        chapter_count=chapter_count,
        load_chapter=load_chapter,
        on_chapter_scanned=on_chapter_scanned,
        **kwargs,
    )
    return session.start()
