"""Incremental full-text search over multi-chapter books.

This module provides literal query matching, cancellable chapter-by-chapter
search sessions, ordered result storage with wraparound navigation, and
snippet extraction for display.
"""

from book_search.search.controller import SearchController, SearchReport
from book_search.search.matcher import (
    MIN_QUERY_LENGTH,
    Match,
    QueryOptions,
    compile_matcher,
    is_noop,
)
from book_search.search.results import ResultStore, SearchResult
from book_search.search.session import (
    DEFAULT_MAX_RESULTS,
    SearchSession,
    SessionHandle,
    SessionListener,
    SessionState,
    start_session,
)
from book_search.search.snippet import Snippet, build_snippet

__all__ = [
    # Matcher
    "MIN_QUERY_LENGTH",
    "Match",
    "QueryOptions",
    "compile_matcher",
    "is_noop",
    # Session
    "DEFAULT_MAX_RESULTS",
    "SearchSession",
    "SessionHandle",
    "SessionListener",
    "SessionState",
    "start_session",
    # Results
    "ResultStore",
    "SearchResult",
    # Snippets
    "Snippet",
    "build_snippet",
    # Controller
    "SearchController",
    "SearchReport",
]
