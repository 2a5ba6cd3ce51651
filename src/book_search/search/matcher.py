"""Literal query matching.

This module compiles a query string and matching options into a pure
text-scanning function. Queries are always literals: every regex
metacharacter is escaped before compilation.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

MIN_QUERY_LENGTH = 2


@dataclass(frozen=True)
class QueryOptions:
    """Matching options for a search session."""

    case_sensitive: bool = False
    whole_word: bool = False


@dataclass(frozen=True)
class Match:
    """A single occurrence of the query in a unit of text."""

    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


MatchFn = Callable[[str], list[Match]]


def _no_match(text: str) -> list[Match]:
    return []


def build_pattern(query: str, options: QueryOptions) -> re.Pattern[str]:
    """Build the compiled regex for a literal query.

    Args:
        query: Literal text to find.
        options: Matching options.

    Returns:
        Compiled pattern.
    """
    pattern = re.escape(query)
    if options.whole_word:
        pattern = rf"\b{pattern}\b"

    flags = 0 if options.case_sensitive else re.IGNORECASE
    return re.compile(pattern, flags)


def compile_matcher(
    query: str,
    options: QueryOptions | None = None,
    *,
    min_length: int = MIN_QUERY_LENGTH,
) -> MatchFn:
    """Compile a query into a matching function.

    Queries shorter than ``min_length`` compile to a matcher that never
    matches; that is a defined empty state rather than an error.

    Args:
        query: Literal text to find.
        options: Matching options (defaults: case-insensitive, substring).
        min_length: Shortest query that is actually searched.

    Returns:
        A function returning all non-overlapping matches, left to right.
    """
    if len(query) < min_length:
        return _no_match

    regex = build_pattern(query, options or QueryOptions())

    def match(text: str) -> list[Match]:
        return [Match(m.start(), m.end() - m.start()) for m in regex.finditer(text)]

    return match


def is_noop(matcher: MatchFn) -> bool:
    """Whether a compiled matcher can never produce a match."""
    return matcher is _no_match
