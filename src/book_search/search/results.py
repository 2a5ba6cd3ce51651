"""Search results and navigation.

The ResultStore is an append-only, order-preserving list of results with
a selection cursor. Navigation wraps around at both ends.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Any

SelectCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class SearchResult:
    """One matching sentence.

    Attributes:
        chapter_index: Chapter containing the sentence.
        sentence_index: Position of the sentence within the chapter.
        text: Plain text of the sentence.
        match_start: Offset of the first match in ``text``.
        match_length: Length of that match.
        index: Position in the result store, assigned on append.
    """

    chapter_index: int
    sentence_index: int
    text: str
    match_start: int
    match_length: int
    index: int = -1

    @property
    def match_end(self) -> int:
        return self.match_start + self.match_length

    @property
    def matched_text(self) -> str:
        return self.text[self.match_start : self.match_end]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "index": self.index,
            "chapter_index": self.chapter_index,
            "sentence_index": self.sentence_index,
            "text": self.text,
            "match_start": self.match_start,
            "match_length": self.match_length,
        }


class ResultStore:
    """Ordered results of the current search plus a selection cursor.

    The cursor is ``-1`` when nothing is selected and otherwise always a
    valid index. Appending never moves the cursor.
    """

    def __init__(self, on_select: SelectCallback | None = None) -> None:
        """Initialize an empty store.

        Args:
            on_select: Called with ``(chapter_index, sentence_index)``
                whenever select/next/prev picks a result.
        """
        self._results: list[SearchResult] = []
        self._cursor = -1
        self.on_select = on_select

    def __len__(self) -> int:
        return len(self._results)

    def append(self, results: Iterable[SearchResult]) -> list[SearchResult]:
        """Append results, assigning each its store index.

        Args:
            results: Results in document order.

        Returns:
            The appended results with ``index`` filled in.
        """
        added: list[SearchResult] = []
        for result in results:
            indexed = replace(result, index=len(self._results))
            self._results.append(indexed)
            added.append(indexed)
        return added

    def clear(self) -> None:
        """Drop all results and reset the selection."""
        self._results = []
        self._cursor = -1

    def all(self) -> list[SearchResult]:
        """Return a copy of all results in order."""
        return list(self._results)

    def current_index(self) -> int:
        return self._cursor

    def current(self) -> SearchResult | None:
        if self._cursor < 0:
            return None
        return self._results[self._cursor]

    def select(self, index: int) -> SearchResult | None:
        """Select a result by its global index.

        Out-of-range indices are ignored and leave the cursor unchanged.

        Args:
            index: Index in ``[0, len(store))``.

        Returns:
            The selected result, or None if the index was out of range.
        """
        if index < 0 or index >= len(self._results):
            return None

        self._cursor = index
        result = self._results[index]
        if self.on_select is not None:
            self.on_select(result.chapter_index, result.sentence_index)
        return result

    def next(self) -> SearchResult | None:
        """Select the next result, wrapping to the first."""
        if not self._results:
            return None
        if self._cursor < len(self._results) - 1:
            return self.select(self._cursor + 1)
        return self.select(0)

    def prev(self) -> SearchResult | None:
        """Select the previous result, wrapping to the last."""
        if not self._results:
            return None
        if self._cursor > 0:
            return self.select(self._cursor - 1)
        return self.select(len(self._results) - 1)
