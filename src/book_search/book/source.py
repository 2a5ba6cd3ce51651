"""Chapter sources feeding search sessions.

A chapter source knows how many chapters a book has, which of them are
already in memory, and how to load the rest.
"""

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from book_search.book.model import Book, Chapter
from book_search.book.parser import chapter_sentences
from book_search.config.schema import LoadingConfig
from book_search.exceptions import ChapterLoadError
from book_search.utils.retry import chapter_load_retry

logger = logging.getLogger(__name__)


@runtime_checkable
class ChapterSource(Protocol):
    """What a search session needs from a document."""

    @property
    def chapter_count(self) -> int: ...

    def chapter_title(self, index: int) -> str: ...

    def resident(self, index: int) -> Sequence[str] | None: ...

    async def load_chapter(self, index: int) -> Sequence[str]: ...


class InMemoryChapterSource:
    """Chapters given directly as lists of plain-text sentences."""

    def __init__(
        self,
        chapters: Sequence[Sequence[str]],
        titles: Sequence[str] | None = None,
        *,
        preloaded: bool = True,
    ) -> None:
        """Initialize the source.

        Args:
            chapters: Sentences of each chapter.
            titles: Chapter titles (defaults to "Chapter N").
            preloaded: Whether chapters count as resident. When False,
                every chapter goes through ``load_chapter``.
        """
        self._chapters = [list(sentences) for sentences in chapters]
        self._titles = list(titles) if titles else [
            f"Chapter {i + 1}" for i in range(len(self._chapters))
        ]
        self._loaded = [preloaded] * len(self._chapters)
        self.load_calls: list[int] = []

    @property
    def chapter_count(self) -> int:
        return len(self._chapters)

    def chapter_title(self, index: int) -> str:
        return self._titles[index]

    def resident(self, index: int) -> Sequence[str] | None:
        return self._chapters[index] if self._loaded[index] else None

    async def load_chapter(self, index: int) -> Sequence[str]:
        self.load_calls.append(index)
        if not 0 <= index < len(self._chapters):
            raise ChapterLoadError(f"No chapter {index}", chapter_index=index)
        self._loaded[index] = True
        return self._chapters[index]


class BookChapterSource:
    """Chapter source over a parsed Book.

    Loading a chapter reads its file if needed, converts it to plain
    text, splits it into sentences and caches them on the chapter.
    Transient read errors are retried per the loading config.
    """

    def __init__(self, book: Book, loading: LoadingConfig | None = None) -> None:
        """Initialize the source.

        Args:
            book: Parsed book.
            loading: Retry settings for chapter file reads.
        """
        self.book = book
        self._read_file = chapter_load_retry(loading)(self._read_file_once)

    @property
    def chapter_count(self) -> int:
        return self.book.chapter_count

    def chapter_title(self, index: int) -> str:
        return self.book.chapters[index].title

    def resident(self, index: int) -> Sequence[str] | None:
        chapter = self.book.chapters[index]
        if chapter.loaded and chapter.sentences is not None:
            return chapter.sentences
        return None

    async def load_chapter(self, index: int) -> Sequence[str]:
        """Materialize a chapter's sentences.

        Args:
            index: Chapter index.

        Returns:
            The chapter's sentences.

        Raises:
            ChapterLoadError: If the chapter doesn't exist or can't be read.
        """
        if not 0 <= index < self.book.chapter_count:
            raise ChapterLoadError(f"No chapter {index}", chapter_index=index)

        chapter = self.book.chapters[index]
        if chapter.loaded and chapter.sentences is not None:
            return chapter.sentences

        content = await self._chapter_content(index, chapter)
        chapter.sentences = chapter_sentences(content, chapter.content_type)
        chapter.loaded = True
        logger.debug(
            "Chapter %d loaded: %d sentences", index, len(chapter.sentences)
        )
        return chapter.sentences

    async def _chapter_content(self, index: int, chapter: Chapter) -> str:
        if chapter.content is not None:
            return chapter.content
        if chapter.path is None:
            raise ChapterLoadError(f"Chapter {index} has no content", chapter_index=index)

        try:
            return await self._read_file(chapter.path)
        except OSError as e:
            raise ChapterLoadError(
                f"Failed to read chapter {index} from {chapter.path}: {e}",
                chapter_index=index,
            ) from e

    async def _read_file_once(self, path: Path) -> str:
        return await asyncio.to_thread(path.read_text, encoding="utf-8", errors="replace")
