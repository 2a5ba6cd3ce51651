"""Book and chapter data model."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ContentType(str, Enum):
    """Markup of a chapter's raw content."""

    TEXT = "text"
    MARKDOWN = "markdown"
    HTML = "html"


@dataclass
class Chapter:
    """A book subdivision whose sentences are materialized on demand.

    Attributes:
        title: Display title.
        content: Raw chapter content, or None if it lives in ``path``.
        path: File to read the content from when ``content`` is None.
        content_type: Markup of the raw content.
        sentences: Plain-text sentences once loaded.
        loaded: Whether ``sentences`` is populated.
    """

    title: str
    content: str | None = None
    path: Path | None = None
    content_type: ContentType = ContentType.TEXT
    sentences: list[str] | None = None
    loaded: bool = False


@dataclass
class Book:
    """A titled sequence of chapters."""

    title: str
    chapters: list[Chapter] = field(default_factory=list)
    source_path: Path | None = None

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    def chapter_titles(self) -> list[str]:
        return [chapter.title for chapter in self.chapters]
