"""Books, chapters and the chapter sources that feed searches."""

from book_search.book.model import Book, Chapter, ContentType
from book_search.book.parser import (
    chapter_sentences,
    load_book,
    parse_html,
    parse_markdown,
    parse_text,
)
from book_search.book.source import BookChapterSource, ChapterSource, InMemoryChapterSource
from book_search.book.text import split_sentences, strip_html

__all__ = [
    # Model
    "Book",
    "Chapter",
    "ContentType",
    # Parsing
    "load_book",
    "parse_text",
    "parse_markdown",
    "parse_html",
    "chapter_sentences",
    # Sources
    "ChapterSource",
    "BookChapterSource",
    "InMemoryChapterSource",
    # Text
    "split_sentences",
    "strip_html",
]
