"""Book parsers for plain text, markdown and HTML sources.

Parsing only finds chapter boundaries. Sentence splitting is deferred to
chapter load time so large books open quickly.
"""

import logging
import re
from pathlib import Path

from book_search.book.model import Book, Chapter, ContentType
from book_search.book.text import split_paragraphs, split_sentences, strip_html
from book_search.exceptions import BookError, BookNotFoundError, UnsupportedFormatError

logger = logging.getLogger(__name__)

CHAPTER_HEADING_RE = re.compile(
    r"^((?:chapter|part|section)\s+\w+(?:\s*[:.\-]\s+.*)?|\d+\.\s+.+)$",
    re.IGNORECASE | re.MULTILINE,
)
MARKDOWN_HEADING_RE = re.compile(r"^#{1,2}\s+(.+?)\s*#*\s*$", re.MULTILINE)

SUFFIX_TYPES: dict[str, ContentType] = {
    ".txt": ContentType.TEXT,
    ".text": ContentType.TEXT,
    ".md": ContentType.MARKDOWN,
    ".markdown": ContentType.MARKDOWN,
    ".html": ContentType.HTML,
    ".htm": ContentType.HTML,
    ".xhtml": ContentType.HTML,
}

_MD_LINK_RE = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
_MD_EMPHASIS_RE = re.compile(r"(\*{1,3}|_{1,3}|`+)(\S.*?\S|\S)\1")
_MD_LINE_PREFIX_RE = re.compile(r"^\s*(?:#{1,6}\s+|>\s?|[-*+]\s+|\d+[.)]\s+)", re.MULTILINE)


def _split_on_headings(
    text: str,
    matches: list[re.Match[str]],
    content_type: ContentType,
) -> list[Chapter]:
    chapters: list[Chapter] = []

    preamble = text[: matches[0].start()].strip()
    if preamble:
        chapters.append(Chapter("Preamble", preamble, content_type=content_type))

    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        title = match.group(1).strip()
        # Heading stays in the chapter as its own paragraph
        body = text[match.end() : end].strip()
        content = f"{title}\n\n{body}" if body else title
        chapters.append(Chapter(title, content, content_type=content_type))

    return chapters


def parse_text(text: str, title: str = "Untitled") -> Book:
    """Parse plain text into chapters.

    Lines such as "Chapter 3", "Part II" or "12. The Storm" start a
    chapter when at least two of them are present. Anything before the
    first heading becomes a "Preamble" chapter.

    Args:
        text: The full book text.
        title: Book title.

    Returns:
        Book with unloaded chapters.
    """
    matches = list(CHAPTER_HEADING_RE.finditer(text))
    if len(matches) >= 2:
        chapters = _split_on_headings(text, matches, ContentType.TEXT)
    else:
        chapters = [Chapter("Content", text)]
    return Book(title=title, chapters=chapters)


def parse_markdown(text: str, title: str = "Untitled") -> Book:
    """Parse markdown into chapters at level 1 and 2 headings."""
    matches = list(MARKDOWN_HEADING_RE.finditer(text))
    if matches:
        chapters = _split_on_headings(text, matches, ContentType.MARKDOWN)
    else:
        chapters = [Chapter("Content", text, content_type=ContentType.MARKDOWN)]
    return Book(title=title, chapters=chapters)


def parse_html(html: str, title: str = "Untitled") -> Book:
    """Parse a single HTML document as plain text."""
    return parse_text(strip_html(html), title)


def markdown_to_text(text: str) -> str:
    """Drop the most common inline markdown syntax."""
    text = _MD_LINK_RE.sub(r"\1", text)
    text = _MD_LINE_PREFIX_RE.sub("", text)
    return _MD_EMPHASIS_RE.sub(r"\2", text)


def chapter_sentences(content: str, content_type: ContentType) -> list[str]:
    """Turn raw chapter content into plain-text sentences.

    Args:
        content: Raw chapter content.
        content_type: Markup of ``content``.

    Returns:
        Sentences in reading order.
    """
    if content_type is ContentType.HTML:
        content = strip_html(content).replace("\n", "\n\n")
    elif content_type is ContentType.MARKDOWN:
        content = markdown_to_text(content)

    sentences: list[str] = []
    for paragraph in split_paragraphs(content):
        sentences.extend(split_sentences(paragraph))
    return sentences


def load_book(path: Path | str) -> Book:
    """Open a book from a file or a directory of chapter files.

    A directory yields one chapter per supported file, sorted by name,
    whose content is read only when the chapter is loaded.

    Args:
        path: Book file or directory.

    Returns:
        Parsed book.

    Raises:
        BookNotFoundError: If the path doesn't exist.
        UnsupportedFormatError: If the file suffix is not supported.
        BookError: If the book cannot be read or has no chapters.
    """
    path = Path(path)
    if not path.exists():
        raise BookNotFoundError(f"Book not found: {path}")

    if path.is_dir():
        return _load_directory(path)

    content_type = SUFFIX_TYPES.get(path.suffix.lower())
    if content_type is None:
        raise UnsupportedFormatError(f"Unsupported book format: {path.suffix or path.name}")

    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise BookError(f"Failed to read {path}: {e}") from e

    parsers = {
        ContentType.TEXT: parse_text,
        ContentType.MARKDOWN: parse_markdown,
        ContentType.HTML: parse_html,
    }
    book = parsers[content_type](text, path.stem)
    book.source_path = path
    logger.debug("Loaded %s: %d chapters", path, book.chapter_count)
    return book


def _load_directory(path: Path) -> Book:
    chapters = [
        Chapter(
            title=file.stem,
            path=file,
            content_type=SUFFIX_TYPES[file.suffix.lower()],
        )
        for file in sorted(path.iterdir())
        if file.is_file() and file.suffix.lower() in SUFFIX_TYPES
    ]
    if not chapters:
        raise BookError(f"No chapter files found in {path}")

    logger.debug("Loaded %s: %d chapter files", path, len(chapters))
    return Book(title=path.name, chapters=chapters, source_path=path)
