"""Plain-text helpers: HTML stripping and sentence splitting."""

import re

from bs4 import BeautifulSoup

# Elements whose content never reaches the reader
SKIP_ELEMENTS = (
    "script", "style", "head", "title", "meta", "link", "noscript", "template",
)

# Elements that end a line of text
BLOCK_ELEMENTS = (
    "p", "div", "li", "ul", "ol", "tr", "td", "th", "table",
    "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre",
    "section", "article", "header", "footer", "hr",
)

# Abbreviations whose trailing period does not end a sentence
PROTECTED_ABBREVIATIONS = (
    "Mr", "Mrs", "Ms", "Dr", "Prof", "Sr", "Jr",
    "vs", "etc", "approx", "dept", "est", "govt",
    "Inc", "Ltd", "Corp", "Co",
    "St", "Ave", "Blvd", "Rd", "Mt", "Ft",
    "Gen", "Gov", "Sgt", "Cpl", "Pvt", "Capt", "Lt", "Col", "Maj",
    "Rev", "Hon", "Pres", "Dept", "Assn", "Bros", "No", "Vol",
    "Jan", "Feb", "Mar", "Apr", "Jun", "Jul", "Aug", "Sep", "Sept",
    "Oct", "Nov", "Dec",
)

# Private-use character standing in for protected periods
PERIOD_PLACEHOLDER = "\ue000"

_ABBREVIATION_RE = re.compile(
    r"\b(" + "|".join(PROTECTED_ABBREVIATIONS) + r")\."
)
_LATIN_RE = re.compile(r"\b([ei])\.([ge])\.", re.IGNORECASE)
_MISSING_SPACE_RE = re.compile(r"([.!?:;])([A-Z])")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_END_RE = re.compile(r"(?<=[.!?])\s+|(?<=[.!?][\"'”’)\]])\s+")


def strip_html(html: str) -> str:
    """Convert an HTML fragment to plain text.

    Entities are decoded, invisible elements are dropped and block
    elements become line breaks. Runs of spaces inside a line collapse to
    one space.

    Args:
        html: HTML markup (a full document or a fragment).

    Returns:
        Plain text.
    """
    if not html:
        return ""
    if "<" not in html and "&" not in html:
        return html

    soup = BeautifulSoup(html, "html.parser")

    for hidden in soup.find_all(SKIP_ELEMENTS):
        # Nested matches go with their decomposed ancestor
        if not hidden.decomposed:
            hidden.decompose()

    for br in soup.find_all("br"):
        br.replace_with("\n")

    for block in soup.find_all(BLOCK_ELEMENTS):
        block.insert_before("\n")
        block.insert_after("\n")

    lines = soup.get_text().split("\n")
    cleaned = (re.sub(r"[ \t\r\f\v]+", " ", line).strip() for line in lines)
    return "\n".join(line for line in cleaned if line)


def _protect_abbreviations(text: str) -> str:
    text = _ABBREVIATION_RE.sub(lambda m: m.group(1) + PERIOD_PLACEHOLDER, text)
    return _LATIN_RE.sub(
        lambda m: f"{m.group(1)}{PERIOD_PLACEHOLDER}{m.group(2)}{PERIOD_PLACEHOLDER}",
        text,
    )


def split_sentences(text: str) -> list[str]:
    """Split text into sentences.

    Missing spaces after punctuation ("word.Another") are repaired,
    whitespace is normalized, and periods of common abbreviations are
    not treated as sentence ends.

    Args:
        text: Plain text.

    Returns:
        Non-empty sentences in order.
    """
    if not text:
        return []

    text = _MISSING_SPACE_RE.sub(r"\1 \2", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    if not text:
        return []

    protected = _protect_abbreviations(text)
    sentences = (
        part.replace(PERIOD_PLACEHOLDER, ".").strip()
        for part in _SENTENCE_END_RE.split(protected)
    )
    return [s for s in sentences if s]


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines, dropping empty paragraphs."""
    return [p.strip() for p in re.split(r"\n\s*\n", text) if p.strip()]
