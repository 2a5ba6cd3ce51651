"""Snippet extraction around a match.

Builds a display window of roughly ``window`` characters centered on a
match. Window edges that would cut a word in half are pushed outward to
the nearest whitespace, so the emitted text only ever starts or ends
mid-token at the match itself.
"""

from dataclasses import dataclass

DEFAULT_WINDOW = 80


@dataclass(frozen=True)
class Snippet:
    """A match in its surrounding context.

    Attributes:
        before: Text between the window start and the match.
        matched: The matched text.
        after: Text between the match and the window end.
        truncated_start: The window does not reach the start of the text.
        truncated_end: The window does not reach the end of the text.
    """

    before: str
    matched: str
    after: str
    truncated_start: bool
    truncated_end: bool

    @property
    def text(self) -> str:
        return f"{self.before}{self.matched}{self.after}"

    def render(self, ellipsis: str = "...") -> str:
        """Join the parts, marking truncated edges with an ellipsis."""
        prefix = ellipsis if self.truncated_start else ""
        suffix = ellipsis if self.truncated_end else ""
        return f"{prefix}{self.text}{suffix}"


def _splits_token(text: str, position: int) -> bool:
    """Whether cutting ``text`` at ``position`` would split a token."""
    if position <= 0 or position >= len(text):
        return False
    return not text[position - 1].isspace() and not text[position].isspace()


def build_snippet(
    text: str,
    match_start: int,
    match_length: int,
    window: int = DEFAULT_WINDOW,
) -> Snippet:
    """Extract a snippet around a match without cutting words.

    Args:
        text: Plain text containing the match.
        match_start: Offset of the match in ``text``.
        match_length: Length of the match.
        window: Target snippet width in characters.

    Returns:
        Snippet split into before/matched/after parts.
    """
    match_start = max(0, min(match_start, len(text)))
    match_end = min(len(text), match_start + max(0, match_length))

    half = max(0, (window - (match_end - match_start)) // 2)
    start = max(0, match_start - half)
    end = min(len(text), match_end + half)

    # Edges sitting exactly on the match are left alone
    if start < match_start and _splits_token(text, start):
        while start > 0 and not text[start - 1].isspace():
            start -= 1
    if end > match_end and _splits_token(text, end):
        while end < len(text) and not text[end].isspace():
            end += 1

    return Snippet(
        before=text[start:match_start],
        matched=text[match_start:match_end],
        after=text[match_end:end],
        truncated_start=start > 0,
        truncated_end=end < len(text),
    )
