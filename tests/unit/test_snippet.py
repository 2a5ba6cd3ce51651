"""Tests for snippet extraction."""

from book_search.search.snippet import Snippet, build_snippet


def _window_bounds(text: str, snippet: Snippet, match_start: int) -> tuple[int, int]:
    start = match_start - len(snippet.before)
    end = match_start + len(snippet.matched) + len(snippet.after)
    assert text[start:end] == snippet.text
    return start, end


class TestBuildSnippet:
    """Tests for build_snippet."""

    def test_short_text_fits_entirely(self) -> None:
        """Test that text shorter than the window is returned whole."""
        snippet = build_snippet("A fox ran", 2, 3)

        assert snippet.before == "A "
        assert snippet.matched == "fox"
        assert snippet.after == " ran"
        assert snippet.truncated_start is False
        assert snippet.truncated_end is False

    def test_long_text_is_windowed_on_word_boundaries(self) -> None:
        """Test that window edges never split a word."""
        text = " ".join(f"word{i}" for i in range(50))
        match_start = text.index("word25")

        snippet = build_snippet(text, match_start, 6, window=40)
        start, end = _window_bounds(text, snippet, match_start)

        assert snippet.matched == "word25"
        assert snippet.truncated_start is True
        assert snippet.truncated_end is True
        assert text[start - 1].isspace()
        assert text[end].isspace()

    def test_window_roughly_centered(self) -> None:
        """Test that context is taken from both sides of the match."""
        text = " ".join(f"w{i}" for i in range(100))
        match_start = text.index("w50")

        snippet = build_snippet(text, match_start, 3, window=30)

        assert len(snippet.before) > 0
        assert len(snippet.after) > 0

    def test_cut_inside_word_widens_outward(self) -> None:
        """Test that an edge inside a word moves out to whitespace."""
        text = "xx concatenate yy"

        snippet = build_snippet(text, 6, 3, window=6)

        assert snippet.before == "con"
        assert snippet.matched == "cat"
        assert snippet.after == "enate"
        assert snippet.truncated_start is True
        assert snippet.truncated_end is True

    def test_match_longer_than_window(self) -> None:
        """Test that a match wider than the window is shown alone."""
        text = "abc superlongmatch def"

        snippet = build_snippet(text, 4, 14, window=4)

        assert snippet.before == ""
        assert snippet.matched == "superlongmatch"
        assert snippet.after == ""
        assert snippet.truncated_start is True
        assert snippet.truncated_end is True

    def test_match_at_text_start(self) -> None:
        """Test a match at offset zero."""
        text = "fox " + "filler " * 30

        snippet = build_snippet(text, 0, 3, window=20)

        assert snippet.before == ""
        assert snippet.truncated_start is False
        assert snippet.truncated_end is True

    def test_match_at_text_end(self) -> None:
        """Test a match that ends the text."""
        text = "filler " * 30 + "fox"

        snippet = build_snippet(text, len(text) - 3, 3, window=20)

        assert snippet.after == ""
        assert snippet.truncated_end is False
        assert snippet.truncated_start is True

    def test_out_of_range_offsets_are_clamped(self) -> None:
        """Test that offsets past the text do not raise."""
        snippet = build_snippet("short", 10, 5)

        assert snippet.matched == ""
        assert snippet.before == "short"


class TestSnippetRender:
    """Tests for Snippet.render."""

    def test_render_marks_truncated_edges(self) -> None:
        """Test that truncated edges get an ellipsis."""
        snippet = Snippet("a ", "fox", " b", truncated_start=True, truncated_end=False)

        assert snippet.render() == "...a fox b"
        assert snippet.render(ellipsis="…") == "…a fox b"

    def test_text_joins_parts(self) -> None:
        """Test that text joins before, match and after."""
        snippet = Snippet("a ", "fox", " b", truncated_start=False, truncated_end=False)

        assert snippet.text == "a fox b"
        assert snippet.render() == "a fox b"
