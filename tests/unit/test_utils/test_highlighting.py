"""Tests for highlighting utilities."""

from rich.text import Span


def test_highlight_text_styles_ranges():
    from clippie.ui.utils.highlighting import HIGHLIGHT_STYLE, highlight_text

    result = highlight_text("hello world", [(0, 1), (6, 5)])

    assert result.plain == "hello world"
    assert result.spans == [Span(0, 1, HIGHLIGHT_STYLE), Span(6, 11, HIGHLIGHT_STYLE)]


def test_highlight_text_without_ranges():
    from clippie.ui.utils.highlighting import highlight_text

    result = highlight_text("plain", [])

    assert result.plain == "plain"
    assert result.spans == []


def test_highlight_text_clips_ranges_past_the_end():
    from clippie.ui.utils.highlighting import highlight_text

    result = highlight_text("abc", [(1, 10), (5, 1)], style="bold")

    assert result.spans == [Span(1, 3, "bold")]
