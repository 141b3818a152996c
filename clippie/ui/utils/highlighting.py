"""Text highlighting utilities."""

from typing import Iterable, Tuple

from rich.text import Text

HIGHLIGHT_STYLE = "bold black on yellow"


def highlight_text(
    text: str,
    ranges: Iterable[Tuple[int, int]],
    style: str = HIGHLIGHT_STYLE,
    base_style: str = "",
) -> Text:
    """
    Build a rich Text with the matched ranges styled.

    Ranges reaching past the end of text (e.g. after truncation) are
    clipped; ranges starting beyond it are dropped.
    """
    rendered = Text(text, style=base_style)
    for offset, length in ranges:
        if offset >= len(text) or length <= 0:
            continue
        rendered.stylize(style, offset, min(offset + length, len(text)))
    return rendered
