"""Fuzzy matching for the history filter."""

from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")

Range = Tuple[int, int]


@dataclass(frozen=True)
class FuzzyMatch:
    matched: bool
    ranges: List[Range] = field(default_factory=list)
    exact: bool = False


NO_MATCH = FuzzyMatch(matched=False)


def _fold(text: str) -> List[str]:
    # Per character, so offsets stay in the original text's indexing even
    # for characters whose lowercase form is longer
    return [ch.lower() for ch in text]


def _find_substring(haystack: List[str], needle: List[str]) -> int:
    last_start = len(haystack) - len(needle)
    for start in range(last_start + 1):
        if haystack[start:start + len(needle)] == needle:
            return start
    return -1


def _merge_hits(positions: Sequence[int]) -> List[Range]:
    ranges: List[Range] = []
    for pos in positions:
        if ranges and ranges[-1][0] + ranges[-1][1] == pos:
            start, length = ranges[-1]
            ranges[-1] = (start, length + 1)
        else:
            ranges.append((pos, 1))
    return ranges


def fuzzy_match(text: str, query: str) -> FuzzyMatch:
    """
    Match query against text, case-insensitively.

    A substring hit wins and yields a single exact range. Otherwise the
    query characters are consumed left to right as a subsequence of text,
    greedily taking the first occurrence of each.

    Returns:
        FuzzyMatch with (offset, length) ranges into text
    """
    if not query:
        return FuzzyMatch(matched=True, exact=True)

    folded_text = _fold(text)
    folded_query = _fold(query)

    start = _find_substring(folded_text, folded_query)
    if start >= 0:
        return FuzzyMatch(matched=True, ranges=[(start, len(query))], exact=True)

    positions = []
    cursor = 0
    for ch in folded_query:
        while cursor < len(folded_text) and folded_text[cursor] != ch:
            cursor += 1
        if cursor == len(folded_text):
            return NO_MATCH
        positions.append(cursor)
        cursor += 1

    return FuzzyMatch(matched=True, ranges=_merge_hits(positions), exact=False)


def filter_and_rank(
    items: Sequence[T], query: str, key: Callable[[T], str] = str
) -> List[Tuple[T, FuzzyMatch]]:
    """
    Keep the items matching query, exact matches first.

    Within the exact and the fuzzy tier the input order is preserved.
    """
    exact: List[Tuple[T, FuzzyMatch]] = []
    fuzzy: List[Tuple[T, FuzzyMatch]] = []
    for item in items:
        match = fuzzy_match(key(item), query)
        if not match.matched:
            continue
        (exact if match.exact else fuzzy).append((item, match))
    return exact + fuzzy
