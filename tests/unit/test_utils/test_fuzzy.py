"""Tests for fuzzy matching and ranking."""


def test_exact_substring_match():
    from clippie.ui.utils.fuzzy import fuzzy_match

    result = fuzzy_match("hello world", "world")

    assert result.matched is True
    assert result.exact is True
    assert result.ranges == [(6, 5)]


def test_exact_match_is_case_insensitive():
    from clippie.ui.utils.fuzzy import fuzzy_match

    result = fuzzy_match("Hello World", "WORLD")

    assert result.exact is True
    assert result.ranges == [(6, 5)]


def test_subsequence_match():
    from clippie.ui.utils.fuzzy import fuzzy_match

    result = fuzzy_match("hello world", "hlo")

    assert result.matched is True
    assert result.exact is False
    assert result.ranges == [(0, 1), (2, 1), (4, 1)]


def test_adjacent_hits_are_merged():
    from clippie.ui.utils.fuzzy import fuzzy_match

    result = fuzzy_match("abcXdef", "abcdef")

    assert result.ranges == [(0, 3), (4, 3)]


def test_subsequence_is_leftmost_greedy():
    from clippie.ui.utils.fuzzy import fuzzy_match

    first = fuzzy_match("a-b-a-b", "abb")
    second = fuzzy_match("a-b-a-b", "abb")

    assert first.ranges == [(0, 1), (2, 1), (6, 1)]
    assert first == second


def test_no_match():
    from clippie.ui.utils.fuzzy import fuzzy_match

    result = fuzzy_match("hello world", "xyz")

    assert result.matched is False
    assert result.ranges == []


def test_out_of_order_characters_do_not_match():
    from clippie.ui.utils.fuzzy import fuzzy_match

    assert fuzzy_match("abc", "cba").matched is False


def test_empty_query_matches_everything():
    from clippie.ui.utils.fuzzy import fuzzy_match

    result = fuzzy_match("anything", "")

    assert result.matched is True
    assert result.ranges == []


def test_empty_text_only_matches_empty_query():
    from clippie.ui.utils.fuzzy import fuzzy_match

    assert fuzzy_match("", "a").matched is False
    assert fuzzy_match("", "").matched is True


def test_ranges_use_character_offsets():
    from clippie.ui.utils.fuzzy import fuzzy_match

    result = fuzzy_match("héllo wörld", "wörld")

    assert result.ranges == [(6, 5)]


def test_filter_and_rank_puts_exact_matches_first():
    from clippie.ui.utils.fuzzy import filter_and_rank

    items = ["c-a-t-1", "cat 2", "dog", "c.a.t.3", "concat 4"]

    ranked = [item for item, _ in filter_and_rank(items, "cat")]

    assert ranked == ["cat 2", "concat 4", "c-a-t-1", "c.a.t.3"]


def test_filter_and_rank_preserves_order_for_empty_query():
    from clippie.ui.utils.fuzzy import filter_and_rank

    items = ["b", "a", "c"]

    assert [item for item, _ in filter_and_rank(items, "")] == ["b", "a", "c"]


def test_filter_and_rank_with_key():
    from clippie.ui.utils.fuzzy import filter_and_rank

    items = [{"text": "alpha"}, {"text": "beta"}]

    ranked = filter_and_rank(items, "bet", key=lambda item: item["text"])

    assert [item["text"] for item, _ in ranked] == ["beta"]
    assert ranked[0][1].ranges == [(0, 3)]
