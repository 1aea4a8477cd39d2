"""Tests for wordgap.positions module."""
from wordgap.positions import build_position_index, from_gaps, to_gaps
from wordgap.tokenizer import tokenize


class TestBuildPositionIndex:
    def test_one_based_positions(self) -> None:
        index = build_position_index(["a", "b", "a"], ["a"])
        assert index == {"a": [1, 3]}

    def test_absent_query_has_no_key(self) -> None:
        index = build_position_index(["a", "b"], ["a", "z"])
        assert index == {"a": [1]}
        assert "z" not in index

    def test_empty_queries(self) -> None:
        assert build_position_index(["a", "b"], []) == {}

    def test_empty_tokens(self) -> None:
        assert build_position_index([], ["a"]) == {}

    def test_duplicate_queries_collapse(self) -> None:
        assert build_position_index(["a", "a"], ["a", "a"]) == {"a": [1, 2]}

    def test_exact_match_only(self) -> None:
        index = build_position_index(["قال", "وقال", "قالوا"], ["قال"])
        assert index == {"قال": [1]}

    def test_accepts_generator(self) -> None:
        index = build_position_index((t for t in ["x", "y", "x"]), iter(["x"]))
        assert index == {"x": [1, 3]}

    def test_positions_in_range_and_increasing(self) -> None:
        tokens = "a b c a b a c c a".split()
        index = build_position_index(tokens, ["a", "b", "c"])
        for seq in index.values():
            assert all(1 <= p <= len(tokens) for p in seq)
            assert all(x < y for x, y in zip(seq, seq[1:]))

    def test_verse_marker_scenario(self) -> None:
        tokens = tokenize("الر (1) كتاب أنزلناه")
        assert build_position_index(tokens, ["كتاب"]) == {"كتاب": [2]}


class TestToGaps:
    def test_single_position_unchanged(self) -> None:
        assert to_gaps({"كتاب": [2]}) == {"كتاب": [2]}

    def test_gap_is_tokens_between(self) -> None:
        assert to_gaps({"a": [1, 3, 4, 10]}) == {"a": [1, 1, 0, 5]}

    def test_adjacent_occurrences_give_zero(self) -> None:
        assert to_gaps({"a": [5, 6]}) == {"a": [5, 0]}

    def test_empty_index(self) -> None:
        assert to_gaps({}) == {}

    def test_empty_list_passed_through(self) -> None:
        assert to_gaps({"a": []}) == {"a": []}

    def test_does_not_mutate_input(self) -> None:
        positions = {"a": [1, 4]}
        gaps = to_gaps(positions)
        gaps["a"].append(99)
        assert positions == {"a": [1, 4]}

    def test_same_length(self) -> None:
        positions = {"a": [2, 7, 9], "b": [1]}
        gaps = to_gaps(positions)
        assert {k: len(v) for k, v in gaps.items()} == {"a": 3, "b": 1}

    def test_conjunction_scenario(self) -> None:
        tokens = tokenize("قال وقال قال")
        positions = build_position_index(tokens, ["قال"])
        assert positions == {"قال": [1, 2, 3]}
        assert to_gaps(positions) == {"قال": [1, 0, 0]}


class TestFromGaps:
    def test_inverts_to_gaps(self) -> None:
        positions = {"a": [1, 3, 4, 10], "b": [7], "c": [2, 9]}
        assert from_gaps(to_gaps(positions)) == positions

    def test_cumulative_sum(self) -> None:
        assert from_gaps({"a": [2, 0, 3]}) == {"a": [2, 3, 7]}

    def test_empty(self) -> None:
        assert from_gaps({}) == {}
