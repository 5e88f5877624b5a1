import pytest

from helpers import added, removed, unchanged
from linediff import compute_diff
from linediff.core.diff.line_aligner import find_best_match
from linediff.core.models import DiffLineType


ALIGNMENT_CASES = [
    ([], []),
    (["a"], ["a"]),
    (["a", "b", "c"], ["a", "x", "c"]),
    (["x", "y", "z"], ["z", "y", "x"]),
    (["one", "two", "three", "four"], ["zero", "one", "three", "four", "five"]),
    (["hello world", "foo", "bar"], ["hello swift", "bar", "baz"]),
    (["m", "m", "m"], ["m"]),
    (["m"], ["m", "m", "m"]),
    (["", "", "body", ""], ["body", "", ""]),
]


def assert_line_invariants(lines, old_lines, new_lines):
    for line in lines:
        assert line.old_line_number is not None or line.new_line_number is not None
        if line.line_type == DiffLineType.UNCHANGED:
            assert line.old_line_number is not None and line.new_line_number is not None
            assert old_lines[line.old_line_number - 1] == line.content
            assert new_lines[line.new_line_number - 1] == line.content
        elif line.line_type == DiffLineType.ADDED:
            assert line.old_line_number is None
            assert new_lines[line.new_line_number - 1] == line.content
        elif line.line_type == DiffLineType.REMOVED:
            assert line.new_line_number is None
            assert old_lines[line.old_line_number - 1] == line.content

    # Every input line appears exactly once, in order, on its own side
    old_numbers = [l.old_line_number for l in lines if l.old_line_number is not None]
    new_numbers = [l.new_line_number for l in lines if l.new_line_number is not None]
    assert old_numbers == list(range(1, len(old_lines) + 1))
    assert new_numbers == list(range(1, len(new_lines) + 1))


class TestFindBestMatch:
    def test_first_match_wins(self):
        assert find_best_match("m", ["a", "m", "b", "m"], 0) == 1

    def test_index_is_absolute(self):
        assert find_best_match("m", ["m", "a", "m"], 1) == 2

    def test_no_match(self):
        assert find_best_match("q", ["a", "b"], 0) is None

    def test_start_past_end(self):
        assert find_best_match("a", ["a"], 1) is None
        assert find_best_match("a", [], 0) is None


class TestComputeDiff:
    def test_both_empty(self):
        assert compute_diff([], []) == []

    def test_pure_addition(self):
        result = compute_diff([], ["a", "b", "c"])
        assert result == [added("a", 1), added("b", 2), added("c", 3)]

    def test_pure_removal(self):
        result = compute_diff(["a", "b"], [])
        assert result == [removed("a", 1), removed("b", 2)]

    @pytest.mark.parametrize("lines", [
        ["only"],
        ["a", "b", "c"],
        ["", "dup", "dup", ""],
        ["def f():", "    return 1", "", "print(f())"],
    ])
    def test_identity(self, lines):
        result = compute_diff(lines, lines)
        assert len(result) == len(lines)
        for position, line in enumerate(result):
            assert line.line_type == DiffLineType.UNCHANGED
            assert line.old_line_number == line.new_line_number == position + 1

    def test_modification_is_removed_then_added(self):
        result = compute_diff(["hello world"], ["hello swift"])
        assert result == [removed("hello world", 1), added("hello swift", 1)]

    def test_unmatched_new_line_is_added_before_old_line_is_removed(self):
        # "x" has no partner, so it is added and the old cursor stays on "b";
        # "b" is removed when the lookahead for "c" skips over it.
        result = compute_diff(["a", "b", "c"], ["a", "x", "c"])
        assert result == [
            unchanged("a", 1, 1),
            added("x", 2),
            removed("b", 2),
            unchanged("c", 3, 3),
        ]

    def test_total_replacement(self):
        old_lines = ["alpha", "beta", "gamma"]
        new_lines = ["1234", "5678"]
        result = compute_diff(old_lines, new_lines)

        kinds = [line.line_type for line in result]
        assert kinds == [DiffLineType.ADDED] * 2 + [DiffLineType.REMOVED] * 3
        assert [line.content for line in result] == new_lines + old_lines

    def test_lookahead_removes_skipped_old_lines(self):
        result = compute_diff(["a", "b", "c", "d"], ["c", "d"])
        assert result == [
            removed("a", 1),
            removed("b", 2),
            unchanged("c", 3, 1),
            unchanged("d", 4, 2),
        ]

    def test_old_cursor_waits_for_later_match(self):
        result = compute_diff(["x", "a"], ["p", "q", "x", "a"])
        assert result == [
            added("p", 1),
            added("q", 2),
            unchanged("x", 1, 3),
            unchanged("a", 2, 4),
        ]

    def test_lookahead_takes_first_duplicate(self):
        result = compute_diff(["z", "m", "m"], ["m"])
        assert result == [removed("z", 1), unchanged("m", 2, 1), removed("m", 3)]

    def test_threshold_is_strict(self):
        # similarity("ab", "ac") is exactly 0.5, which is not a modification
        result = compute_diff(["ab"], ["ac"])
        assert result == [added("ac", 1), removed("ab", 1)]

    def test_custom_threshold(self):
        result = compute_diff(["ab"], ["ac"], similarity_threshold=0.4)
        assert result == [removed("ab", 1), added("ac", 1)]

    def test_empty_lines_are_content(self):
        result = compute_diff([""], ["", ""])
        assert result == [unchanged("", 1, 1), added("", 2)]

    def test_inputs_are_not_mutated(self):
        old_lines = ["a", "b", "c"]
        new_lines = ["c", "b"]
        compute_diff(old_lines, new_lines)
        assert old_lines == ["a", "b", "c"]
        assert new_lines == ["c", "b"]

    def test_accepts_tuples(self):
        assert compute_diff(("a",), ("a",)) == [unchanged("a", 1, 1)]

    def test_never_emits_modified(self):
        for old_lines, new_lines in ALIGNMENT_CASES:
            kinds = {line.line_type for line in compute_diff(old_lines, new_lines)}
            assert DiffLineType.MODIFIED not in kinds

    @pytest.mark.parametrize("old_lines,new_lines", ALIGNMENT_CASES)
    def test_line_invariants(self, old_lines, new_lines):
        assert_line_invariants(compute_diff(old_lines, new_lines), old_lines, new_lines)
