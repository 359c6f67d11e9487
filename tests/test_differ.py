"""Tests for the line differ and stay/enter/exit merge."""

from codeshift.diff.differ import diff, merge_lines, move_counts
from codeshift.diff.normalizer import code_text, normalize
from codeshift.models import FullTween, Move, Tween
from codeshift.ranges.line_numbers import map_line_numbers


def _merge(lines):
    code = lines.map(lambda ls, _side: normalize(ls))
    numbers = code.map(lambda c, _side: map_line_numbers(None, len(c)))
    return merge_lines(code, lines, numbers)


class TestDiff:
    def test_identical_is_all_stay(self):
        text = ["a", "b", "c"]
        assert diff(text, text) == [Tween(0, 0), Tween(1, 1), Tween(2, 2)]

    def test_middle_replacement(self):
        result = diff(["a", "b", "c"], ["a", "x", "c"])
        assert result == [
            Tween(prev=0, next=0),
            Tween(prev=1),
            Tween(next=1),
            Tween(prev=2, next=2),
        ]

    def test_empty_prev_all_enter(self):
        assert diff([], ["a", "b"]) == [Tween(next=0), Tween(next=1)]

    def test_empty_next_all_exit(self):
        assert diff(["a", "b"], []) == [Tween(prev=0), Tween(prev=1)]

    def test_both_empty(self):
        assert diff([], []) == []

    def test_removals_before_additions(self):
        result = diff(["a", "b", "c", "z"], ["x", "y", "z"])
        assert result == [
            Tween(prev=0),
            Tween(prev=1),
            Tween(prev=2),
            Tween(next=0),
            Tween(next=1),
            Tween(prev=3, next=2),
        ]

    def test_moved_line_is_exit_and_enter(self):
        result = diff(["a", "b"], ["b", "a"])
        stays = [p for p in result if p.prev is not None and p.next is not None]
        assert len(result) == 3
        assert len(stays) == 1

    def test_indices_monotonic(self):
        prev = ["a", "b", "c", "d", "e", "b"]
        next = ["b", "c", "x", "e", "f", "b", "a"]
        result = diff(prev, next)
        prev_side = [p.prev for p in result if p.prev is not None]
        next_side = [p.next for p in result if p.next is not None]
        assert prev_side == list(range(len(prev)))
        assert next_side == list(range(len(next)))

    def test_duplicate_lines(self):
        result = diff(["}", "}", "}"], ["}", "}"])
        stays = [p for p in result if p.prev is not None and p.next is not None]
        assert len(stays) == 2
        assert len(result) == 3


class TestMergeLines:
    def test_scenario(self, abc_to_axc):
        merged = _merge(abc_to_axc)
        moves = [line.move for line in merged.lines]
        assert moves == [Move.STAY, Move.EXIT, Move.ENTER, Move.STAY]
        assert merged.lines[1].exit_index == 0
        assert merged.lines[1].enter_index is None
        assert merged.lines[2].enter_index == 0
        assert merged.lines[2].exit_index is None
        assert merged.enter_count == 1
        assert merged.exit_count == 1

    def test_line_number_presence_matches_move(self, function_edit):
        merged = _merge(function_edit)
        for line in merged.lines:
            if line.move is Move.EXIT:
                assert line.line_number.prev is not None and line.line_number.next is None
            elif line.move is Move.ENTER:
                assert line.line_number.prev is None and line.line_number.next is not None
            else:
                assert line.line_number.prev is not None and line.line_number.next is not None

    def test_rank_density(self, function_edit):
        merged = _merge(function_edit)
        exits = [line.exit_index for line in merged.lines if line.move is Move.EXIT]
        enters = [line.enter_index for line in merged.lines if line.move is Move.ENTER]
        assert exits == list(range(merged.exit_count))
        assert enters == list(range(merged.enter_count))
        assert merged.exit_count == 2
        assert merged.enter_count == 2

    def test_conservation(self, function_edit):
        merged = _merge(function_edit)
        stay, exits, enters = move_counts(merged)
        assert stay + exits == len(function_edit.prev)
        assert stay + enters == len(function_edit.next)

    def test_stay_tokens_come_from_prev(self, hl):
        prev = hl("a b")
        next = hl("a b")
        merged = _merge(FullTween(prev=prev, next=next))
        assert merged.lines[0].tokens == tuple(prev[0].tokens)

    def test_custom_line_numbers(self, abc_to_axc):
        code = abc_to_axc.map(lambda ls, _side: normalize(ls))
        numbers = FullTween(
            prev=map_line_numbers("10:12", 3),
            next=map_line_numbers(None, 3),
        )
        merged = merge_lines(code, abc_to_axc, numbers)
        assert merged.lines[0].line_number == Tween(prev=10, next=1)
        assert merged.lines[1].line_number == Tween(prev=11)
        assert merged.lines[2].line_number == Tween(next=2)


class TestNormalizer:
    def test_normalize_joins_tokens(self, hl):
        assert normalize(hl("x = 1", "")) == ("x = 1", "")

    def test_code_text(self):
        assert code_text(("a", "b")) == "a\nb\n"
        assert code_text(()) == ""
