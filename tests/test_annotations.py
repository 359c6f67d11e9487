"""Tests for annotation parsing and binding."""

import dataclasses

import pytest

from codeshift.annotations import AnnotationDescriptor, bind_groups, parse_annotations
from codeshift.errors import MalformedRangeError
from codeshift.models import FullTween, InlineAnnotation, Range, Token, TokenGroup, Tween
from codeshift.pipeline import parse


def _group(start, end):
    return TokenGroup(
        tokens=(Token("x" * (end - start + 1)),),
        focused=FullTween(prev=False, next=False),
        columns=Range(start, end),
    )


def _inline(start, end, line_number=1):
    return InlineAnnotation(line_number=line_number, column_numbers=Range(start, end))


class TestAnnotationDescriptor:
    def test_is_frozen(self):
        descriptor = AnnotationDescriptor(focus="2:3")
        with pytest.raises(dataclasses.FrozenInstanceError):
            descriptor.focus = "4"  # type: ignore[misc]

    def test_selectors_follow_focus(self):
        descriptor = AnnotationDescriptor(focus="1")
        retargeted = dataclasses.replace(descriptor, focus="3")
        assert descriptor.selectors[0].lines == Range(1, 1)
        assert retargeted.selectors[0].lines == Range(3, 3)

    def test_is_inline(self):
        assert AnnotationDescriptor(focus="2[1:3]").is_inline
        assert not AnnotationDescriptor(focus="2:3").is_inline


class TestParseAnnotations:
    def test_none(self):
        parsed = parse_annotations(None)
        assert parsed.inline == FullTween(prev={}, next={})
        assert parsed.multiline == FullTween(prev=(), next=())

    def test_inline_one_record_per_column_range(self):
        parsed = parse_annotations(
            Tween(prev=[AnnotationDescriptor(focus="2[1:3,5:6]", data="note")])
        )
        records = parsed.inline.prev[2]
        assert [r.column_numbers for r in records] == [Range(1, 3), Range(5, 6)]
        assert all(r.data == "note" for r in records)
        assert parsed.inline.next == {}

    def test_multiline_spans_all_selectors(self):
        parsed = parse_annotations(
            Tween(next=[AnnotationDescriptor(focus="2:4,7", component="box")])
        )
        (record,) = parsed.multiline.next
        assert record.line_numbers == Range(2, 7)
        assert record.component == "box"

    def test_sides_are_independent(self):
        parsed = parse_annotations(
            Tween(
                prev=[AnnotationDescriptor(focus="1")],
                next=[AnnotationDescriptor(focus="1[1:2]")],
            )
        )
        assert len(parsed.multiline.prev) == 1
        assert parsed.multiline.next == ()
        assert parsed.inline.prev == {}
        assert 1 in parsed.inline.next

    @pytest.mark.parametrize("focus", ["", "2[", "2[1:2],3", "x"])
    def test_malformed_target(self, focus):
        with pytest.raises(MalformedRangeError):
            parse_annotations(Tween(prev=[AnnotationDescriptor(focus=focus)]))


class TestBindGroups:
    def test_no_annotations_is_one_plain_entry(self):
        groups = [_group(1, 2), _group(3, 5)]
        result, unbound = bind_groups(groups, [])
        assert len(result) == 1
        assert result[0].annotation is None
        assert result[0].groups == tuple(groups)
        assert unbound == []

    def test_annotation_spans_a_run_of_groups(self):
        groups = [_group(1, 2), _group(3, 3), _group(4, 5)]
        annotation = _inline(3, 5)
        result, unbound = bind_groups(groups, [annotation])
        assert [entry.annotation for entry in result] == [None, annotation]
        assert result[0].groups == (groups[0],)
        assert result[1].groups == (groups[1], groups[2])
        assert unbound == []

    def test_unaligned_annotation_is_unbound(self):
        groups = [_group(1, 2), _group(3, 5)]
        annotation = _inline(2, 3)
        result, unbound = bind_groups(groups, [annotation])
        assert unbound == [annotation]
        assert all(entry.annotation is None for entry in result)

    def test_overlapping_annotations_bind_first_only(self):
        groups = [_group(1, 2), _group(3, 3), _group(4, 5)]
        first = _inline(1, 3)
        second = _inline(1, 5)
        result, unbound = bind_groups(groups, [first, second])
        assert result[0].annotation is first
        assert unbound == [second]

    def test_covers_every_group_once(self):
        groups = [_group(1, 1), _group(2, 4), _group(5, 6), _group(7, 9)]
        result, _ = bind_groups(groups, [_inline(2, 4), _inline(7, 9)])
        flattened = [g for entry in result for g in entry.groups]
        assert flattened == groups


class TestInlineBinding:
    def test_binds_on_annotated_side_only(self, hl):
        lines = FullTween(prev=hl("abc def"), next=hl("abc def"))
        shift = parse(lines, annotations=Tween(prev=[AnnotationDescriptor(focus="1[5:7]", data="x")]))
        (line,) = shift.lines
        prev_entries = line.annotated_groups.prev
        assert [entry.annotation is not None for entry in prev_entries] == [False, True]
        assert prev_entries[1].annotation.data == "x"
        assert prev_entries[1].groups[0].element == "def"
        (next_entry,) = line.annotated_groups.next
        assert next_entry.annotation is None
        assert shift.binding_misses == ()

    def test_absent_side_is_none(self, abc_to_axc):
        shift = parse(abc_to_axc)
        exiting = shift.lines[1]
        entering = shift.lines[2]
        assert exiting.annotated_groups.next is None
        assert entering.annotated_groups.prev is None

    def test_missing_line_is_recorded(self, hl):
        lines = FullTween(prev=hl("a", "b", "c"), next=hl("a", "b", "c"))
        shift = parse(lines, annotations=Tween(prev=[AnnotationDescriptor(focus="5[1:1]")]))
        (miss,) = shift.binding_misses
        assert miss.side == "prev"
        assert miss.reason == "missing_line"
        assert miss.line_number == 5
        assert miss.columns == Range(1, 1)

    def test_annotation_past_line_end_is_a_miss(self, hl):
        lines = FullTween(prev=hl("ab"), next=hl("ab"))
        shift = parse(lines, annotations=Tween(next=[AnnotationDescriptor(focus="1[1:9]")]))
        (miss,) = shift.binding_misses
        assert miss.side == "next"
        assert miss.reason == "no_group_match"


class TestMultilineGrouping:
    def test_groups_around_annotation(self, hl):
        lines = FullTween(prev=hl("a", "b", "c", "d"), next=hl("a", "b", "c", "d"))
        shift = parse(lines, annotations=Tween(prev=[AnnotationDescriptor(focus="2:3", data="block")]))
        prev_groups = shift.groups.prev
        assert [len(g.lines) for g in prev_groups] == [1, 2, 1]
        assert [g.annotation is not None for g in prev_groups] == [False, True, False]
        assert prev_groups[1].annotation.data == "block"
        (next_group,) = shift.groups.next
        assert next_group.annotation is None
        assert len(next_group.lines) == 4

    def test_retargeted_descriptor_binds_new_lines(self, hl):
        lines = FullTween(prev=hl("a", "b", "c"), next=hl("a", "b", "c"))
        descriptor = AnnotationDescriptor(focus="1")
        first = parse(lines, annotations=Tween(prev=[descriptor]))
        second = parse(lines, annotations=Tween(prev=[dataclasses.replace(descriptor, focus="3")]))
        assert first.groups.prev[0].annotation.line_numbers == Range(1, 1)
        assert second.groups.prev[0].annotation is None
        assert second.groups.prev[-1].annotation.line_numbers == Range(3, 3)

    def test_visible_line_numbers(self, hl):
        lines = FullTween(prev=hl("a", "b", "c"), next=hl("a", "b", "c"))
        shift = parse(
            lines,
            line_nums=Tween(prev="5:7", next="5:7"),
            annotations=Tween(next=[AnnotationDescriptor(focus="6:6")]),
        )
        assert [len(g.lines) for g in shift.groups.next] == [1, 1, 1]
        assert shift.groups.next[1].annotation is not None
        assert shift.groups.next[1].lines[0].line_number == Tween(prev=6, next=6)

    def test_absent_line_breaks_group(self, abc_to_axc):
        shift = parse(abc_to_axc, annotations=Tween(next=[AnnotationDescriptor(focus="2:3")]))
        next_groups = shift.groups.next
        assert [len(g.lines) for g in next_groups] == [2, 2]
        assert next_groups[0].annotation is None
        assert next_groups[1].annotation is not None

    def test_every_line_in_both_groupings(self, function_edit):
        shift = parse(function_edit, annotations=Tween(prev=[AnnotationDescriptor(focus="1:2")]))
        for side in ("prev", "next"):
            keys = [line.key for group in shift.groups.get(side) for line in group.lines]
            assert keys == list(range(len(shift.lines)))

    def test_unmatched_range_is_recorded(self, hl):
        lines = FullTween(prev=hl("a"), next=hl("a"))
        shift = parse(lines, annotations=Tween(prev=[AnnotationDescriptor(focus="4:6")]))
        (miss,) = shift.binding_misses
        assert miss.reason == "no_lines"
        assert miss.lines == Range(4, 6)
