"""Core pipeline — orchestrates normalize → diff → split → annotate → tween.

Every stage is a pure function of its arguments. Range and focus strings are
all parsed before the diff runs, so a malformed range fails fast.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, List, Optional, Sequence, Tuple

from codeshift.annotations.binder import annotate_inline, annotate_multiline
from codeshift.annotations.models import AnnotationDescriptor
from codeshift.annotations.parser import parse_annotations
from codeshift.diff.differ import merge_lines
from codeshift.diff.normalizer import code_text, normalize
from codeshift.errors import AnnotationBindingMiss
from codeshift.focus.splitter import split_by_focus
from codeshift.models import (
    CodeShift,
    FullTween,
    HighlightedLine,
    LineGroup,
    Tween,
)
from codeshift.ranges.focus import focus_by_line, parse_focus
from codeshift.ranges.line_numbers import map_line_numbers, max_line_number
from codeshift.tween.assigner import lines_with_elements, vertical_interval

logger = logging.getLogger(__name__)

Lines = Sequence[HighlightedLine]
Annotations = Tween[Sequence[AnnotationDescriptor]]


def parse(
    highlighted_lines: FullTween[Lines],
    focus: Optional[Tween[str]] = None,
    line_nums: Optional[Tween[str]] = None,
    annotations: Optional[Annotations] = None,
    lang: str = "",
) -> CodeShift:
    """Compute the animation plan for a prev → next transition.

    Raises MalformedRangeError / RangeLengthMismatchError before any diff
    work when a focus, line-number, or annotation range is invalid.
    """
    focus = focus or Tween()
    line_nums = line_nums or Tween()

    # --- 0. normalize ---
    code = highlighted_lines.map(lambda lines, _side: normalize(lines))

    # --- 1. parse every range string up front ---
    line_numbers = FullTween(
        prev=map_line_numbers(line_nums.prev, len(code.prev)),
        next=map_line_numbers(line_nums.next, len(code.next)),
    )
    focus_map = focus.map(
        lambda text, side: focus_by_line(
            parse_focus(text), line_numbers.get(side).index_to_number
        )
    )
    parsed = parse_annotations(annotations)

    # --- 2. diff ---
    merged = merge_lines(code, highlighted_lines, line_numbers)

    # --- 3. split by focus ---
    focused = split_by_focus(merged, focus_map, parsed.inline, line_numbers)

    # --- 4. annotate ---
    misses: List[AnnotationBindingMiss] = []
    annotated_lines = annotate_inline(focused.lines, parsed.inline, misses)
    line_groups = annotate_multiline(annotated_lines, parsed.multiline, misses)

    # --- 5. tween ---
    interval = vertical_interval(merged.enter_count, merged.exit_count)
    key_of = {id(line): key for key, line in enumerate(annotated_lines)}

    def with_elements(groups: Tuple[LineGroup, ...], _side: str) -> Tuple[LineGroup, ...]:
        return tuple(
            LineGroup(
                lines=lines_with_elements(
                    group.lines,
                    [key_of[id(line)] for line in group.lines],
                    line_numbers,
                    interval,
                    merged.enter_count,
                    merged.exit_count,
                ),
                annotation=group.annotation,
            )
            for group in groups
        )

    logger.debug(
        "plan: %d lines, %d enter, %d exit, vertical interval %s, %d binding misses",
        len(annotated_lines),
        merged.enter_count,
        merged.exit_count,
        interval,
        len(misses),
    )

    return CodeShift(
        groups=line_groups.map(with_elements),
        first_focused_line_number=focused.first_focused_line_number,
        last_focused_line_number=focused.last_focused_line_number,
        vertical_interval=interval,
        line_count=FullTween(prev=len(code.prev), next=len(code.next)),
        max_line_number=line_numbers.map(lambda mp, _side: max_line_number(mp)),
        code=code.map(lambda lines, _side: code_text(lines)),
        lang=lang,
        enter_count=merged.enter_count,
        exit_count=merged.exit_count,
        binding_misses=tuple(misses),
    )


class PlanCache:
    """Caller-owned memo around :func:`parse`.

    Keyed by the identity of the line sequences and annotation lists plus the
    values of the focus, line-number, and lang strings. Keyed inputs are kept
    alive by the cache so their identities cannot be reused.
    """

    def __init__(self, max_entries: int = 32) -> None:
        self.max_entries = max_entries
        self._entries: "OrderedDict[Tuple[Any, ...], Tuple[Tuple[Any, ...], CodeShift]]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def get_or_parse(
        self,
        highlighted_lines: FullTween[Lines],
        focus: Optional[Tween[str]] = None,
        line_nums: Optional[Tween[str]] = None,
        annotations: Optional[Annotations] = None,
        lang: str = "",
    ) -> CodeShift:
        focus = focus or Tween()
        line_nums = line_nums or Tween()
        annotations = annotations or Tween()
        refs = (
            highlighted_lines.prev,
            highlighted_lines.next,
            annotations.prev,
            annotations.next,
        )
        key = (
            *(id(r) for r in refs),
            focus.prev,
            focus.next,
            line_nums.prev,
            line_nums.next,
            lang,
        )

        entry = self._entries.get(key)
        if entry is not None:
            self._entries.move_to_end(key)
            self.hits += 1
            return entry[1]

        self.misses += 1
        shift = parse(highlighted_lines, focus, line_nums, annotations, lang)
        if self.max_entries > 0:
            self._entries[key] = (refs, shift)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return shift
