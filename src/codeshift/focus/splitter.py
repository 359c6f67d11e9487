"""Focus splitter — slice each line's tokens into focus / annotation groups.

Split offsets are character offsets into the line's concatenated token text
(see :mod:`codeshift.ranges.focus` for the column unit). A token that
straddles an offset is split in two, keeping its style.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Set, Tuple

from codeshift.models import (
    SIDES,
    FocusedCode,
    FocusedLine,
    FullTween,
    InlineAnnotation,
    MergedCode,
    MergedLine,
    Range,
    Side,
    Token,
    TokenGroup,
    Tween,
)
from codeshift.ranges.focus import LineFocus
from codeshift.ranges.line_numbers import LineNumberMap

FocusMap = Dict[int, LineFocus]
InlineMap = Dict[int, Tuple[InlineAnnotation, ...]]


def _line_focus(line: MergedLine, focus: FullTween[FocusMap], side: Side) -> Optional[LineFocus]:
    line_number = line.line_number.get(side)
    if line_number is None:
        return None
    return focus.get(side).get(line_number)


def split_offsets(
    line: MergedLine,
    focus: FullTween[FocusMap],
    annotations: FullTween[InlineMap],
    length: int,
) -> List[int]:
    """Ordered interior offsets where a group boundary is needed."""
    offsets: Set[int] = set()
    for side in SIDES:
        line_number = line.line_number.get(side)
        if line_number is None:
            continue
        line_focus = focus.get(side).get(line_number)
        if line_focus is not None:
            for columns in line_focus.columns:
                offsets.update((columns.start - 1, columns.end))
        for annotation in annotations.get(side).get(line_number, ()):
            offsets.update(
                (annotation.column_numbers.start - 1, annotation.column_numbers.end)
            )
    return sorted(o for o in offsets if 0 < o < length)


def slice_tokens(tokens: Sequence[Token], offsets: Sequence[int]) -> List[Tuple[int, List[Token]]]:
    """Cut *tokens* at *offsets*; returns (start offset, tokens) per segment."""
    segments: List[Tuple[int, List[Token]]] = [(0, [])]
    pos = 0
    cut = 0
    for token in tokens:
        if not token.content:
            segments[-1][1].append(token)
            continue
        while token.content:
            if cut >= len(offsets) or pos + len(token.content) <= offsets[cut]:
                segments[-1][1].append(token)
                pos += len(token.content)
                break
            head, token = token.split(offsets[cut] - pos)
            if head.content:
                segments[-1][1].append(head)
            pos = offsets[cut]
            segments.append((pos, []))
            cut += 1
    return segments


def split_line(
    line: MergedLine,
    focus: FullTween[FocusMap],
    annotations: FullTween[InlineMap],
) -> FocusedLine:
    length = sum(len(t.content) for t in line.tokens)
    line_focus = FullTween(
        prev=_line_focus(line, focus, "prev"),
        next=_line_focus(line, focus, "next"),
    )
    offsets = split_offsets(line, focus, annotations, length)

    groups: List[TokenGroup] = []
    segments = slice_tokens(line.tokens, offsets)
    for i, (start, tokens) in enumerate(segments):
        end = segments[i + 1][0] if i + 1 < len(segments) else length
        first_column = start + 1

        def is_focused(lf: Optional[LineFocus], _side: Side) -> bool:
            if lf is None:
                return False
            return length == 0 or lf.contains(first_column)

        groups.append(
            TokenGroup(
                tokens=tuple(tokens),
                focused=line_focus.map(is_focused),
                columns=Range(first_column, end),
                element="".join(t.content for t in tokens),
            )
        )

    return FocusedLine(
        groups=tuple(groups),
        line_number=line.line_number,
        move=line.move,
        enter_index=line.enter_index,
        exit_index=line.exit_index,
        focused=FullTween(
            prev=any(g.focused.prev for g in groups),
            next=any(g.focused.next for g in groups),
        ),
    )


def split_by_focus(
    merged: MergedCode,
    focus: FullTween[FocusMap],
    annotations: FullTween[InlineMap],
    line_numbers: FullTween[LineNumberMap],
) -> FocusedCode:
    """Split every merged line and locate the focused line-number extremes."""
    lines = tuple(split_line(line, focus, annotations) for line in merged.lines)

    def focused_numbers(side: Side) -> List[int]:
        known = line_numbers.get(side).number_to_index
        numbers = []
        for line in lines:
            ln = line.line_number.get(side)
            if ln is not None and ln in known and line.focused.get(side):
                numbers.append(ln)
        return numbers

    prev_numbers = focused_numbers("prev")
    next_numbers = focused_numbers("next")

    return FocusedCode(
        lines=lines,
        enter_count=merged.enter_count,
        exit_count=merged.exit_count,
        first_focused_line_number=Tween(
            prev=min(prev_numbers, default=None),
            next=min(next_numbers, default=None),
        ),
        last_focused_line_number=Tween(
            prev=max(prev_numbers, default=None),
            next=max(next_numbers, default=None),
        ),
    )
