"""Tween assigner — vertical reflow and staggered horizontal enter/exit per line.

``tween_y`` is the line's slot index; ``tween_x`` is a horizontal offset in
line widths (0 at rest, -1 fully slid out to the left, 1 waiting on the right).
"""

from __future__ import annotations

from typing import Sequence, Tuple

from codeshift.models import AnnotatedLine, FullTween, LineWithElement, Move, extend
from codeshift.ranges.line_numbers import LineNumberMap
from codeshift.tween.easing import ease_in_out_cubic, ease_in_quad, ease_out_quad
from codeshift.tween.params import Interval, TweenParams, stagger

# Progress window for vertical repositioning, keyed by (any enters, any exits).
VERTICAL_INTERVALS = {
    (False, False): (0.0, 1.0),
    (False, True): (0.33, 1.0),
    (True, False): (0.0, 0.67),
    (True, True): (0.25, 0.75),
}


def vertical_interval(enter_count: int, exit_count: int) -> Interval:
    """Only the presence of each movement type matters, never the counts."""
    return VERTICAL_INTERVALS[(enter_count > 0, exit_count > 0)]


def assign_tween(
    line: AnnotatedLine,
    line_numbers: FullTween[LineNumberMap],
    interval: Interval,
    enter_count: int,
    exit_count: int,
) -> Tuple[TweenParams, TweenParams]:
    """Return (tween_x, tween_y) for one line."""
    start_y, end_y = interval
    prev_index = line_numbers.prev.index_of(line.line_number.prev)
    next_index = line_numbers.next.index_of(line.line_number.next)

    if line.move is Move.EXIT:
        assert prev_index is not None and line.exit_index is not None
        tween_y = TweenParams.hold(prev_index)
        tween_x = TweenParams.move(
            0, -1, stagger((0.0, start_y), line.exit_index, exit_count), ease_in_quad
        )
    elif line.move is Move.ENTER:
        assert next_index is not None and line.enter_index is not None
        tween_y = TweenParams.hold(next_index)
        tween_x = TweenParams.move(
            1, 0, stagger((end_y, 1.0), line.enter_index, enter_count), ease_out_quad
        )
    else:
        assert prev_index is not None and next_index is not None
        tween_y = TweenParams.move(prev_index, next_index, (start_y, end_y), ease_in_out_cubic)
        tween_x = TweenParams.hold(0)
    return tween_x, tween_y


def lines_with_elements(
    lines: Sequence[AnnotatedLine],
    keys: Sequence[int],
    line_numbers: FullTween[LineNumberMap],
    interval: Interval,
    enter_count: int,
    exit_count: int,
) -> Tuple[LineWithElement, ...]:
    """Promote annotated lines to LineWithElement; *keys* are merged-order positions."""
    result = []
    for line, key in zip(lines, keys):
        tween_x, tween_y = assign_tween(line, line_numbers, interval, enter_count, exit_count)
        result.append(extend(line, LineWithElement, key=key, tween_x=tween_x, tween_y=tween_y))
    return tuple(result)
