"""Line differ — Myers shortest edit script and stay/enter/exit merge.

The edit path follows Eugene W. Myers' *An O(ND) Difference Algorithm and Its
Variations* (1986): a greedy forward search over diagonals, recording a
snapshot of the frontier per edit distance, then a backtrack from the end
corner. Time O((N + M) · D), memory O(D²).

Lines are compared by exact text. Moved lines are never matched: they show up
as one exit and one enter.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from codeshift.models import (
    FullTween,
    HighlightedLine,
    MergedCode,
    MergedLine,
    Move,
    Tween,
)
from codeshift.ranges.line_numbers import LineNumberMap

logger = logging.getLogger(__name__)

_EQUAL = "equal"
_DELETE = "delete"
_INSERT = "insert"


def _edit_script(a: Sequence[str], b: Sequence[str]) -> List[str]:
    """Return the shortest edit script from *a* to *b* as a list of op tags."""
    n, m = len(a), len(b)
    if n == 0:
        return [_INSERT] * m
    if m == 0:
        return [_DELETE] * n

    # Diagonal k → furthest x reached on it.
    v: Dict[int, int] = {1: 0}
    trace: List[Dict[int, int]] = []

    for d in range(n + m + 1):
        trace.append(dict(v))
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[k - 1] < v[k + 1]):
                x = v[k + 1]  # move down: insertion
            else:
                x = v[k - 1] + 1  # move right: deletion
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            v[k] = x
            if x >= n and y >= m:
                return _backtrack(trace, n, m)

    raise RuntimeError("Myers search exhausted without reaching the end corner")


def _backtrack(trace: List[Dict[int, int]], n: int, m: int) -> List[str]:
    ops: List[str] = []
    x, y = n, m
    for d in range(len(trace) - 1, -1, -1):
        v = trace[d]
        k = x - y
        if k == -d or (k != d and v[k - 1] < v[k + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = v[prev_k]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            ops.append(_EQUAL)
            x -= 1
            y -= 1

        if d > 0:
            ops.append(_INSERT if x == prev_x else _DELETE)
        x, y = prev_x, prev_y

    ops.reverse()
    return ops


def diff(prev: Sequence[str], next: Sequence[str]) -> List[Tween[int]]:
    """Align two line sequences as pairs of line indexes.

    For example if lines 1 and 2 were removed and two lines were added at
    the end::

        0 0
        1 -
        2 -
        3 1
        - 2
        - 3

    Within a changed run, removals come before additions.
    """
    result: List[Tween[int]] = []
    deleted: List[int] = []
    inserted: List[int] = []

    def flush() -> None:
        result.extend(Tween(prev=i) for i in deleted)
        result.extend(Tween(next=j) for j in inserted)
        deleted.clear()
        inserted.clear()

    prev_index = 0
    next_index = 0
    for op in _edit_script(prev, next):
        if op == _EQUAL:
            flush()
            result.append(Tween(prev=prev_index, next=next_index))
            prev_index += 1
            next_index += 1
        elif op == _DELETE:
            deleted.append(prev_index)
            prev_index += 1
        else:
            inserted.append(next_index)
            next_index += 1
    flush()
    return result


def merge_lines(
    code: FullTween[Sequence[str]],
    lines: FullTween[Sequence[HighlightedLine]],
    line_numbers: FullTween[LineNumberMap],
) -> MergedCode:
    """Classify every line as stay / enter / exit and rank the movers."""
    enter_index = 0
    exit_index = 0
    merged: List[MergedLine] = []

    for pair in diff(code.prev, code.next):
        if pair.next is None:
            assert pair.prev is not None
            merged.append(
                MergedLine(
                    tokens=tuple(lines.prev[pair.prev].tokens),
                    line_number=Tween(prev=line_numbers.prev.index_to_number[pair.prev]),
                    move=Move.EXIT,
                    exit_index=exit_index,
                )
            )
            exit_index += 1
        elif pair.prev is None:
            merged.append(
                MergedLine(
                    tokens=tuple(lines.next[pair.next].tokens),
                    line_number=Tween(next=line_numbers.next.index_to_number[pair.next]),
                    move=Move.ENTER,
                    enter_index=enter_index,
                )
            )
            enter_index += 1
        else:
            merged.append(
                MergedLine(
                    tokens=tuple(lines.prev[pair.prev].tokens),
                    line_number=Tween(
                        prev=line_numbers.prev.index_to_number[pair.prev],
                        next=line_numbers.next.index_to_number[pair.next],
                    ),
                    move=Move.STAY,
                )
            )

    logger.debug(
        "merged %d lines: %d stay, %d exit, %d enter",
        len(merged),
        len(merged) - enter_index - exit_index,
        exit_index,
        enter_index,
    )
    return MergedCode(lines=tuple(merged), enter_count=enter_index, exit_count=exit_index)


def move_counts(merged: MergedCode) -> Tuple[int, int, int]:
    """Return (stay, exit, enter) counts."""
    stay = sum(1 for line in merged.lines if line.move is Move.STAY)
    return stay, merged.exit_count, merged.enter_count
