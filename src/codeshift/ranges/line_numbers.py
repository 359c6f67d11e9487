"""Visible line-number ranges — ``"5:12"`` ↔ line index lookups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from codeshift.errors import MalformedRangeError, RangeLengthMismatchError
from codeshift.ranges.focus import parse_range

MIN_MAX_LINE_NUMBER = 10


@dataclass(frozen=True)
class LineNumberMap:
    """Dense index → visible number table and its inverse."""

    index_to_number: Tuple[int, ...]
    number_to_index: Dict[int, int]

    def __len__(self) -> int:
        return len(self.index_to_number)

    def index_of(self, line_number: Optional[int]) -> Optional[int]:
        if line_number is None:
            return None
        return self.number_to_index.get(line_number)


def map_line_numbers(range_text: Optional[str], line_count: int) -> LineNumberMap:
    """Parse *range_text* (default ``1:<line_count>``) into a LineNumberMap.

    Raises MalformedRangeError on bad syntax, RangeLengthMismatchError when the
    range does not span exactly *line_count* lines.
    """
    if range_text is None:
        numbers = tuple(range(1, line_count + 1))
    else:
        if not range_text.strip():
            raise MalformedRangeError(range_text, "empty line-number range")
        rng = parse_range(range_text, range_text)
        if rng.length != line_count:
            raise RangeLengthMismatchError(range_text, expected=line_count, actual=rng.length)
        numbers = tuple(range(rng.start, rng.end + 1))

    return LineNumberMap(
        index_to_number=numbers,
        number_to_index={n: i for i, n in enumerate(numbers)},
    )


def max_line_number(line_map: LineNumberMap) -> int:
    """Widest visible number a gutter has to fit (at least two digits)."""
    if not line_map.index_to_number:
        return MIN_MAX_LINE_NUMBER
    return max(MIN_MAX_LINE_NUMBER, line_map.index_to_number[-1])
