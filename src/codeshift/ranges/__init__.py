"""Range grammars — focus strings and visible line numbers."""

from codeshift.ranges.focus import LineFocus, Selector, focus_by_line, parse_focus, parse_range
from codeshift.ranges.line_numbers import LineNumberMap, map_line_numbers, max_line_number

__all__ = [
    "LineFocus",
    "LineNumberMap",
    "Selector",
    "focus_by_line",
    "map_line_numbers",
    "max_line_number",
    "parse_focus",
    "parse_range",
]
