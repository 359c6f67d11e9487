"""Focus-string grammar.

A focus string is a comma-separated list of selectors::

    3           whole line 3
    3:7         whole lines 3 through 7
    4[5:12]     columns 5..12 of line 4
    4[2,9:11]   column 2 and columns 9..11 of line 4

Bounds are 1-based and inclusive. Commas inside brackets separate column
ranges. ``None`` or a blank string means *no focus*, never "focus everything".

Columns count Unicode code points, i.e. Python ``str`` indices: column ``c``
is ``line_text[c - 1]``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from codeshift.errors import MalformedRangeError
from codeshift.models import Range

_LINES_RE = re.compile(r"^(\d+)(?::(\d+))?$")
_COLUMNS_RE = re.compile(r"^(\d+)\[([^\[\]]*)\]$")


@dataclass(frozen=True)
class Selector:
    """One comma-separated entry of a focus string."""

    lines: Range
    columns: Tuple[Range, ...] = ()  # empty = whole lines

    @property
    def is_inline(self) -> bool:
        return bool(self.columns)


@dataclass(frozen=True)
class LineFocus:
    """Focused part of a single line."""

    columns: Tuple[Range, ...] = ()  # empty = whole line

    @property
    def whole_line(self) -> bool:
        return not self.columns

    def contains(self, column: int) -> bool:
        if self.whole_line:
            return True
        return any(c.contains(column) for c in self.columns)


def parse_range(text: str, source: str) -> Range:
    """Parse ``N`` or ``N:M`` into a Range. *source* is the full string for errors."""
    m = _LINES_RE.match(text.strip())
    if m is None:
        raise MalformedRangeError(source, f"{text.strip()!r} is not N or N:M")
    start = int(m.group(1))
    end = int(m.group(2)) if m.group(2) is not None else start
    if start < 1:
        raise MalformedRangeError(source, "bounds start at 1")
    if end < start:
        raise MalformedRangeError(source, f"end {end} is before start {start}")
    return Range(start, end)


def _split_selectors(text: str) -> List[str]:
    """Split on commas that are not inside brackets."""
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for ch in text:
        if ch == "[":
            depth += 1
            if depth > 1:
                raise MalformedRangeError(text, "nested brackets")
        elif ch == "]":
            depth -= 1
            if depth < 0:
                raise MalformedRangeError(text, "unbalanced ']'")
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    if depth != 0:
        raise MalformedRangeError(text, "unbalanced '['")
    parts.append("".join(current))
    return parts


def parse_focus(text: Optional[str]) -> Tuple[Selector, ...]:
    """Parse a focus string into selectors, in declaration order."""
    if text is None or not text.strip():
        return ()

    selectors: List[Selector] = []
    for raw in _split_selectors(text):
        part = raw.strip()
        if not part:
            raise MalformedRangeError(text, "empty selector")

        cm = _COLUMNS_RE.match(part)
        if cm:
            line = parse_range(cm.group(1), text)
            column_parts = cm.group(2).split(",")
            if not cm.group(2).strip():
                raise MalformedRangeError(text, f"no columns in {part!r}")
            columns = tuple(parse_range(c, text) for c in column_parts)
            selectors.append(Selector(lines=line, columns=columns))
            continue

        if "[" in part or "]" in part:
            raise MalformedRangeError(text, f"{part!r} is not N[c1:c2]")
        selectors.append(Selector(lines=parse_range(part, text)))

    return tuple(selectors)


def focus_by_line(
    selectors: Tuple[Selector, ...],
    line_numbers: Iterable[int],
) -> Dict[int, LineFocus]:
    """Resolve selectors into a focus map over the visible *line_numbers*.

    Only numbers that exist are looked up, so a selector's declared range may
    be arbitrarily wide. A whole-line selector wins over column selectors on
    the same line.
    """
    columns: Dict[int, List[Range]] = {}
    whole: set[int] = set()
    for ln in line_numbers:
        for sel in selectors:
            if not sel.lines.contains(ln):
                continue
            if sel.is_inline:
                columns.setdefault(ln, []).extend(sel.columns)
            else:
                whole.add(ln)

    result: Dict[int, LineFocus] = {ln: LineFocus() for ln in whole}
    for ln, ranges in columns.items():
        if ln not in whole:
            result[ln] = LineFocus(columns=tuple(ranges))
    return result
