"""Error taxonomy — range grammar failures and binding diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from codeshift.models import Range, Side


class CodeShiftError(Exception):
    """Base class for every error raised by codeshift."""


class MalformedRangeError(CodeShiftError):
    """Raised when a line-number or focus range string fails the grammar."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Malformed range {text!r}: {reason}")


class RangeLengthMismatchError(CodeShiftError):
    """Raised when a line-number range does not cover exactly the state's lines."""

    def __init__(self, text: str, expected: int, actual: int) -> None:
        self.text = text
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Line-number range {text!r} spans {actual} lines "
            f"but the code has {expected}"
        )


@dataclass(frozen=True)
class AnnotationBindingMiss:
    """Audit record of an annotation that did not bind to anything.

    Not an error: the diff can legitimately remove or reshape an annotated line.
    """

    side: Side
    reason: str  # 'missing_line', 'no_group_match', 'no_lines'
    line_number: Optional[int] = None
    columns: Optional[Range] = None  # set for inline annotations
    lines: Optional[Range] = None  # set for multiline annotations
