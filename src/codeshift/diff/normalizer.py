"""Flatten highlighted lines into plain strings for diffing."""

from __future__ import annotations

from typing import Sequence, Tuple

from codeshift.models import HighlightedLine


def normalize(lines: Sequence[HighlightedLine]) -> Tuple[str, ...]:
    """Return each line's concatenated token contents."""
    return tuple(line.text for line in lines)


def code_text(lines: Sequence[str]) -> str:
    """Join normalized lines into a newline-terminated block of code."""
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
