"""Annotation descriptor model — focus target stored as string, parsed per state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from codeshift.models import FullTween, InlineAnnotation, MultilineAnnotation
from codeshift.ranges.focus import Selector, parse_focus


@dataclass(frozen=True)
class AnnotationDescriptor:
    """A raw annotation as declared for one code state.

    ``focus`` is kept as a raw string so the descriptor stays serialisable.
    Use :func:`dataclasses.replace` to retarget a descriptor.
    """

    focus: str
    data: Any = None
    component: Any = None  # render callback handle, opaque

    @property
    def selectors(self) -> Tuple[Selector, ...]:
        """Parsed target. Raises MalformedRangeError on bad syntax."""
        return parse_focus(self.focus)

    @property
    def is_inline(self) -> bool:
        """True when the target has explicit column bounds."""
        return any(sel.is_inline for sel in self.selectors)


@dataclass(frozen=True)
class ParsedAnnotations:
    """Annotations resolved per state."""

    inline: FullTween[Dict[int, Tuple[InlineAnnotation, ...]]]
    multiline: FullTween[Tuple[MultilineAnnotation, ...]]
