"""Annotation parser — descriptors → inline and multiline records per state."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from codeshift.annotations.models import AnnotationDescriptor, ParsedAnnotations
from codeshift.errors import MalformedRangeError
from codeshift.models import FullTween, InlineAnnotation, MultilineAnnotation, Range, Tween
from codeshift.ranges.focus import parse_focus


def _parse_side(
    descriptors: Optional[Sequence[AnnotationDescriptor]],
) -> Tuple[Dict[int, Tuple[InlineAnnotation, ...]], Tuple[MultilineAnnotation, ...]]:
    inline: Dict[int, List[InlineAnnotation]] = {}
    multiline: List[MultilineAnnotation] = []

    for descriptor in descriptors or ():
        selectors = parse_focus(descriptor.focus)
        if not selectors:
            raise MalformedRangeError(descriptor.focus, "annotation has no target")

        if any(sel.is_inline for sel in selectors):
            if not all(sel.is_inline for sel in selectors):
                raise MalformedRangeError(
                    descriptor.focus,
                    "inline annotation mixes column and whole-line selectors",
                )
            for sel in selectors:
                line_number = sel.lines.start
                for columns in sel.columns:
                    inline.setdefault(line_number, []).append(
                        InlineAnnotation(
                            line_number=line_number,
                            column_numbers=columns,
                            data=descriptor.data,
                            component=descriptor.component,
                        )
                    )
        else:
            multiline.append(
                MultilineAnnotation(
                    line_numbers=Range(
                        start=min(sel.lines.start for sel in selectors),
                        end=max(sel.lines.end for sel in selectors),
                    ),
                    data=descriptor.data,
                    component=descriptor.component,
                )
            )

    return {ln: tuple(anns) for ln, anns in inline.items()}, tuple(multiline)


def parse_annotations(
    annotations: Optional[Tween[Sequence[AnnotationDescriptor]]],
) -> ParsedAnnotations:
    """Resolve each state's descriptors against that state only.

    Raises MalformedRangeError when a target fails the focus grammar.
    """
    annotations = annotations or Tween()
    prev_inline, prev_multi = _parse_side(annotations.prev)
    next_inline, next_multi = _parse_side(annotations.next)
    return ParsedAnnotations(
        inline=FullTween(prev=prev_inline, next=next_inline),
        multiline=FullTween(prev=prev_multi, next=next_multi),
    )
