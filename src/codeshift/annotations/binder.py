"""Annotation binder — inline annotations onto token groups, multiline onto line runs.

A miss is never an error: the diff can remove an annotated line, and focus
splitting can reshape the groups an annotation targeted. Misses are logged at
DEBUG level and returned as :class:`AnnotationBindingMiss` records.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from codeshift.errors import AnnotationBindingMiss
from codeshift.models import (
    SIDES,
    AnnotatedLine,
    AnnotatedTokenGroups,
    FocusedLine,
    FullTween,
    InlineAnnotation,
    LineGroup,
    MultilineAnnotation,
    Side,
    TokenGroup,
    Tween,
    extend,
)

logger = logging.getLogger(__name__)

InlineMap = Dict[int, Tuple[InlineAnnotation, ...]]


def _record_miss(misses: List[AnnotationBindingMiss], miss: AnnotationBindingMiss) -> None:
    logger.debug(
        "dropped %s annotation on %s line %s (%s)",
        "inline" if miss.columns is not None else "multiline",
        miss.side,
        miss.line_number if miss.line_number is not None else miss.lines,
        miss.reason,
    )
    misses.append(miss)


def bind_groups(
    groups: Sequence[TokenGroup],
    annotations: Sequence[InlineAnnotation],
) -> Tuple[Tuple[AnnotatedTokenGroups, ...], List[InlineAnnotation]]:
    """Pair runs of groups with the annotations whose columns they span exactly.

    Returns the annotated groups and the annotations left unbound.
    """
    bound: Set[int] = set()
    result: List[AnnotatedTokenGroups] = []
    plain: List[TokenGroup] = []

    i = 0
    while i < len(groups):
        start = groups[i].columns.start
        match: Optional[Tuple[InlineAnnotation, int]] = None
        for annotation in annotations:
            if id(annotation) in bound or annotation.column_numbers.start != start:
                continue
            # extend the run until it reaches the annotation's last column
            j = i
            while j < len(groups) and groups[j].columns.end < annotation.column_numbers.end:
                j += 1
            if j < len(groups) and groups[j].columns.end == annotation.column_numbers.end:
                match = (annotation, j)
                break

        if match is None:
            plain.append(groups[i])
            i += 1
            continue

        annotation, j = match
        if plain:
            result.append(AnnotatedTokenGroups(groups=tuple(plain)))
            plain = []
        result.append(AnnotatedTokenGroups(groups=tuple(groups[i : j + 1]), annotation=annotation))
        bound.add(id(annotation))
        i = j + 1

    if plain:
        result.append(AnnotatedTokenGroups(groups=tuple(plain)))

    unbound = [a for a in annotations if id(a) not in bound]
    return tuple(result), unbound


def annotate_inline(
    lines: Sequence[FocusedLine],
    annotations: FullTween[InlineMap],
    misses: Optional[List[AnnotationBindingMiss]] = None,
) -> Tuple[AnnotatedLine, ...]:
    """Attach each state's inline annotations to the lines present in that state."""
    misses = misses if misses is not None else []
    seen: Dict[Side, Set[int]] = {"prev": set(), "next": set()}
    annotated: List[AnnotatedLine] = []

    for line in lines:
        per_side: Dict[Side, Optional[Tuple[AnnotatedTokenGroups, ...]]] = {}
        for side in SIDES:
            line_number = line.line_number.get(side)
            if line_number is None:
                per_side[side] = None
                continue
            seen[side].add(line_number)
            line_annotations = annotations.get(side).get(line_number, ())
            groups, unbound = bind_groups(line.groups, line_annotations)
            per_side[side] = groups
            for annotation in unbound:
                _record_miss(
                    misses,
                    AnnotationBindingMiss(
                        side=side,
                        reason="no_group_match",
                        line_number=line_number,
                        columns=annotation.column_numbers,
                    ),
                )
        annotated.append(
            extend(
                line,
                AnnotatedLine,
                annotated_groups=Tween(prev=per_side["prev"], next=per_side["next"]),
            )
        )

    for side in SIDES:
        for line_number, line_annotations in sorted(annotations.get(side).items()):
            if line_number in seen[side]:
                continue
            for annotation in line_annotations:
                _record_miss(
                    misses,
                    AnnotationBindingMiss(
                        side=side,
                        reason="missing_line",
                        line_number=line_number,
                        columns=annotation.column_numbers,
                    ),
                )

    return tuple(annotated)


def _active_annotation(
    line: AnnotatedLine,
    annotations: Sequence[MultilineAnnotation],
    side: Side,
) -> Optional[MultilineAnnotation]:
    line_number = line.line_number.get(side)
    if line_number is None:
        return None
    for annotation in annotations:
        if annotation.line_numbers.contains(line_number):
            return annotation
    return None


def group_lines(
    lines: Sequence[AnnotatedLine],
    annotations: Sequence[MultilineAnnotation],
    side: Side,
) -> Tuple[LineGroup, ...]:
    """Group consecutive lines by their active multiline annotation on *side*."""
    groups: List[LineGroup] = []
    current: List[AnnotatedLine] = []
    current_annotation: Optional[MultilineAnnotation] = None

    for line in lines:
        annotation = _active_annotation(line, annotations, side)
        if current and annotation is not current_annotation:
            groups.append(LineGroup(lines=tuple(current), annotation=current_annotation))
            current = []
        current_annotation = annotation
        current.append(line)

    if current:
        groups.append(LineGroup(lines=tuple(current), annotation=current_annotation))
    return tuple(groups)


def annotate_multiline(
    lines: Sequence[AnnotatedLine],
    annotations: FullTween[Tuple[MultilineAnnotation, ...]],
    misses: Optional[List[AnnotationBindingMiss]] = None,
) -> FullTween[Tuple[LineGroup, ...]]:
    """Compute the prev and next line groupings independently."""
    misses = misses if misses is not None else []
    line_groups = annotations.map(lambda anns, side: group_lines(lines, anns, side))

    for side in SIDES:
        used = {id(g.annotation) for g in line_groups.get(side) if g.annotation is not None}
        for annotation in annotations.get(side):
            if id(annotation) not in used:
                _record_miss(
                    misses,
                    AnnotationBindingMiss(
                        side=side,
                        reason="no_lines",
                        lines=annotation.line_numbers,
                    ),
                )
    return line_groups
