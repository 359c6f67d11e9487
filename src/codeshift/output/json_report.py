"""JSON reporter — a serialisable view of a CodeShift plan."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from codeshift.errors import AnnotationBindingMiss
from codeshift.models import (
    AnnotatedTokenGroups,
    CodeShift,
    FullTween,
    InlineAnnotation,
    LineGroup,
    LineWithElement,
    MultilineAnnotation,
    Range,
    TokenGroup,
    Tween,
)
from codeshift.tween.params import TweenParams


def _pair(tween: Tween[Any] | FullTween[Any]) -> Dict[str, Any]:
    return {"prev": tween.prev, "next": tween.next}


def _range(r: Optional[Range]) -> Optional[List[int]]:
    return None if r is None else [r.start, r.end]


def _component(component: Any) -> Optional[str]:
    """Render callbacks are opaque; report their name only."""
    if component is None:
        return None
    if isinstance(component, str):
        return component
    return getattr(component, "__name__", repr(component))


def _tween(params: TweenParams) -> Dict[str, Any]:
    if params.fixed:
        return {"fixed": True, "value": params.value}
    return {
        "fixed": False,
        "extremes": list(params.extremes or ()),
        "interval": list(params.interval or ()),
        "ease": getattr(params.ease, "__name__", None),
    }


def _inline(annotation: Optional[InlineAnnotation]) -> Optional[Dict[str, Any]]:
    if annotation is None:
        return None
    return {
        "line": annotation.line_number,
        "columns": _range(annotation.column_numbers),
        "data": annotation.data,
        "component": _component(annotation.component),
    }


def _multiline(annotation: Optional[MultilineAnnotation]) -> Optional[Dict[str, Any]]:
    if annotation is None:
        return None
    return {
        "lines": _range(annotation.line_numbers),
        "data": annotation.data,
        "component": _component(annotation.component),
    }


def _token_group(group: TokenGroup) -> Dict[str, Any]:
    return {
        "columns": _range(group.columns),
        "text": group.element,
        "focused": _pair(group.focused),
        "tokens": [{"content": t.content, "style": dict(t.style)} for t in group.tokens],
    }


def _annotated(groups: Optional[tuple[AnnotatedTokenGroups, ...]]) -> Optional[List[Dict[str, Any]]]:
    if groups is None:
        return None
    return [
        {"annotation": _inline(ag.annotation), "groups": [_token_group(g) for g in ag.groups]}
        for ag in groups
    ]


def _line(line: LineWithElement) -> Dict[str, Any]:
    return {
        "key": line.key,
        "move": line.move.value,
        "line_number": _pair(line.line_number),
        "enter_index": line.enter_index,
        "exit_index": line.exit_index,
        "focused": _pair(line.focused),
        "tween_x": _tween(line.tween_x),
        "tween_y": _tween(line.tween_y),
        "annotated_groups": {
            "prev": _annotated(line.annotated_groups.prev),
            "next": _annotated(line.annotated_groups.next),
        },
    }


def _group(group: LineGroup) -> Dict[str, Any]:
    return {
        "annotation": _multiline(group.annotation),
        "lines": [_line(line) for line in group.lines],  # type: ignore[arg-type]
    }


def _miss(miss: AnnotationBindingMiss) -> Dict[str, Any]:
    return {
        "side": miss.side,
        "reason": miss.reason,
        "line": miss.line_number,
        "columns": _range(miss.columns),
        "lines": _range(miss.lines),
    }


def to_dict(shift: CodeShift) -> Dict[str, Any]:
    """Convert a CodeShift to a JSON-serialisable dict."""
    return {
        "version": "1.0",
        "lang": shift.lang,
        "vertical_interval": list(shift.vertical_interval),
        "enter_count": shift.enter_count,
        "exit_count": shift.exit_count,
        "line_count": _pair(shift.line_count),
        "max_line_number": _pair(shift.max_line_number),
        "first_focused_line_number": _pair(shift.first_focused_line_number),
        "last_focused_line_number": _pair(shift.last_focused_line_number),
        "code": _pair(shift.code),
        "groups": {
            "prev": [_group(g) for g in shift.groups.prev],
            "next": [_group(g) for g in shift.groups.next],
        },
        "binding_misses": [_miss(m) for m in shift.binding_misses],
    }


def render(shift: CodeShift) -> str:
    """Render the plan as a JSON string. Non-serialisable annotation data falls back to repr."""
    return json.dumps(to_dict(shift), indent=2, default=repr)
