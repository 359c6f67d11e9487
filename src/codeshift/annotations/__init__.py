"""Annotations — descriptor parsing and binding to token / line groups."""

from codeshift.annotations.binder import (
    annotate_inline,
    annotate_multiline,
    bind_groups,
    group_lines,
)
from codeshift.annotations.models import AnnotationDescriptor, ParsedAnnotations
from codeshift.annotations.parser import parse_annotations

__all__ = [
    "AnnotationDescriptor",
    "ParsedAnnotations",
    "annotate_inline",
    "annotate_multiline",
    "bind_groups",
    "group_lines",
    "parse_annotations",
]
