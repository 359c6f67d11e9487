"""codeshift — diff two code snapshots into a per-line animation plan."""

__version__ = "0.1.0"

from codeshift.annotations.models import AnnotationDescriptor
from codeshift.errors import (
    AnnotationBindingMiss,
    CodeShiftError,
    MalformedRangeError,
    RangeLengthMismatchError,
)
from codeshift.models import CodeShift, FullTween, HighlightedLine, Token, Tween
from codeshift.pipeline import PlanCache, parse

__all__ = [
    "AnnotationBindingMiss",
    "AnnotationDescriptor",
    "CodeShift",
    "CodeShiftError",
    "FullTween",
    "HighlightedLine",
    "MalformedRangeError",
    "PlanCache",
    "RangeLengthMismatchError",
    "Token",
    "Tween",
    "__version__",
    "parse",
]
