"""Data models for the diff-and-tween pipeline.

Every structure is a frozen dataclass and is allocated fresh on each
:func:`codeshift.pipeline.parse` call. Values that exist in one or both code
states are wrapped in :class:`Tween` (either side may be missing) or
:class:`FullTween` (both sides guaranteed).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Generic,
    Literal,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

if TYPE_CHECKING:
    from codeshift.errors import AnnotationBindingMiss
    from codeshift.tween.params import TweenParams

T = TypeVar("T")
U = TypeVar("U")

Side = Literal["prev", "next"]
SIDES: Tuple[Side, Side] = ("prev", "next")


class Move(str, Enum):
    ENTER = "enter"
    EXIT = "exit"
    STAY = "stay"


# --- Paired values ---


@dataclass(frozen=True)
class Tween(Generic[T]):
    """A value that may exist in the previous state, the next state, or both."""

    prev: Optional[T] = None
    next: Optional[T] = None

    def get(self, side: Side) -> Optional[T]:
        return self.prev if side == "prev" else self.next

    def map(self, fn: Callable[[Optional[T], Side], U]) -> FullTween[U]:
        return FullTween(prev=fn(self.prev, "prev"), next=fn(self.next, "next"))


@dataclass(frozen=True)
class FullTween(Generic[T]):
    """A value present in both code states."""

    prev: T
    next: T

    def get(self, side: Side) -> T:
        return self.prev if side == "prev" else self.next

    def map(self, fn: Callable[[T, Side], U]) -> FullTween[U]:
        return FullTween(prev=fn(self.prev, "prev"), next=fn(self.next, "next"))


# --- Input ---


@dataclass(frozen=True)
class Token:
    """Smallest highlighted unit. ``style`` is opaque to the pipeline."""

    content: str
    style: Mapping[str, Any] = field(default_factory=dict)

    def split(self, offset: int) -> Tuple[Token, Token]:
        """Partition the content at a character offset, keeping the style on both halves."""
        return (
            Token(self.content[:offset], self.style),
            Token(self.content[offset:], self.style),
        )


@dataclass(frozen=True)
class HighlightedLine:
    tokens: Sequence[Token] = ()

    @property
    def text(self) -> str:
        return "".join(t.content for t in self.tokens)


@dataclass(frozen=True, slots=True)
class Range:
    """A 1-based, inclusive interval of line or column numbers."""

    start: int
    end: int

    def contains(self, value: int) -> bool:
        return self.start <= value <= self.end

    @property
    def length(self) -> int:
        return self.end - self.start + 1


# --- Annotations ---


@dataclass(frozen=True, eq=False)
class InlineAnnotation:
    """Column-range annotation on a single line of one code state."""

    line_number: int
    column_numbers: Range
    data: Any = None
    component: Any = None  # render callback, never called by the pipeline


@dataclass(frozen=True, eq=False)
class MultilineAnnotation:
    """Line-range annotation (visible line numbers) on one code state."""

    line_numbers: Range
    data: Any = None
    component: Any = None


# --- Pipeline stages ---


@dataclass(frozen=True)
class MergedLine:
    tokens: Tuple[Token, ...]
    line_number: Tween[int]
    move: Move
    enter_index: Optional[int] = None
    exit_index: Optional[int] = None


@dataclass(frozen=True)
class MergedCode:
    lines: Tuple[MergedLine, ...]
    enter_count: int
    exit_count: int


@dataclass(frozen=True)
class TokenGroup:
    """Contiguous tokens sharing the same focus in both states."""

    tokens: Tuple[Token, ...]
    focused: FullTween[bool]
    columns: Range
    element: str = ""  # plain-text rendering; renderers may substitute their own


@dataclass(frozen=True)
class FocusedLine:
    groups: Tuple[TokenGroup, ...]
    line_number: Tween[int]
    move: Move
    enter_index: Optional[int]
    exit_index: Optional[int]
    focused: FullTween[bool]

    @property
    def text(self) -> str:
        return "".join(g.element for g in self.groups)


@dataclass(frozen=True)
class FocusedCode:
    lines: Tuple[FocusedLine, ...]
    enter_count: int
    exit_count: int
    first_focused_line_number: Tween[int]
    last_focused_line_number: Tween[int]


@dataclass(frozen=True)
class AnnotatedTokenGroups:
    groups: Tuple[TokenGroup, ...]
    annotation: Optional[InlineAnnotation] = None


@dataclass(frozen=True)
class AnnotatedLine(FocusedLine):
    annotated_groups: Tween[Tuple[AnnotatedTokenGroups, ...]]


@dataclass(frozen=True)
class LineWithElement(AnnotatedLine):
    key: int
    tween_x: TweenParams
    tween_y: TweenParams


@dataclass(frozen=True)
class LineGroup:
    """Run of consecutive lines sharing one (possibly absent) multiline annotation."""

    lines: Tuple[AnnotatedLine, ...]
    annotation: Optional[MultilineAnnotation] = None


@dataclass(frozen=True)
class AnnotatedCode:
    line_groups: FullTween[Tuple[LineGroup, ...]]
    enter_count: int
    exit_count: int
    first_focused_line_number: Tween[int]
    last_focused_line_number: Tween[int]
    line_count: FullTween[int]
    binding_misses: Tuple[AnnotationBindingMiss, ...] = ()


@dataclass(frozen=True)
class CodeShift:
    """Fully resolved animation plan for one prev → next transition."""

    groups: FullTween[Tuple[LineGroup, ...]]
    first_focused_line_number: Tween[int]
    last_focused_line_number: Tween[int]
    vertical_interval: Tuple[float, float]
    line_count: FullTween[int]
    max_line_number: FullTween[int]
    code: FullTween[str]
    lang: str
    enter_count: int = 0
    exit_count: int = 0
    binding_misses: Tuple[AnnotationBindingMiss, ...] = ()

    @property
    def lines(self) -> Tuple[LineWithElement, ...]:
        """All lines in merged order (every line appears in both groupings)."""
        return tuple(line for group in self.groups.prev for line in group.lines)  # type: ignore[misc]


def extend(obj: Any, cls: type, **extra: Any) -> Any:
    """Build *cls* from the fields of *obj* plus *extra* (subclass promotion)."""
    values = {f.name: getattr(obj, f.name) for f in fields(obj)}
    values.update(extra)
    return cls(**values)
