"""Tween parameters — a fixed value or an eased move over a progress interval."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from codeshift.tween.easing import Easing

Interval = Tuple[float, float]


@dataclass(frozen=True)
class TweenParams:
    """How one coordinate of a line evolves while progress goes from 0 to 1.

    ``fixed`` params hold ``value`` for the whole transition. Moving params go
    from ``extremes[0]`` to ``extremes[1]`` during ``interval``, shaped by
    ``ease``; outside the interval they rest on the nearest extreme.
    """

    fixed: bool
    value: Optional[float] = None
    extremes: Optional[Tuple[float, float]] = None
    interval: Optional[Interval] = None
    ease: Optional[Easing] = None

    @classmethod
    def hold(cls, value: float) -> "TweenParams":
        return cls(fixed=True, value=value)

    @classmethod
    def move(cls, start: float, end: float, interval: Interval, ease: Easing) -> "TweenParams":
        return cls(fixed=False, extremes=(start, end), interval=interval, ease=ease)

    def sample(self, t: float) -> float:
        """Evaluate at overall progress *t*."""
        if self.fixed:
            assert self.value is not None
            return self.value
        assert self.extremes is not None and self.interval is not None and self.ease is not None
        start_t, end_t = self.interval
        if end_t <= start_t:
            local = 1.0 if t >= end_t else 0.0
        else:
            local = min(1.0, max(0.0, (t - start_t) / (end_t - start_t)))
        a, b = self.extremes
        return a + (b - a) * self.ease(local)


def stagger(interval: Interval, index: int, count: int) -> Interval:
    """Return the *index*-th of *count* disjoint equal slices of *interval*."""
    start, end = interval
    if count <= 0:
        return (start, end)
    width = (end - start) / count
    return (start + width * index, start + width * (index + 1))
