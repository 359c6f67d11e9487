"""Easing curves over normalised progress t ∈ [0, 1]."""

from __future__ import annotations

from typing import Callable, Dict

Easing = Callable[[float], float]


def _clip(t: float) -> float:
    return min(1.0, max(0.0, t))


def linear(t: float) -> float:
    return _clip(t)


def ease_in_quad(t: float) -> float:
    t = _clip(t)
    return t * t


def ease_out_quad(t: float) -> float:
    t = _clip(t)
    return t * (2.0 - t)


def ease_in_out_cubic(t: float) -> float:
    t = _clip(t)
    if t < 0.5:
        return 4.0 * t * t * t
    return 1.0 - (-2.0 * t + 2.0) ** 3 / 2.0


EASINGS: Dict[str, Easing] = {
    "linear": linear,
    "ease_in_quad": ease_in_quad,
    "ease_out_quad": ease_out_quad,
    "ease_in_out_cubic": ease_in_out_cubic,
}
