"""Tweens — easing curves, parameters, stagger, per-line assignment."""

from codeshift.tween.assigner import assign_tween, lines_with_elements, vertical_interval
from codeshift.tween.easing import EASINGS, ease_in_out_cubic, ease_in_quad, ease_out_quad, linear
from codeshift.tween.params import TweenParams, stagger

__all__ = [
    "EASINGS",
    "TweenParams",
    "assign_tween",
    "ease_in_out_cubic",
    "ease_in_quad",
    "ease_out_quad",
    "linear",
    "lines_with_elements",
    "stagger",
    "vertical_interval",
]
