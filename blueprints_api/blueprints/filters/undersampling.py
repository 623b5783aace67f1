from typing import List

from ..models import Blueprint, Point
from .base import BlueprintsFilter


def undersample(points: List[Point], step: int) -> List[Point]:
    """
    Keeps every `step`-th point, starting at the first one.
    The last point is always kept so the drawing still ends where it did.
    """
    if step < 1:
        raise ValueError("step must be >= 1")
    if step == 1 or len(points) <= 2:
        return list(points)

    kept = points[::step]
    if (len(points) - 1) % step != 0:
        kept.append(points[-1])
    return kept


class UndersamplingFilter(BlueprintsFilter):
    """Reduces point density, e.g. step=2 drops every other point."""

    name = "undersampling"

    @classmethod
    def from_options(cls, **options) -> "UndersamplingFilter":
        return cls(step=options.get("undersampling_step", 2))

    def __init__(self, step: int = 2):
        if step < 1:
            raise ValueError(f"Undersampling step must be >= 1, got {step}")
        self.step = step

    def apply(self, bp: Blueprint) -> Blueprint:
        if not bp.points:
            return bp
        return bp.with_points(undersample(bp.points, self.step))

    def __repr__(self) -> str:
        return f"UndersamplingFilter(step={self.step})"
