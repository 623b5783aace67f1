from typing import List

from ..models import Blueprint, Point
from .base import BlueprintsFilter


def remove_consecutive_duplicates(points: List[Point]) -> List[Point]:
    """Drops every point equal to the one right before it."""
    kept: List[Point] = []
    for p in points:
        if kept and kept[-1] == p:
            continue
        kept.append(p)
    return kept


class RedundancyFilter(BlueprintsFilter):
    name = "redundancy"

    def apply(self, bp: Blueprint) -> Blueprint:
        if not bp.points:
            return bp
        return bp.with_points(remove_consecutive_duplicates(bp.points))
