from __future__ import annotations
from typing import TYPE_CHECKING, List, Sequence, Tuple

from shapely.geometry import LineString, Polygon

from ..geometry.shapes import cut_polygon, has_cuts

if TYPE_CHECKING:
    from ..dsl.dsl_parser import Board


def has_self_intersections(coords: Sequence[Tuple[float, float]]) -> bool:
    """True when the closed ring through `coords` crosses itself."""
    ring = list(coords)
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    return not LineString(ring).is_simple


def shape_issues(board: "Board") -> List[str]:
    """Problems with a board outline that parse happily but cannot be cut."""
    issues: List[str] = []
    for label, value in (("width", board.w), ("height", board.h), ("depth", board.d)):
        if value <= 0:
            issues.append(f"[{board.id}] {label} must be positive, got {value:g}")
    if not has_cuts(board):
        return issues

    pts = cut_polygon(board)
    c = board.cuts
    for side in ("left", "right", "top", "bottom"):
        value = getattr(c, side)
        if value is not None and value <= 0:
            issues.append(f"[{board.id}] cut {side} must be positive, got {value:g}")
    if has_self_intersections(pts):
        issues.append(f"[{board.id}] cut outline crosses itself")
    elif Polygon(pts).area <= 0:
        issues.append(f"[{board.id}] cut outline has no area")
    return issues
