"""Derived 2-D geometry of a parsed board: cut outline, list views, projections."""
from __future__ import annotations
from typing import TYPE_CHECKING, Iterable, List, NamedTuple, Tuple

if TYPE_CHECKING:
    from ..dsl.dsl_parser import Board

Point = Tuple[float, float]

VIEW_LABELS = {"f": "front", "s": "side", "t": "top"}
PROJECTIONS = ("front", "back", "left", "right", "top", "bottom")


class FaceView(NamedTuple):
    dw: float
    dh: float
    view: str
    label: str


class Projection(NamedTuple):
    lx: float
    ly: float
    lw: float
    lh: float


def has_cuts(board: "Board") -> bool:
    c = board.cuts
    return c is not None and any(v is not None for v in (c.left, c.right, c.top, c.bottom))


def cut_polygon(board: "Board") -> List[Point]:
    """BL, BR, TR, TL of the (possibly trapezoidal) outline, anchored bottom-left at 0,0."""
    c = board.cuts
    lh = c.left if c is not None and c.left is not None else board.h
    rh = c.right if c is not None and c.right is not None else board.h
    bw = c.bottom if c is not None and c.bottom is not None else board.w
    tw = c.top if c is not None and c.top is not None else board.w
    return [(0, 0), (bw, 0), (tw, rh), (0, lh)]


def _face_dims(board: "Board", face: str) -> Tuple[float, float]:
    if face == "s":
        return board.d, board.h
    if face == "t":
        return board.w, board.d
    return board.w, board.h


def list_view_dims(board: "Board") -> Tuple[float, float]:
    return _face_dims(board, (board.view or "f")[0])


def auto_detect_views(board: "Board") -> str:
    """The two faces with the largest projected area; equal areas keep f, s, t order."""
    faces = [
        ("f", board.w * board.h),
        ("s", board.d * board.h),
        ("t", board.w * board.d),
    ]
    faces.sort(key=lambda f: f[1], reverse=True)
    return faces[0][0] + faces[1][0]


def list_view_dims_multi(board: "Board") -> List[FaceView]:
    views = board.view or auto_detect_views(board)
    return [FaceView(*_face_dims(board, v), view=v, label=VIEW_LABELS[v]) for v in views]


def project_board(board: "Board", direction: str) -> Projection:
    x, y, z = board.x or 0, board.y or 0, board.z or 0
    w, h, d = board.w, board.h, board.d
    if direction == "front":
        return Projection(x, y, w, h)
    if direction == "back":
        return Projection(-x - w, y, w, h)
    if direction == "left":
        return Projection(z, y, d, h)
    if direction == "right":
        return Projection(-z - d, y, d, h)
    if direction == "top":
        return Projection(x, z, w, d)
    if direction == "bottom":
        return Projection(x, -z - d, w, d)
    raise ValueError(f"unknown projection: {direction}")


def proj_axis_labels(direction: str) -> Tuple[str, str]:
    if direction in ("front", "back"):
        return ("X", "Y")
    if direction in ("left", "right"):
        return ("Z", "Y")
    if direction in ("top", "bottom"):
        return ("X", "Z")
    raise ValueError(f"unknown projection: {direction}")


def project_all(boards: Iterable["Board"], direction: str) -> List[Projection]:
    return [project_board(b, direction) for b in boards]
