from __future__ import annotations
import math
from typing import TYPE_CHECKING, List, Tuple

from ..dsl.errors import UnknownProperty

if TYPE_CHECKING:
    from ..dsl.dsl_parser import Board


def rotated_corners(board: "Board") -> List[Tuple[float, float]]:
    """Corners of a board rotated by `angle` degrees about its (x, y) origin."""
    x, y = board.x or 0, board.y or 0
    rad = board.angle * math.pi / 180
    cos, sin = math.cos(rad), math.sin(rad)
    w, h = board.w, board.h
    return [
        (x, y),
        (x + w * cos, y + w * sin),
        (x + w * cos - h * sin, y + w * sin + h * cos),
        (x - h * sin, y + h * cos),
    ]


def resolve_property(board: "Board", prop: str, board_id: str) -> float:
    """Value of `{board_id.prop}`; unset coordinates read as 0."""
    x, y, z = board.x or 0, board.y or 0, board.z or 0
    if prop == "x": return x
    if prop == "y": return y
    if prop == "z": return z
    if prop == "w": return board.w
    if prop == "h": return board.h
    if prop == "d": return board.d
    if prop == "back": return z + board.d
    if prop == "angle": return board.angle or 0

    if board.angle:
        # axis-aligned bounding box of the rotated outline
        corners = rotated_corners(board)
        xs = [c[0] for c in corners]
        ys = [c[1] for c in corners]
        rad = board.angle * math.pi / 180
        if prop == "right": return max(xs)
        if prop == "top": return max(ys)
        if prop == "cx": return (min(xs) + max(xs)) / 2
        if prop == "cy": return (min(ys) + max(ys)) / 2
        if prop == "x2": return x + board.w * math.cos(rad)
        if prop == "y2": return y + board.w * math.sin(rad)
    else:
        if prop == "right": return x + board.w
        if prop == "top": return y + board.h
        if prop == "cx": return x + board.w / 2
        if prop == "cy": return y + board.h / 2
        if prop == "x2": return x + board.w
        if prop == "y2": return y
    raise UnknownProperty(f"unknown property .{prop} on [{board_id}]")
