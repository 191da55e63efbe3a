import logging
from pathlib import Path

import pytest

CABINET = """# Cabinet 800 x 400 x 2000
$T  = 18        # board thickness [mm]
$W  = 800       # inner width
$H  = 2000      # height
$D  = 400       # depth

board[dn]  $W x $T x $D        "Bottom"      at 0, 0, 0              view ft
board[lt]  $T x $H x $D        "Left side"   at 0, 0, 0              view sf
board[rt]  $T x $H x $D        "Right side"  at {lt.right}+$W, 0, 0  view sf
board[tp]  $W+{lt.w} x $T x $D "Top"         at {lt.x}, {lt.top}-$T, 0
board[bk]  {lt.right}+$W x $H x $T "Back"    at {lt.x}, {lt.y}, $D-$T  color #5c3a1e
board[p1]  $W x $T x $D-$T     "Shelf 1"     at {lt.right}, {dn.top}+380, {dn.z}
board[p2]  $W x $T x $D-$T     "Shelf 2"
    at {p1.x}, {p1.top}+380, {p1.z}
    view ft
"""

A_FRAME = """$T = 18
$H = 600
$W = 400
$D = 300

board[fl]  $W x $T x $D  "Floor"      at 0, 0, 0  view ft
board[la]  LEN(0,0,200,$H) x $T x $D  "Left leg"   from 0,0 to 200,$H  view fs
board[ra]  LEN($W,0,200,$H) x $T x $D  "Right leg"  from $W,0 to 200,$H  view fs
board[sh]  200 x $T x $D "Shelf"  at {la.cx}, 300, 0  view ft
"""


@pytest.fixture
def cabinet_dsl():
    return CABINET


@pytest.fixture
def a_frame_dsl():
    return A_FRAME


@pytest.fixture
def dsl_file(tmp_path):
    def write(text: str, name: str = "design.dsl") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return write


@pytest.fixture(autouse=True)
def _reset_deskdraft_logger():
    yield
    logging.getLogger("deskdraft").handlers.clear()
