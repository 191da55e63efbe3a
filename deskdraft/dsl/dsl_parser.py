"""
Board DSL -> list of resolved boards.

# comment            (also // comment)
$T = 18              variable, usable as $T further down
board[id] W x H x D "name" [at X,Y,Z | from X1,Y1 to X2,Y2 [z Z]]
    [cut left|right|top|bottom <value> ...] [view f|s|t...] [color #hex]

Indented lines directly below a board line continue that board command.
Expressions may use $vars, {id.prop} of earlier boards, LEN(x1,y1,x2,y2)
and + - * / ( ).
"""
from __future__ import annotations
import logging
import math
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ..geometry.eval import eval_expr, format_number, round3
from .errors import (BoardSyntaxError, CoordCount, DimensionCount, DSLError, DuplicateId,
                     InvalidCut, InvalidVariableDefinition, InvalidView, UnknownCommand)
from .keywords import find_keyword, split_coords, split_dims, take_section
from .palette import auto_color

logger = logging.getLogger(__name__)

BOARD_START_RE = re.compile(r"^board", re.IGNORECASE)
BOARD_RE = re.compile(
    r'^board(?:\[([A-Za-z_][A-Za-z0-9_]*)\])?\s+(.+?)\s+"([^"]+)"\s*(.*?)$', re.IGNORECASE
)
VAR_LINE_RE = re.compile(r"^\$([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.+?)(?:\s*#.*)?$")
INLINE_COMMENT_RE = re.compile(r"(?:^|\s+)#\s.*$")
CUT_RE = re.compile(r"\b(left|right|top|bottom)\s+(\S+)", re.IGNORECASE)
COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{3})(?![0-9a-fA-F])")
VIEW_FACES = "fst"


@dataclass(frozen=True)
class Cuts:
    left: Optional[float] = None
    right: Optional[float] = None
    top: Optional[float] = None
    bottom: Optional[float] = None


@dataclass(frozen=True)
class FromTo:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class Board:
    id: str
    name: str
    w: float
    h: float
    d: float
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    has_pos: bool = False
    angle: float = 0
    from_to: Optional[FromTo] = None
    cuts: Optional[Cuts] = None
    view: Optional[str] = None
    color: str = ""
    visible: bool = True


@dataclass
class ParseResult:
    boards: List[Board] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    var_count: int = 0


@dataclass
class Command:
    line: int
    kind: str  # "var" | "board" | "unknown"
    text: str


def split_commands(text: str) -> List[Command]:
    """Classify lines and fold indented continuation lines into their board command."""
    commands: List[Command] = []
    board: Optional[Command] = None
    for ln, raw in enumerate(text.split("\n"), start=1):
        line = raw.strip()
        if not line or line.startswith("#") or line.startswith("//"):
            board = None
            continue
        if board is not None and raw[:1] in (" ", "\t"):
            board.text += " " + line
            continue
        if line.startswith("$"):
            kind = "var"
        elif BOARD_START_RE.match(line):
            kind = "board"
        else:
            kind = "unknown"
        cmd = Command(ln, kind, line)
        commands.append(cmd)
        board = cmd if kind == "board" else None
    return commands


class ParseSession:
    """State of one parse: variables, board registry, accumulated output.

    Single use; parse_dsl() builds a fresh session per call.
    """

    def __init__(self, text: str):
        self.text = text
        self.variables: Dict[str, float] = {}
        self.registry: Dict[str, Board] = {}
        self.boards: List[Board] = []
        self.errors: List[str] = []
        self.var_count = 0
        self._used = False

    def parse(self) -> ParseResult:
        if self._used:
            raise RuntimeError("ParseSession already used; create a new session per parse")
        self._used = True
        for cmd in split_commands(self.text):
            try:
                if cmd.kind == "var":
                    self.parse_var(cmd.text)
                elif cmd.kind == "board":
                    self.parse_board(cmd.text, cmd.line)
                else:
                    raise UnknownCommand("unknown command")
            except DSLError as e:
                self._error(cmd.line, e.subject, str(e))
        return ParseResult(list(self.boards), list(self.errors), self.var_count)

    def evaluate(self, expr: str) -> float:
        return eval_expr(expr.strip(), self.variables, self.registry)

    def _error(self, ln: int, subject: Optional[str], message: str) -> None:
        prefix = f"Line {ln}" if subject is None else f"Line {ln} ({subject})"
        self.errors.append(f"{prefix}: {message}")
        logger.debug("%s: %s", prefix, message)

    # ---------------------------
    # Variables
    # ---------------------------

    def parse_var(self, line: str) -> None:
        m = VAR_LINE_RE.match(line)
        if not m:
            raise InvalidVariableDefinition("invalid variable definition")
        name = m.group(1)
        try:
            self.variables[name] = self.evaluate(m.group(2))
        except DSLError as e:
            e.subject = f"${name}"
            raise
        self.var_count += 1

    # ---------------------------
    # Boards
    # ---------------------------

    def parse_board(self, line: str, ln: int) -> None:
        m = BOARD_RE.match(line)
        if not m:
            raise BoardSyntaxError('invalid board (expected: board[id] W x H x D "name")')

        board_id = m.group(1) or f"b{len(self.boards)}"
        name = m.group(3)
        if board_id in self.registry:
            raise DuplicateId(f"duplicate id [{board_id}]")

        try:
            board = self._assemble(board_id, m.group(2).strip(), name, m.group(4) or "", ln)
        except DSLError as e:
            e.subject = name
            raise
        self.boards.append(board)
        self.registry[board_id] = board
        logger.debug("Line %d: board [%s] %s", ln, board_id, name)

    def _assemble(self, board_id: str, dim_raw: str, name: str, rest: str, ln: int) -> Board:
        dims = split_dims(dim_raw)
        if len(dims) != 3:
            raise DimensionCount(
                f'need 3 dimensions (W x H x D), got {len(dims)}: "{dim_raw}"')
        w, h, d = (self.evaluate(part) for part in dims)

        rest = INLINE_COMMENT_RE.sub("", rest).strip()
        pos: Dict[str, Any] = {"x": None, "y": None, "z": None, "has_pos": False,
                               "angle": 0, "from_to": None}

        from_pos = find_keyword(rest, "from")
        at_pos = find_keyword(rest, "at")
        if from_pos != -1:
            rest, w = self._from_to(rest[from_pos + 4:], w, name, ln, pos)
        elif at_pos != -1:
            at_str, rest = take_section(rest[at_pos + 2:].strip(), ["cut", "view", "color"])
            coords = split_coords(at_str)
            if len(coords) != 3:
                raise CoordCount("position needs 3 values (X, Y, Z)")
            pos["x"], pos["y"], pos["z"] = (self.evaluate(c) for c in coords)
            pos["has_pos"] = True

        cuts = None
        cut_pos = find_keyword(rest, "cut")
        if cut_pos != -1:
            cut_str, rest = take_section(rest[cut_pos + 3:].strip(), ["view", "color"])
            cuts = self._cuts(cut_str)

        view = None
        view_pos = find_keyword(rest, "view")
        if view_pos != -1:
            view_str, rest = take_section(rest[view_pos + 4:].strip(), ["color"])
            view = normalize_view(view_str)

        color = None
        color_pos = find_keyword(rest, "color")
        if color_pos != -1:
            cm = COLOR_RE.match(rest[color_pos + 5:].strip())
            if cm:
                color = cm.group(0)
        if not color:
            color = auto_color(len(self.boards))

        return Board(id=board_id, name=name, w=w, h=h, d=d, cuts=cuts, view=view,
                     color=color, **pos)

    def _from_to(self, after_from: str, w: float, name: str, ln: int, pos: Dict[str, Any]):
        to_pos = find_keyword(after_from, "to")
        if to_pos == -1:
            raise BoardSyntaxError("'from' requires 'to'")
        from_coords = split_coords(after_from[:to_pos].strip())
        if len(from_coords) != 2:
            raise CoordCount("'from' needs 2 values (X1, Y1)")

        to_str, rest = take_section(after_from[to_pos + 2:].strip(), ["z", "cut", "view", "color"])
        to_coords = split_coords(to_str)
        if len(to_coords) != 2:
            raise CoordCount("'to' needs 2 values (X2, Y2)")

        x1, y1 = (self.evaluate(c) for c in from_coords)
        x2, y2 = (self.evaluate(c) for c in to_coords)
        pos.update(x=x1, y=y1, z=0, has_pos=True, from_to=FromTo(x1, y1, x2, y2),
                   angle=math.atan2(y2 - y1, x2 - x1) * 180 / math.pi)

        actual_w = math.hypot(x2 - x1, y2 - y1)
        if abs(w - actual_w) > 1:
            msg = (f"width {format_number(w)} differs from from/to distance "
                   f"{math.floor(actual_w + 0.5)}, using the distance")
            self.errors.append(f"Line {ln} ({name}): {msg}")
            logger.warning("Line %d (%s): %s", ln, name, msg)

        if find_keyword(rest, "z") == 0:
            z_str, rest = take_section(rest[1:].strip(), ["cut", "view", "color"])
            pos["z"] = self.evaluate(z_str)
        return rest, round3(actual_w)

    def _cuts(self, cut_str: str) -> Cuts:
        sides: Dict[str, float] = {}
        for m in CUT_RE.finditer(cut_str):
            sides[m.group(1).lower()] = self.evaluate(m.group(2))
        if not sides:
            raise InvalidCut("cut needs at least one 'left|right|top|bottom <value>'")
        return Cuts(**sides)


def normalize_view(view_str: str) -> str:
    """Validate a view string over f/s/t; repeated faces keep their first position."""
    view = ""
    for ch in view_str.lower():
        if ch not in VIEW_FACES:
            raise InvalidView(f"invalid view '{ch}', allowed: f, s, t")
        if ch not in view:
            view += ch
    if not view:
        raise InvalidView("empty view")
    return view


def parse_dsl(text: str) -> ParseResult:
    return ParseSession(text).parse()


def board_to_json(board: Board) -> Dict[str, Any]:
    return asdict(board)


def result_to_json(result: ParseResult) -> Dict[str, Any]:
    return {
        "boards": [board_to_json(b) for b in result.boards],
        "errors": list(result.errors),
        "var_count": result.var_count,
    }
