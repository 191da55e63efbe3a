"""
Bracket-aware keyword search over option text.

The option part of a board command ("at 0,{a.top},0 cut left 300 view ft")
is tokenized once; every token remembers its offset and the bracket depth
in front of it. `{`/`(` open a level, `}`/`)` close one. Keywords and
commas only count at depth 0, so `{a.top}` never looks like `top`.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

TOKEN_RE = re.compile(
    r"(?P<VAR>\$[A-Za-z0-9_]+)"
    r"|(?P<WORD>[A-Za-z0-9_]+)"
    r"|(?P<LBRACE>\{)|(?P<RBRACE>\})"
    r"|(?P<LPAREN>\()|(?P<RPAREN>\))"
    r"|(?P<COMMA>,)"
    r"|(?P<OTHER>\S)"
)

OPENERS = ("LBRACE", "LPAREN")
CLOSERS = ("RBRACE", "RPAREN")


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int
    depth: int


def tokenize(text: str) -> List[Token]:
    tokens: List[Token] = []
    depth = 0
    for m in TOKEN_RE.finditer(text):
        kind = m.lastgroup
        tokens.append(Token(kind, m.group(0), m.start(), depth))
        if kind in OPENERS:
            depth += 1
        elif kind in CLOSERS:
            depth -= 1
    return tokens


def find_keyword(text: str, keyword: str) -> int:
    """Offset of the first whole-word, top-level `keyword` (any case), or -1."""
    kw = keyword.lower()
    for tok in tokenize(text):
        if tok.kind == "WORD" and tok.depth == 0 and tok.text.lower() == kw:
            return tok.pos
    return -1


def find_next_keyword(text: str, keywords: Sequence[str]) -> Tuple[int, Optional[str]]:
    """Earliest top-level keyword among `keywords`; ties go to list order."""
    best, best_kw = -1, None
    for kw in keywords:
        pos = find_keyword(text, kw)
        if pos != -1 and (best == -1 or pos < best):
            best, best_kw = pos, kw
    return best, best_kw


def split_coords(text: str) -> List[str]:
    """Split on top-level commas; parts are returned raw (not stripped)."""
    parts: List[str] = []
    start = 0
    for tok in tokenize(text):
        if tok.kind == "COMMA" and tok.depth == 0:
            parts.append(text[start:tok.pos])
            start = tok.pos + 1
    parts.append(text[start:])
    return parts


def take_section(text: str, stop_keywords: Sequence[str]) -> Tuple[str, str]:
    """Cut `text` at the next top-level stop keyword -> (section, remainder)."""
    pos, _ = find_next_keyword(text, stop_keywords)
    if pos == -1:
        return text.strip(), ""
    return text[:pos].strip(), text[pos:].strip()


DIM_SEP_RE = re.compile(r"(\s*)[xXх]\s*(?=[0-9$({])")
VAR_TAIL_RE = re.compile(r"\$[A-Za-z0-9_]*$")


def _depth_at(text: str, pos: int) -> int:
    depth = 0
    for ch in text[:pos]:
        if ch in "{(":
            depth += 1
        elif ch in "})":
            depth -= 1
    return depth


def split_dims(text: str) -> List[str]:
    """Split "W x H x D" on x/X/х separators followed by a value.

    Separators inside {...} or (...) and an x glued to a $name followed by a
    digit (as in $box2) belong to the expression.
    """
    parts: List[str] = []
    start = 0
    for m in DIM_SEP_RE.finditer(text):
        if _depth_at(text, m.start()) != 0:
            continue
        if not m.group(1) and VAR_TAIL_RE.search(text, 0, m.start()) and text[m.end():m.end() + 1].isdigit():
            continue
        parts.append(text[start:m.start()])
        start = m.end()
    parts.append(text[start:])
    return parts
