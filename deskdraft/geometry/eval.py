"""
Numeric expressions of the board DSL.

eval_expr() resolves an expression in four passes:

  1. $var          -> session variable
  2. {id.prop}     -> property of an already defined board
  3. LEN(a,b,c,d)  -> distance between (a,b) and (c,d)
  4. + - * / ( )   -> restricted arithmetic, rounded to 3 decimals

Passes 1-3 are textual; only pass 4 parses anything.
"""
from __future__ import annotations
import math
import operator as op
import re
from typing import Any, Callable, Dict, List, Mapping

from ..dsl.errors import InvalidExpression, UnknownId, UnknownVariable
from .properties import resolve_property

OPS: Dict[str, Callable[[float, float], float]] = {
    "+": op.add, "-": op.sub, "*": op.mul, "/": op.truediv,
}
UNARY = {"+": op.pos, "-": op.neg}
MAX_NESTING = 100  # parentheses plus leading signs

ALLOWED_RE = re.compile(r"^[\d\s+\-*/().]+$")
NUM_TOKEN_RE = re.compile(r"\s*(?:(\d+(?:\.\d*)?|\.\d+)|([+\-*/()]))")
VAR_RE = re.compile(r"\$([A-Za-z_][A-Za-z0-9_]*)")
PROP_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\.([A-Za-z0-9]+)\}")
LEN_RE = re.compile(r"LEN\(([^,]+),([^,]+),([^,]+),([^)]+)\)", re.IGNORECASE)


def round3(value: float) -> float:
    """Round half up at the third decimal."""
    return math.floor(value * 1000 + 0.5) / 1000


def format_number(value: float) -> str:
    """Plain decimal text for substitution; never exponent notation."""
    if float(value).is_integer():
        return str(int(value))
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = f"{value:.15f}".rstrip("0").rstrip(".")
    return text


class _Arithmetic:
    """Recursive descent over: expr := term (('+'|'-') term)*, term := unary (('*'|'/') unary)*."""

    def __init__(self, source: str):
        self.source = source
        self.tokens = self._tokenize(source)
        self.i = 0
        self.depth = 0

    def _tokenize(self, source: str) -> List[Any]:
        tokens: List[Any] = []
        pos = 0
        stripped = source.rstrip()
        while pos < len(stripped):
            m = NUM_TOKEN_RE.match(stripped, pos)
            if not m:
                raise InvalidExpression(f'expression error "{source}"')
            tokens.append(float(m.group(1)) if m.group(1) is not None else m.group(2))
            pos = m.end()
        return tokens

    def peek(self):
        return self.tokens[self.i] if self.i < len(self.tokens) else None

    def take(self):
        tok = self.peek()
        if tok is None:
            raise InvalidExpression(f'expression error "{self.source}"')
        self.i += 1
        return tok

    def parse(self) -> float:
        value = self.expr()
        if self.peek() is not None:
            raise InvalidExpression(f'expression error "{self.source}"')
        return value

    def expr(self) -> float:
        value = self.term()
        while self.peek() in ("+", "-"):
            value = OPS[self.take()](value, self.term())
        return value

    def term(self) -> float:
        value = self.unary()
        while self.peek() in ("*", "/"):
            value = OPS[self.take()](value, self.unary())
        return value

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > MAX_NESTING:
            raise InvalidExpression(f'expression nested too deeply "{self.source}"')

    def unary(self) -> float:
        if self.peek() in UNARY:
            sign = UNARY[self.take()]
            self._enter()
            value = sign(self.unary())
            self.depth -= 1
            return value
        return self.atom()

    def atom(self) -> float:
        tok = self.take()
        if isinstance(tok, float):
            return tok
        if tok == "(":
            self._enter()
            value = self.expr()
            self.depth -= 1
            if self.take() != ")":
                raise InvalidExpression(f'expression error "{self.source}"')
            return value
        raise InvalidExpression(f'expression error "{self.source}"')


def eval_math(expr: str) -> float:
    """Evaluate plain arithmetic (numbers, + - * / and parentheses)."""
    e = str(expr).strip()
    if not ALLOWED_RE.match(e):
        raise InvalidExpression(f'invalid expression "{e}" (allowed: numbers, +, -, *, /, ())')
    try:
        result = _Arithmetic(e).parse()
        if not math.isfinite(result):
            raise InvalidExpression(f'result of "{e}" is not a number')
        return round3(result)
    except (ZeroDivisionError, OverflowError):
        raise InvalidExpression(f'expression error "{e}"') from None


def eval_expr(expr: str, variables: Mapping[str, float], registry: Mapping[str, Any]) -> float:
    def var(m: re.Match) -> str:
        name = m.group(1)
        if name not in variables:
            raise UnknownVariable(f"unknown variable ${name}")
        return format_number(variables[name])

    def prop(m: re.Match) -> str:
        board_id, name = m.group(1), m.group(2)
        board = registry.get(board_id)
        if board is None:
            raise UnknownId(f"unknown id [{board_id}]")
        return format_number(resolve_property(board, name, board_id))

    def length(m: re.Match) -> str:
        x1, y1, x2, y2 = (eval_math(arg) for arg in m.groups())
        return format_number(math.hypot(x2 - x1, y2 - y1))

    e = VAR_RE.sub(var, str(expr))
    e = PROP_RE.sub(prop, e)
    e = LEN_RE.sub(length, e)
    return eval_math(e)
