"""Error taxonomy of the board DSL.

All errors are ValueError subclasses so callers that only care about
"bad input" can catch ValueError, as the rest of the engine does.
"""
from typing import Optional


class DSLError(ValueError):
    # board name or $variable the failing line defines, when known
    subject: Optional[str] = None


class BoardSyntaxError(DSLError):
    pass


class UnknownCommand(DSLError):
    pass


class UnknownVariable(DSLError):
    pass


class InvalidVariableDefinition(DSLError):
    pass


class UnknownId(DSLError):
    pass


class UnknownProperty(DSLError):
    pass


class DimensionCount(DSLError):
    pass


class CoordCount(DimensionCount):
    pass


class InvalidExpression(DSLError):
    pass


class DuplicateId(DSLError):
    pass


class InvalidView(DSLError):
    pass


class InvalidCut(DSLError):
    pass
