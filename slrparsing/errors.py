"""
The slrparsing module implements the following exception classes:

  * AnyException
  * GrammarSyntaxError
  * ConflictError
  * SimulationError
"""

from __future__ import annotations

from typing import Optional


# ============================================================================
# Begin exceptions.
#
class AnyException(Exception):
    """
    Top-level class for all exceptions thrown within the slrparsing module.
    """


class GrammarSyntaxError(AnyException):
    """
    Grammar specification error.  GrammarSyntaxError arises when grammar
    text is malformed, or when an empty grammar is handed to a pipeline
    stage that needs at least one production.
    """

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        if line is not None:
            message = "line %d: %s" % (line, message)
        super().__init__(message)
        self.line = line


class ConflictError(AnyException):
    """
    ConflictError arises when deterministic simulation is requested for a
    parsing table that recorded conflicts, i.e. for a grammar that is not
    SLR(1).
    """


class SimulationError(AnyException):
    """
    Parser syntax error.  SimulationError describes a (state, token) pair
    for which the parsing table has no action.  The simulator records it on
    the terminal Error step instead of raising it, so that the trace up to
    that point remains inspectable.
    """

    def __init__(self, message: str, state: int, token: str) -> None:
        super().__init__(message)
        self.state = state
        self.token = token


#
# End exceptions.
# ============================================================================
