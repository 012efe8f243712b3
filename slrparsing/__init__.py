# ============================================================================
# Copyright (c) 2007 Jason Evans <jasone@canonware.com>
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
# ============================================================================
"""
The slrparsing module builds SLR(1) parsing tables from a textual
context-free grammar, and simulates table-driven shift-reduce parsing of a
token sequence, recording every step together with the parse forest.

Grammars are written one rule per line, with alternatives separated by "|"
and an empty body written as "ε" or "epsilon":

    E -> E + T | T
    T -> T * F | F
    F -> ( E ) | id

The pipeline consists of independent stages, each consuming the previous
stage's read-only output:

  parseGrammar : Grammar text -> Grammar.

  augmentGrammar : Grammar -> augmented Grammar, with a fresh start
                   production S' -> S that has production id 0.

  computeFirstFollow : Augmented Grammar -> FIRST and FOLLOW sets.

  buildAutomaton : Augmented Grammar -> canonical LR(0) states, numbered in
                   a reproducible discovery order.

  buildTable : Augmented Grammar, states, FOLLOW -> SLR(1) ParsingTable.
               Multiply-defined cells keep their first entry and are
               logged as Conflicts; table construction never fails.

  Simulator : ParsingTable -> ParseTrace, a sequence of ParseStep
              snapshots ending in an Accept or Error step.

The Analysis class runs all stages at once and keeps their results:

    analysis = slrparsing.Analysis(text)
    if analysis.isSLR1:
        trace = analysis.simulate("id + id * id")
        print(trace.render())

Simulation is refused (ConflictError) for tables with conflicts, since
deterministic parsing is undefined for them.
"""

from __future__ import annotations


__all__ = (
    "ACCEPT",
    "AcceptAction",
    "ActionEntry",
    "Analysis",
    "AnyException",
    "Conflict",
    "ConflictError",
    "EOI",
    "ERROR",
    "EPSILON",
    "ErrorAction",
    "FirstFollowSets",
    "Grammar",
    "GrammarSyntaxError",
    "Item",
    "ItemSet",
    "NodeArena",
    "ParseStep",
    "ParseTrace",
    "ParseTreeNode",
    "ParsingTable",
    "Production",
    "REDUCE",
    "ReduceAction",
    "SHIFT",
    "ShiftAction",
    "SimulationError",
    "Simulator",
    "State",
    "analyze",
    "augmentGrammar",
    "buildAutomaton",
    "buildTable",
    "closure",
    "computeFirstFollow",
    "goto",
    "parseGrammar",
    "__version__",
)

from slrparsing._version import __version__
from slrparsing.analysis import Analysis, analyze
from slrparsing.ast import NodeArena, ParseTreeNode
from slrparsing.automaton import ItemSet, State, buildAutomaton, closure, goto
from slrparsing.errors import (
    AnyException,
    ConflictError,
    GrammarSyntaxError,
    SimulationError,
)
from slrparsing.firstfollow import FirstFollowSets, computeFirstFollow
from slrparsing.grammar import (
    EOI,
    EPSILON,
    AcceptAction,
    ActionEntry,
    ErrorAction,
    Grammar,
    Item,
    Production,
    ReduceAction,
    ShiftAction,
    augmentGrammar,
    parseGrammar,
)
from slrparsing.lrparser import (
    ACCEPT,
    ERROR,
    REDUCE,
    SHIFT,
    ParseStep,
    ParseTrace,
    Simulator,
)
from slrparsing.table import Conflict, ParsingTable, buildTable
