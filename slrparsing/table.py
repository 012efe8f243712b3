"""
SLR(1) parsing table construction.  The action table is filled by walking
the items of every state in order; a cell that is already occupied by a
different entry keeps its first entry and the attempt is logged as a
Conflict.  The table is always fully built, conflicts or not.
"""
from __future__ import annotations
from typing import (
    Any,
    Dict,
    FrozenSet,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

import types

from slrparsing.automaton import State
from slrparsing.errors import GrammarSyntaxError
from slrparsing.grammar import (
    EOI,
    AcceptAction,
    ActionEntry,
    Grammar,
    ReduceAction,
    ShiftAction,
    accept,
    error,
)

SHIFT_REDUCE = "shift-reduce"
REDUCE_REDUCE = "reduce-reduce"

ActionState = Dict[str, ActionEntry]
GotoState = Dict[str, int]


class Conflict:
    """
    A multiply-defined action cell.  existing is the entry that stays in the
    table, attempted is the entry that was rejected."""

    def __init__(
        self,
        state: int,
        symbol: str,
        kind: str,
        existing: ActionEntry,
        attempted: ActionEntry,
    ) -> None:
        if kind not in (SHIFT_REDUCE, REDUCE_REDUCE):
            raise ValueError("Unknown conflict kind %r" % kind)
        self.state = state
        self.symbol = symbol
        self.kind = kind
        self.existing = existing
        self.attempted = attempted

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Conflict):
            return (
                self.state == other.state
                and self.symbol == other.symbol
                and self.kind == other.kind
                and self.existing == other.existing
                and self.attempted == other.attempted
            )
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash((self.state, self.symbol, self.kind))

    def __repr__(self) -> str:
        return "Conflict(state %d, %r: %s, existing %r, attempted %r)" % (
            self.state,
            self.symbol,
            self.kind,
            self.existing,
            self.attempted,
        )


class ParsingTable:
    """
    The action and goto tables.  The tables conceptually contain one state
    per row, where each row contains one element per symbol; each row is
    actually a dictionary, and a missing entry means error.
    """

    def __init__(
        self,
        grammar: Grammar,
        action: Sequence[ActionState],
        goto: Sequence[GotoState],
        conflicts: Sequence[Conflict],
    ) -> None:
        assert len(action) == len(goto)
        self.terminals: Tuple[str, ...] = grammar.terminals + (EOI,)
        startSym = grammar.startProduction.head
        self.nonTerminals: Tuple[str, ...] = tuple(
            nt for nt in grammar.nonTerminals if nt != startSym
        )
        self._action = tuple(types.MappingProxyType(dict(a)) for a in action)
        self._goto = tuple(types.MappingProxyType(dict(g)) for g in goto)
        self._conflicts = tuple(conflicts)

    @property
    def nStates(self) -> int:
        return len(self._action)

    @property
    def conflicts(self) -> Tuple[Conflict, ...]:
        return self._conflicts

    @property
    def isSLR1(self) -> bool:
        return not self._conflicts

    def action(self, state: int, terminal: str) -> ActionEntry:
        return self._action[state].get(terminal, error)

    def goto(self, state: int, nonTerminal: str) -> Optional[int]:
        return self._goto[state].get(nonTerminal)

    def actionRow(self, state: int) -> Mapping[str, ActionEntry]:
        return self._action[state]

    def gotoRow(self, state: int) -> Mapping[str, int]:
        return self._goto[state]

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ParsingTable):
            return (
                self.terminals == other.terminals
                and self.nonTerminals == other.nonTerminals
                and [dict(a) for a in self._action]
                == [dict(a) for a in other._action]
                and [dict(g) for g in self._goto]
                == [dict(g) for g in other._goto]
                and self._conflicts == other._conflicts
            )
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash((self.terminals, self.nonTerminals, len(self._action)))

    def __repr__(self) -> str:
        lines = []
        for i in range(len(self._action)):
            lines.append("  State %d:" % i)
            lines.append("    Action:")
            for sym, act in self._action[i].items():
                conflict = "   "
                for c in self._conflicts:
                    if c.state == i and c.symbol == sym:
                        conflict = "XXX"
                        break
                lines.append("%s %15s : %r" % (conflict, sym, act))
            lines.append("    Goto:")
            for sym, target in self._goto[i].items():
                lines.append("    %15s : %r" % (sym, target))
        return "\n".join(lines)


def _conflictKind(existing: ActionEntry, attempted: ActionEntry) -> str:
    reductions = (ReduceAction, AcceptAction)
    if isinstance(existing, reductions) and isinstance(attempted, reductions):
        return REDUCE_REDUCE
    return SHIFT_REDUCE


# Set an action cell unless it is already occupied; the first writer wins
# and any different later entry is logged.
def _actionAppend(
    state: ActionState,
    stateId: int,
    sym: str,
    action: ActionEntry,
    conflicts: List[Conflict],
) -> None:
    existing = state.get(sym)
    if existing is None:
        state[sym] = action
    elif existing != action:
        conflicts.append(
            Conflict(
                stateId, sym, _conflictKind(existing, action), existing, action
            )
        )


def buildTable(
    grammar: Grammar,
    states: Sequence[State],
    follow: Mapping[str, FrozenSet[str]],
) -> ParsingTable:
    """
    Build the SLR(1) action/goto tables for an augmented grammar from its
    LR(0) states and FOLLOW sets."""
    if not grammar.augmented:
        raise GrammarSyntaxError(
            "The parsing table requires an augmented grammar"
        )

    terminals = grammar.terminals + (EOI,)
    startProd = grammar.startProduction
    actions: List[ActionState] = []
    gotos: List[GotoState] = []
    conflicts: List[Conflict] = []

    for s in states:
        # ==============================================================
        # _action.
        state: ActionState = {}
        actions.append(state)
        for item in s.items:
            prod = item.production
            sym = item.symbol
            # X ::= a*
            if sym is None:
                if prod.id == startProd.id:
                    _actionAppend(state, s.id, EOI, accept, conflicts)
                else:
                    lookahead = follow[prod.head]
                    for t in terminals:
                        if t in lookahead:
                            _actionAppend(
                                state, s.id, t, ReduceAction(prod), conflicts
                            )
            # X ::= a*tb
            elif grammar.isTerminal(sym):
                _actionAppend(
                    state,
                    s.id,
                    sym,
                    ShiftAction(s.transitions[sym]),
                    conflicts,
                )
        # =============================================================
        # _goto.
        gstate: GotoState = {}
        gotos.append(gstate)
        for nonterm in grammar.nonTerminals:
            target = s.transitions.get(nonterm)
            if target is not None:
                gstate[nonterm] = target

    return ParsingTable(grammar, actions, gotos, conflicts)
