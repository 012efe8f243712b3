from __future__ import annotations
from typing import (
    Iterable,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Tuple,
    Union,
    overload,
)

from slrparsing.ast import NodeArena
from slrparsing.errors import (
    ConflictError,
    GrammarSyntaxError,
    SimulationError,
)
from slrparsing.grammar import (
    EOI,
    EPSILON,
    AcceptAction,
    ActionEntry,
    Grammar,
    ReduceAction,
    ShiftAction,
    error,
    splitSymbols,
)
from slrparsing.table import ParsingTable

SHIFT = "Shift"
REDUCE = "Reduce"
ACCEPT = "Accept"
ERROR = "Error"


def normalizeInput(tokens: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    """A string is split on whitespace; any other iterable is taken as is."""
    if isinstance(tokens, str):
        return splitSymbols(tokens)
    return tuple(tokens)


class _StackEntry(NamedTuple):
    state: int
    symbol: Optional[str]
    node: Optional[int]


class ParseStep:
    """
    A full snapshot of one simulator iteration.  stack, symbolStack and
    remainingInput describe the configuration the action was chosen in;
    tableCell is the (state, token) cell that was consulted; forest lists
    the root node ids still on the stack after the action, bottom to top.
    symbolStack is aligned with stack and holds None for the bottom entry.
    """

    def __init__(
        self,
        index: int,
        stack: Tuple[int, ...],
        symbolStack: Tuple[Optional[str], ...],
        remainingInput: Tuple[str, ...],
        action: str,
        explanation: str,
        forest: Tuple[int, ...],
        tableCell: Tuple[int, str],
        entry: ActionEntry,
        error: Optional[SimulationError] = None,
    ) -> None:
        assert len(stack) == len(symbolStack)
        self.index = index
        self.stack = stack
        self.symbolStack = symbolStack
        self.remainingInput = remainingInput
        self.action = action
        self.explanation = explanation
        self.forest = forest
        self.tableCell = tableCell
        self.entry = entry
        self.error = error

    def __repr__(self) -> str:
        return "ParseStep(%d, stack=%r, input=%r, %s: %s)" % (
            self.index,
            self.stack,
            " ".join(self.remainingInput),
            self.action,
            self.explanation,
        )


class ParseTrace:
    """
    The ordered steps of one simulation run, together with the arena that
    owns every node referenced by the steps' forests.
    """

    def __init__(self, steps: Iterable[ParseStep], arena: NodeArena) -> None:
        self.steps: Tuple[ParseStep, ...] = tuple(steps)
        self.arena = arena

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[ParseStep]:
        return iter(self.steps)

    @overload
    def __getitem__(self, i: int) -> ParseStep:
        ...

    @overload
    def __getitem__(self, i: slice) -> Tuple[ParseStep, ...]:
        ...

    def __getitem__(
        self, i: Union[int, slice]
    ) -> Union[ParseStep, Tuple[ParseStep, ...]]:
        return self.steps[i]

    @property
    def last(self) -> ParseStep:
        return self.steps[-1]

    @property
    def accepted(self) -> bool:
        return self.last.action == ACCEPT

    @property
    def error(self) -> Optional[SimulationError]:
        return self.last.error

    def tree(self) -> Optional[int]:
        """Root node id of the parse tree, or None if input was rejected."""
        if not self.accepted:
            return None
        assert len(self.last.forest) == 1
        return self.last.forest[0]

    def render(self, step: Optional[int] = None) -> List[str]:
        """S-expression renderings of a step's forest (default: last)."""
        s = self.last if step is None else self.steps[step]
        return [self.arena.render(node) for node in s.forest]


class Simulator:
    """
    Table-driven shift-reduce simulation.  The Simulator uses an augmented
    grammar and the conflict-free ParsingTable built from it in order to
    parse a token sequence, recording every step.
    """

    def __init__(
        self, grammar: Grammar, table: ParsingTable, verbose: bool = False
    ) -> None:
        if not grammar.augmented:
            raise GrammarSyntaxError(
                "Simulation requires the augmented grammar"
            )
        if table.conflicts:
            raise ConflictError(
                "Grammar is not SLR(1): %d conflict%s in parsing table"
                % (len(table.conflicts), ("s", "")[len(table.conflicts) == 1])
            )
        self._grammar = grammar
        self._table = table
        self.verbose = verbose

    @property
    def table(self) -> ParsingTable:
        return self._table

    def simulate(self, tokens: Union[str, Iterable[str]]) -> ParseTrace:
        inp = normalizeInput(tokens) + (EOI,)
        end = len(inp) - 1
        arena = NodeArena()
        stack = [_StackEntry(0, None, None)]
        steps: List[ParseStep] = []
        pos = 0

        while True:
            top = stack[-1]
            token = inp[pos]
            # Only the appended marker ends the input.
            misplacedEOI = token == EOI and pos != end
            if misplacedEOI:
                entry: ActionEntry = error
            else:
                entry = self._table.action(top.state, token)
            snapshot = (
                tuple(e.state for e in stack),
                tuple(e.symbol for e in stack),
                inp[pos:],
            )
            if self.verbose:
                self._printStack(stack)
                print("INPUT: %s" % " ".join(inp[pos:]))
                print("   --> %r" % entry)

            err: Optional[SimulationError] = None
            if isinstance(entry, ShiftAction):
                node = arena.leaf(token, token)
                stack.append(_StackEntry(entry.nextState, token, node))
                pos += 1
                action = SHIFT
                explanation = "Shift '%s' and go to state %d" % (
                    token,
                    entry.nextState,
                )
            elif isinstance(entry, ReduceAction):
                action, explanation, err = self._reduce(stack, arena, entry)
            elif isinstance(entry, AcceptAction):
                action = ACCEPT
                explanation = "Accept: input derived from %s" % (
                    self._grammar.startProduction.body[0]
                )
            else:
                action = ERROR
                if misplacedEOI:
                    explanation = (
                        "End-of-input marker '%s' at input position %d is "
                        "not a valid token" % (EOI, pos)
                    )
                else:
                    expected = list(self._table.actionRow(top.state))
                    explanation = (
                        "No action for state %d on '%s'; expected one of: %s"
                        % (top.state, token, ", ".join(expected) or "nothing")
                    )
                err = SimulationError(explanation, top.state, token)

            steps.append(
                ParseStep(
                    len(steps),
                    snapshot[0],
                    snapshot[1],
                    snapshot[2],
                    action,
                    explanation,
                    tuple(e.node for e in stack[1:] if e.node is not None),
                    (top.state, token),
                    entry,
                    err,
                )
            )
            if action in (ACCEPT, ERROR):
                break

        return ParseTrace(steps, arena)

    # A failed goto leaves the stack untouched, so the Error step's forest
    # still lists the would-be children.
    def _reduce(
        self,
        stack: List[_StackEntry],
        arena: NodeArena,
        entry: ReduceAction,
    ) -> Tuple[str, str, Optional[SimulationError]]:
        production = self._grammar.production(entry.productionId)
        nRhs = len(production.body)
        base = len(stack) - nRhs
        top = stack[base - 1]
        target = self._table.goto(top.state, production.head)
        if target is None:
            explanation = "No goto entry for state %d on %s" % (
                top.state,
                production.head,
            )
            return (
                ERROR,
                explanation,
                SimulationError(explanation, top.state, production.head),
            )

        children = [e.node for e in stack[base:] if e.node is not None]
        assert len(children) == nRhs
        del stack[base:]
        if nRhs:
            node = arena.internal(production.head, children)
        else:
            node = arena.internal(production.head, (), EPSILON)
        stack.append(_StackEntry(target, production.head, node))
        return (
            REDUCE,
            "Reduce by %r: pop %d symbol%s, goto(%d, %s) = %d"
            % (
                production,
                nRhs,
                ("s", "")[nRhs == 1],
                top.state,
                production.head,
                target,
            ),
            None,
        )

    def _printStack(self, stack: List[_StackEntry]) -> None:
        print("STACK:", end=" ")
        for e in stack:
            print("%s" % (e.symbol or "-"), end=" ")
        print()
        print("      ", end=" ")
        for e in stack:
            width = len(e.symbol or "-")
            print(
                "%r%s" % (e.state, " " * (width - len("%r" % e.state))),
                end=" ",
            )
        print()
