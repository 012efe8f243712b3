"""
The Analysis class runs the whole pipeline for one grammar: text ->
grammar -> augmented grammar -> FIRST/FOLLOW -> LR(0) automaton -> SLR(1)
table.  It holds every intermediate result read-only, and simulates token
sequences against the table.
"""
from __future__ import annotations
from typing import Iterable, List, Optional, Tuple, Union

import sys
import time

from slrparsing.automaton import State, buildAutomaton
from slrparsing.errors import GrammarSyntaxError
from slrparsing.firstfollow import FirstFollowSets, computeFirstFollow
from slrparsing.grammar import Grammar, augmentGrammar, parseGrammar
from slrparsing.lrparser import ParseTrace, Simulator
from slrparsing.table import Conflict, ParsingTable, buildTable


def _plural(n: int) -> str:
    return ("s", "")[n == 1]


class Analysis:
    """
    The Analysis class contains the read-only results of every pipeline
    stage.  Building an Analysis is deterministic: the same grammar text
    always yields the same production ids, state ids, table and conflicts.

    source : Grammar text, or an already parsed (non-augmented) Grammar.

    verbose : If true, print progress information while generating the
              parsing tables.

    logFile : The path of a file to store a human-readable copy of the
              grammar, FIRST/FOLLOW sets, item sets and parsing tables in.
    """

    def __init__(
        self,
        source: Union[str, Grammar],
        verbose: bool = False,
        logFile: Optional[str] = None,
    ) -> None:
        self._verbose = verbose
        if self._verbose:
            start = time.monotonic()
            print("slrparsing.Analysis: Reading grammar...")

        if isinstance(source, Grammar):
            grammar = source
        else:
            grammar = parseGrammar(source)
        if len(grammar) == 0:
            raise GrammarSyntaxError(
                "Invalid grammar: please provide at least one production "
                "rule using '->' notation"
            )
        self._grammar = grammar

        if self._verbose:
            nterms = len(grammar.terminals)
            nnonterms = len(grammar.nonTerminals)
            nprods = len(grammar)
            print(
                "slrparsing.Analysis: %d terminal%s, %d non-terminal%s, "
                "%d production%s"
                % (
                    nterms,
                    _plural(nterms),
                    nnonterms,
                    _plural(nnonterms),
                    nprods,
                    _plural(nprods),
                )
            )

        self._augmented = augmentGrammar(grammar)
        self._sets = computeFirstFollow(self._augmented)
        self._states = tuple(buildAutomaton(self._augmented))
        if self._verbose:
            print(
                "slrparsing.Analysis: %d LR(0) state%s"
                % (len(self._states), _plural(len(self._states)))
            )
        self._table = buildTable(
            self._augmented, self._states, self._sets.follow
        )

        try:
            self._validate(logFile)
        finally:
            if self._verbose:
                print(
                    "slrparsing.Analysis: SLR(1) table generation took "
                    f"{(time.monotonic() - start) * 1000:.1f} milliseconds"
                )
                sys.stdout.flush()

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def augmented(self) -> Grammar:
        return self._augmented

    @property
    def sets(self) -> FirstFollowSets:
        return self._sets

    @property
    def states(self) -> Tuple[State, ...]:
        return self._states

    @property
    def table(self) -> ParsingTable:
        return self._table

    @property
    def conflicts(self) -> Tuple[Conflict, ...]:
        return self._table.conflicts

    @property
    def isSLR1(self) -> bool:
        return self._table.isSLR1

    def simulator(self, verbose: Optional[bool] = None) -> Simulator:
        """
        A Simulator for this grammar.  Raises ConflictError if the table
        has conflicts, since deterministic simulation is then undefined."""
        if verbose is None:
            verbose = self._verbose
        return Simulator(self._augmented, self._table, verbose)

    def simulate(self, tokens: Union[str, Iterable[str]]) -> ParseTrace:
        return self.simulator().simulate(tokens)

    def conflictReport(self, limit: int = 5) -> str:
        conflicts = self._table.conflicts
        if not conflicts:
            return "Grammar is SLR(1): no conflicts."
        lines = [
            "Grammar is NOT suitable for SLR(1) parsing: %d conflict%s"
            % (len(conflicts), _plural(len(conflicts)))
        ]
        for c in conflicts[:limit]:
            lines.append(
                "  State I%d, symbol '%s': %s conflict "
                "(existing %r, attempted %r)"
                % (c.state, c.symbol, c.kind, c.existing, c.attempted)
            )
        if len(conflicts) > limit:
            lines.append("  ...and %d more." % (len(conflicts) - limit))
        return "\n".join(lines)

    # Report conflicts and write the human-readable dump, if requested.
    # Conflicts are not fatal; the caller decides whether to simulate.
    def _validate(self, logFile: Optional[str]) -> None:
        if logFile is not None:
            with open(logFile, "w+") as f:
                if self._verbose:
                    print(
                        "slrparsing.Analysis: Writing log to '%s'..." % logFile
                    )
                f.write("%r\n" % self)

        if self._verbose:
            print("slrparsing.Analysis: %s" % self.conflictReport())

    def __repr__(self) -> str:
        lines: List[str] = []

        lines.append("Grammar:")
        for prod in self._grammar:
            lines.append("  %d: %r" % (prod.id, prod))
        lines.append("Augmented grammar:")
        for prod in self._augmented:
            lines.append("  %d: %r" % (prod.id, prod))

        lines.append("Terminals: %s" % " ".join(self._augmented.terminals))
        lines.append(
            "Non-terminals: %s" % " ".join(self._augmented.nonTerminals)
        )
        for line in repr(self._sets).splitlines():
            lines.append("  %s" % line)

        lines.append("Item sets:")
        for state in self._states:
            for line in repr(state).splitlines():
                lines.append("  %s" % line)

        nstates = len(self._states)
        lines.append(
            "slrparsing.Analysis: %d state%s, %d conflict%s"
            % (
                nstates,
                _plural(nstates),
                len(self.conflicts),
                _plural(len(self.conflicts)),
            )
        )
        if self.isSLR1:
            lines.append("Algorithm compatibility: SLR(1)")
        else:
            lines.append("Algorithm compatibility: None, due to conflicts")
        lines.append("Parsing tables:")
        lines.append(repr(self._table))
        return "\n".join(lines)


def analyze(
    source: Union[str, Grammar],
    tokens: Union[str, Iterable[str], None] = None,
    verbose: bool = False,
    logFile: Optional[str] = None,
) -> Tuple[Analysis, Optional[ParseTrace]]:
    """
    Run the pipeline, and simulate tokens if given.  The trace is None when
    no tokens were given or when the table has conflicts; parse failures
    (GrammarSyntaxError) propagate."""
    analysis = Analysis(source, verbose=verbose, logFile=logFile)
    if tokens is None or not analysis.isSLR1:
        return analysis, None
    return analysis, analysis.simulate(tokens)
