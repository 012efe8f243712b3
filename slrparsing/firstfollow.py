"""
FIRST and FOLLOW set computation.  Both sets are computed by iterating over
the whole production list until no set changes.  The iteration is exposed as
generators that yield a snapshot after every pass, so that callers can watch
the fixed point being approached; computeFirst() and computeFollow() simply
drain them.
"""
from __future__ import annotations
from typing import (
    Dict,
    FrozenSet,
    Iterator,
    Mapping,
    Optional,
    Sequence,
    Set,
)

from slrparsing.grammar import EOI, EPSILON, Grammar

SetMap = Dict[str, FrozenSet[str]]


def _freeze(sets: Mapping[str, Set[str]]) -> SetMap:
    return {sym: frozenset(s) for sym, s in sets.items()}


def firstOfSequence(
    first: Mapping[str, FrozenSet[str]], symbols: Sequence[str]
) -> FrozenSet[str]:
    """
    FIRST of a symbol string.  Contains EPSILON iff every symbol in the
    string is nullable (in particular for the empty string)."""
    result: Set[str] = set()
    for sym in symbols:
        symFirst = first[sym]
        result.update(symFirst)
        if EPSILON not in symFirst:
            result.discard(EPSILON)
            return frozenset(result)
        result.discard(EPSILON)
    result.add(EPSILON)
    return frozenset(result)


def firstSetPasses(grammar: Grammar) -> Iterator[SetMap]:
    # first(X) is X for terminals.
    first: Dict[str, Set[str]] = {sym: {sym} for sym in grammar.terminals}
    for sym in grammar.nonTerminals:
        first[sym] = set()

    # Repeat the following loop until no more symbols can be added to any
    # first set.
    done = False
    while not done:
        done = True
        for prod in grammar.productions:
            target = first[prod.head]
            oldLen = len(target)
            # Merge the first sets of the body into the head's, until a
            # symbol whose first set does not contain epsilon.  Merge
            # epsilon itself if the whole body is nullable.
            nullable = True
            for sym in prod.body:
                symFirst = first[sym]
                target.update(symFirst - {EPSILON})
                if EPSILON not in symFirst:
                    nullable = False
                    break
            if nullable:
                target.add(EPSILON)
            if len(target) != oldLen:
                done = False
        yield _freeze(first)


def followSetPasses(
    grammar: Grammar, first: Optional[SetMap] = None
) -> Iterator[SetMap]:
    if first is None:
        first = computeFirst(grammar)

    follow: Dict[str, Set[str]] = {sym: set() for sym in grammar.nonTerminals}
    if grammar.startSymbol is not None:
        follow[grammar.startSymbol].add(EOI)

    done = False
    while not done:
        done = True
        for prod in grammar.productions:
            # Every occurrence of a non-terminal B in A ::= aBb is handled
            # separately.
            for i, sym in enumerate(prod.body):
                if not grammar.isNonTerminal(sym):
                    continue
                target = follow[sym]
                oldLen = len(target)
                rest = firstOfSequence(first, prod.body[i + 1 :])
                target.update(rest - {EPSILON})
                # b is empty or nullable: merge follow(A) into follow(B).
                if EPSILON in rest:
                    target.update(follow[prod.head])
                if len(target) != oldLen:
                    done = False
        yield _freeze(follow)


def _drain(passes: Iterator[SetMap]) -> SetMap:
    result: SetMap = {}
    for result in passes:
        pass
    return result


def computeFirst(grammar: Grammar) -> SetMap:
    return _drain(firstSetPasses(grammar))


def computeFollow(grammar: Grammar, first: Optional[SetMap] = None) -> SetMap:
    return _drain(followSetPasses(grammar, first))


class FirstFollowSets:
    """
    FIRST sets for every grammar symbol, FOLLOW sets for every
    non-terminal.  FIRST may contain EPSILON (nullable); FOLLOW never does,
    but may contain EOI."""

    def __init__(self, first: SetMap, follow: SetMap) -> None:
        self.first = first
        self.follow = follow

    def firstOf(self, symbols: Sequence[str]) -> FrozenSet[str]:
        return firstOfSequence(self.first, symbols)

    def nullable(self, sym: str) -> bool:
        return EPSILON in self.first[sym]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FirstFollowSets):
            return self.first == other.first and self.follow == other.follow
        else:
            return NotImplemented

    def __repr__(self) -> str:
        lines = []
        for sym, s in self.first.items():
            lines.append("FIRST(%s) = {%s}" % (sym, ", ".join(sorted(s))))
        for sym, s in self.follow.items():
            lines.append("FOLLOW(%s) = {%s}" % (sym, ", ".join(sorted(s))))
        return "\n".join(lines)


def computeFirstFollow(grammar: Grammar) -> FirstFollowSets:
    first = computeFirst(grammar)
    return FirstFollowSets(first, computeFollow(grammar, first))
