"""
The classes in this module are used to compute the canonical LR(0)
automaton: the collection of LR(0) item sets, connected by goto transitions.
"""
from __future__ import annotations
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
)

import types

from slrparsing.errors import GrammarSyntaxError
from slrparsing.grammar import Grammar, Item


class ItemSet:
    """
    A set of LR(0) items.  Items are kept in the order they were added (the
    kernel first, then closure items), which is the order used for display
    and table construction.  Identity is set identity: two item sets are
    equal iff their canonical keys, the sorted (productionId, dotPos) pairs,
    are equal.
    """

    def __init__(self, items: Iterable[Item]) -> None:
        self._items: Tuple[Item, ...] = tuple(dict.fromkeys(items))
        self.key: Tuple[Tuple[int, int], ...] = tuple(
            sorted(item.key for item in self._items)
        )
        self._hash = hash(self.key)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ItemSet):
            return self.key == other.key
        else:
            return NotImplemented

    @property
    def kernel(self) -> Tuple[Item, ...]:
        # The augmented start item is the only kernel item with dot at 0.
        return tuple(
            item
            for item in self._items
            if item.dotPos > 0 or item.production.id == 0
        )

    def __repr__(self) -> str:
        return "ItemSet(%s)" % ", ".join("%r" % item for item in self._items)


def closure(grammar: Grammar, items: Iterable[Item]) -> ItemSet:
    # Iterate over the items until no more can be added to the closure.
    worklist = list(dict.fromkeys(items))
    seen = set(worklist)
    i = 0
    while i < len(worklist):
        sym = worklist[i].symbol
        if sym is not None and grammar.isNonTerminal(sym):
            for prod in grammar.productionsFor(sym):
                tItem = prod.item(0)
                if tItem not in seen:
                    seen.add(tItem)
                    worklist.append(tItem)
        i += 1
    return ItemSet(worklist)


def goto(grammar: Grammar, itemSet: ItemSet, sym: str) -> Optional[ItemSet]:
    """
    Closure of the items of itemSet with the dot moved over sym, or None if
    no item of itemSet expects sym."""
    kernel = [item.advance() for item in itemSet if item.symbol == sym]
    if not kernel:
        return None
    return closure(grammar, kernel)


class State:
    """
    One automaton state: an item set, its id (dense, in discovery order),
    and its outgoing transitions in symbol-alphabet order."""

    def __init__(
        self, id: int, items: ItemSet, transitions: Mapping[str, int]
    ) -> None:
        self.id = id
        self.items = items
        self._transitions = types.MappingProxyType(dict(transitions))

    @property
    def transitions(self) -> Mapping[str, int]:
        return self._transitions

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, State):
            return (
                self.id == other.id
                and self.items == other.items
                and dict(self._transitions) == dict(other._transitions)
            )
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash((self.id, self.items))

    def __repr__(self) -> str:
        lines = ["State %d:" % self.id]
        for item in self.items:
            lines.append("    %r" % item)
        for sym, target in self._transitions.items():
            lines.append("    %s -> %d" % (sym, target))
        return "\n".join(lines)


def buildAutomaton(grammar: Grammar) -> List[State]:
    """
    Compute the canonical collection of LR(0) item sets for an augmented
    grammar.  States are numbered in discovery order: state 0 is the closure
    of the augmented start item, and the worklist is processed first-in
    first-out over the symbol alphabet (terminals, then non-terminals, each
    in grammar order), so numbering is reproducible."""
    if not grammar.augmented:
        raise GrammarSyntaxError(
            "The LR(0) automaton requires an augmented grammar"
        )

    tItemSet = closure(grammar, (grammar.startProduction.item(0),))
    itemSets = [tItemSet]
    # Maps canonical item sets to state ids.
    itemSetsHash: Dict[ItemSet, int] = {tItemSet: 0}
    transitions: List[Dict[str, int]] = [{}]

    syms = grammar.symbols
    worklist = [0]
    while worklist:
        i = worklist.pop(0)
        itemSet = itemSets[i]
        for sym in syms:
            gotoSet = goto(grammar, itemSet, sym)
            if gotoSet is None:
                continue
            j = itemSetsHash.get(gotoSet)
            if j is None:
                j = len(itemSets)
                itemSets.append(gotoSet)
                itemSetsHash[gotoSet] = j
                transitions.append({})
                worklist.append(j)
            transitions[i][sym] = j

    return [
        State(i, itemSets[i], transitions[i]) for i in range(len(itemSets))
    ]
