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
This module contains the classes that describe a context-free grammar, the
line-based grammar text reader, grammar augmentation, and the parsing table
action entries.
"""

from __future__ import annotations
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Tuple,
    Union,
)

import re

from mypy_extensions import mypyc_attr

from slrparsing.errors import GrammarSyntaxError

# <e>.
EPSILON = "ε"
# <$>.
EOI = "$"

# Spellings of the empty body in grammar text.
epsilonMarkers = frozenset((EPSILON, "epsilon"))
reservedSymbols = frozenset((EPSILON, "epsilon", EOI))

separator_re = re.compile(r"->|→|::=")


def splitSymbols(s: str) -> Tuple[str, ...]:
    return tuple(filter(None, re.split(r"\s+", s)))


class Production(NamedTuple):
    """
    One rewrite rule, head -> body.  Productions are immutable; ids are
    dense from 0 and equal the production's index in Grammar.productions.
    """

    id: int
    head: str
    body: Tuple[str, ...]

    def __repr__(self) -> str:
        return "%s -> %s" % (self.head, " ".join(self.body) or EPSILON)

    def item(self, dotPos: int) -> Item:
        return Item(self, dotPos)


class Item:
    """
    LR(0) item: a production with a dot marking how much of the body has
    been matched.  Two items are equal iff production id and dot position
    are equal.
    """

    __slots__ = ("production", "dotPos")

    def __init__(self, production: Production, dotPos: int) -> None:
        if not 0 <= dotPos <= len(production.body):
            raise ValueError(
                "Dot position %d out of range for %r" % (dotPos, production)
            )
        self.production = production
        self.dotPos = dotPos

    @property
    def productionId(self) -> int:
        return self.production.id

    @property
    def key(self) -> Tuple[int, int]:
        return (self.production.id, self.dotPos)

    # Symbol immediately after the dot, or None for a complete item.
    @property
    def symbol(self) -> Optional[str]:
        body = self.production.body
        if self.dotPos < len(body):
            return body[self.dotPos]
        return None

    @property
    def isComplete(self) -> bool:
        return self.dotPos == len(self.production.body)

    def advance(self) -> Item:
        return Item(self.production, self.dotPos + 1)

    def __hash__(self) -> int:
        return hash(self.key)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Item):
            return self.key == other.key
        else:
            return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, Item):
            return self.key < other.key
        else:
            return NotImplemented

    def __repr__(self) -> str:
        strs = ["[%s ->" % self.production.head]
        body = self.production.body
        for i, sym in enumerate(body):
            if i == self.dotPos:
                strs.append(" •")
            strs.append(" %s" % sym)
        if self.dotPos == len(body):
            strs.append(" •")
        strs.append("]")
        return "".join(strs)


class Grammar:
    """
    An ordered list of productions together with the symbol sets they
    induce.  Non-terminals are the production heads, terminals are all other
    symbols referenced in bodies; both keep the order in which symbols first
    appear, which fixes the symbol alphabet order used by later stages.
    """

    def __init__(
        self, productions: Iterable[Production], augmented: bool = False
    ) -> None:
        self.productions: Tuple[Production, ...] = tuple(productions)
        self.augmented = augmented

        nonTerminals: Dict[str, None] = {}
        for i, prod in enumerate(self.productions):
            if prod.id != i:
                raise GrammarSyntaxError(
                    "Production ids must be dense from 0: %r has id %d"
                    % (prod, prod.id)
                )
            if prod.head in reservedSymbols:
                raise GrammarSyntaxError(
                    "Reserved symbol used as production head: %r" % (prod,)
                )
            nonTerminals.setdefault(prod.head)
        terminals: Dict[str, None] = {}
        for prod in self.productions:
            for sym in prod.body:
                if sym in reservedSymbols:
                    raise GrammarSyntaxError(
                        "Reserved symbol used in production body: %r"
                        % (prod,)
                    )
                if sym not in nonTerminals:
                    terminals.setdefault(sym)

        self.terminals: Tuple[str, ...] = tuple(terminals)
        self.nonTerminals: Tuple[str, ...] = tuple(nonTerminals)
        self._terminalSet = frozenset(self.terminals)
        self._nonTerminalSet = frozenset(self.nonTerminals)
        self._byHead: Dict[str, List[Production]] = {}
        for prod in self.productions:
            self._byHead.setdefault(prod.head, []).append(prod)

        if augmented and not self.productions:
            raise GrammarSyntaxError("Augmented grammar has no productions")

    @property
    def startSymbol(self) -> Optional[str]:
        if self.productions:
            return self.productions[0].head
        return None

    # Augmented grammars only: the S' -> S production.
    @property
    def startProduction(self) -> Production:
        assert self.augmented
        return self.productions[0]

    @property
    def symbols(self) -> Tuple[str, ...]:
        return self.terminals + self.nonTerminals

    def isTerminal(self, sym: str) -> bool:
        return sym in self._terminalSet

    def isNonTerminal(self, sym: str) -> bool:
        return sym in self._nonTerminalSet

    def production(self, productionId: int) -> Production:
        return self.productions[productionId]

    def productionsFor(self, head: str) -> Tuple[Production, ...]:
        return tuple(self._byHead.get(head, ()))

    def __len__(self) -> int:
        return len(self.productions)

    def __iter__(self) -> Iterator[Production]:
        return iter(self.productions)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Grammar):
            return (
                self.productions == other.productions
                and self.augmented == other.augmented
            )
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash((self.productions, self.augmented))

    def __repr__(self) -> str:
        lines = ["%d: %r" % (prod.id, prod) for prod in self.productions]
        return "\n".join(lines)


# ============================================================================
# Grammar text.
#
def _alternatives(s: str, line: int) -> List[Tuple[str, ...]]:
    result = []
    for alt in s.split("|"):
        body = tuple(
            sym for sym in splitSymbols(alt) if sym not in epsilonMarkers
        )
        if EOI in body:
            raise GrammarSyntaxError(
                "End-of-input marker %r used in a production body" % EOI,
                line,
            )
        result.append(body)
    return result


def parseGrammar(text: str) -> Grammar:
    """
    Read grammar text: one rule per line, head and body separated by "->"
    (or "→", "::="), alternatives separated by "|", symbols separated by
    whitespace.  An empty body is written as "ε" or "epsilon".  A line
    starting with "|" adds alternatives to the previous rule.

        E -> E + T | T
        T -> T * F
           | F
        F -> ( E ) | id

    Lines without a separator are ignored, so text that contains no
    separator at all yields a grammar with zero productions.  Callers must
    treat that as invalid input; augmentGrammar() refuses it.
    """
    rules: List[Tuple[str, List[Tuple[str, ...]]]] = []
    for line, raw in enumerate(text.splitlines(), 1):
        s = raw.strip()
        if s.startswith("|"):
            if rules:
                rules[-1][1].extend(_alternatives(s[1:], line))
            continue
        m = separator_re.search(s)
        if m is None:
            continue

        headToks = splitSymbols(s[: m.start()])
        if len(headToks) != 1:
            raise GrammarSyntaxError(
                "Expected exactly one head symbol, got %r"
                % " ".join(headToks),
                line,
            )
        head = headToks[0]
        if head in reservedSymbols:
            raise GrammarSyntaxError(
                "Reserved symbol %r used as production head" % head, line
            )
        rules.append((head, _alternatives(s[m.end():], line)))

    productions: List[Production] = []
    for head, bodies in rules:
        for body in bodies:
            productions.append(Production(len(productions), head, body))
    return Grammar(productions)


def augmentGrammar(grammar: Grammar) -> Grammar:
    """
    Return a new grammar with a fresh start production S' -> S prepended.
    The original productions are renumbered so that ids stay dense.
    """
    if grammar.augmented:
        raise GrammarSyntaxError("Grammar is already augmented")
    start = grammar.startSymbol
    if start is None:
        raise GrammarSyntaxError(
            "Grammar has no productions; at least one rule using '->' "
            "notation is required"
        )

    taken = set(grammar.symbols)
    newStart = start + "'"
    while newStart in taken:
        newStart += "'"

    productions = [Production(0, newStart, (start,))]
    for prod in grammar.productions:
        productions.append(Production(prod.id + 1, prod.head, prod.body))
    return Grammar(productions, augmented=True)


# ============================================================================
# Parsing table entries.
#
@mypyc_attr(allow_interpreted_subclasses=True)
class Action:
    """
    Abstract base class, subclassed by {Shift,Reduce,Accept,Error}Action.
    Every concrete class carries a kind tag."""

    kind = ""

    def __init__(self) -> None:
        pass

    def __hash__(self) -> int:
        return hash(self.kind)

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self)


class ShiftAction(Action):
    """
    Shift action, with associated nextState."""

    kind = "shift"

    def __init__(self, nextState: int) -> None:
        super().__init__()
        self.nextState = nextState

    def __repr__(self) -> str:
        return "[shift %r]" % self.nextState

    def __hash__(self) -> int:
        return hash((self.kind, self.nextState))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ShiftAction):
            return False
        if self.nextState != other.nextState:
            return False
        return True


class ReduceAction(Action):
    """
    Reduce action, with associated production."""

    kind = "reduce"

    def __init__(self, production: Production) -> None:
        super().__init__()
        self.production = production

    @property
    def productionId(self) -> int:
        return self.production.id

    def __repr__(self) -> str:
        return "[reduce %r]" % (self.production,)

    def __hash__(self) -> int:
        return hash((self.kind, self.production.id))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ReduceAction):
            return False
        if self.production != other.production:
            return False
        return True


class AcceptAction(Action):
    kind = "accept"

    def __repr__(self) -> str:
        return "[accept]"


class ErrorAction(Action):
    kind = "error"

    def __repr__(self) -> str:
        return "[error]"


accept = AcceptAction()
error = ErrorAction()

ActionEntry = Union[ShiftAction, ReduceAction, AcceptAction, ErrorAction]
