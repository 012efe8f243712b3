import unittest

import slrparsing
from slrparsing.automaton import ItemSet, closure, goto


def augmented(text):
    return slrparsing.augmentGrammar(slrparsing.parseGrammar(text))


class TestItemSet(unittest.TestCase):
    def test_order_independent_identity(self):
        g = augmented("S -> a S | b")
        i1 = g.production(1).item(1)
        i2 = g.production(2).item(0)
        a = ItemSet([i1, i2])
        b = ItemSet([i2, i1, i2])
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertEqual(len(b), 2)
        self.assertEqual(a.key, ((1, 1), (2, 0)))
        # Insertion order is kept for display.
        self.assertEqual(list(b), [i2, i1])
        self.assertNotEqual(a, ItemSet([i1]))


class TestClosureGoto(unittest.TestCase):
    def test_closure(self):
        from slrparsing.tests.grammars import expr

        g = augmented(expr.GRAMMAR)
        items = closure(g, [g.startProduction.item(0)])
        self.assertEqual(
            [repr(i) for i in items],
            [
                "[E' -> • E]",
                "[E -> • E + T]",
                "[E -> • T]",
                "[T -> • T * F]",
                "[T -> • F]",
                "[F -> • ( E )]",
                "[F -> • id]",
            ],
        )
        self.assertEqual(items.kernel, (g.startProduction.item(0),))

    def test_goto(self):
        from slrparsing.tests.grammars import expr

        g = augmented(expr.GRAMMAR)
        i0 = closure(g, [g.startProduction.item(0)])
        self.assertIsNone(goto(g, i0, "+"))
        self.assertIsNone(goto(g, i0, ")"))
        i3 = goto(g, i0, "E")
        self.assertEqual(
            [repr(i) for i in i3], ["[E' -> E •]", "[E -> E • + T]"]
        )
        # ( E ) re-enters the whole expression grammar.
        i1 = goto(g, i0, "(")
        self.assertEqual(len(i1), 7)
        self.assertEqual(goto(g, i1, "("), i1)

    def test_closure_of_empty_production(self):
        from slrparsing.tests.grammars import nullable

        g = augmented(nullable.GRAMMAR)
        items = closure(g, [g.startProduction.item(0)])
        self.assertEqual(
            [repr(i) for i in items],
            [
                "[S' -> • S]",
                "[S -> • A B]",
                "[A -> • a A]",
                "[A -> •]",
            ],
        )


class TestAutomaton(unittest.TestCase):
    def test_expression(self):
        from slrparsing.tests.grammars import expr

        g = augmented(expr.GRAMMAR)
        states = slrparsing.buildAutomaton(g)
        self.assertEqual(len(states), 12)
        self.assertEqual([s.id for s in states], list(range(12)))
        self.assertEqual(
            list(states[0].transitions.items()),
            [("(", 1), ("id", 2), ("E", 3), ("T", 4), ("F", 5)],
        )
        self.assertEqual(
            dict(states[1].transitions),
            {"(": 1, "id": 2, "E": 6, "T": 4, "F": 5},
        )
        self.assertEqual(dict(states[3].transitions), {"+": 7})
        self.assertEqual(dict(states[4].transitions), {"*": 8})
        self.assertEqual(dict(states[6].transitions), {"+": 7, ")": 9})
        self.assertEqual(
            dict(states[7].transitions), {"(": 1, "id": 2, "T": 10, "F": 5}
        )
        self.assertEqual(
            dict(states[8].transitions), {"(": 1, "id": 2, "F": 11}
        )
        self.assertEqual(dict(states[10].transitions), {"*": 8})
        for i in [2, 5, 9, 11]:
            self.assertEqual(dict(states[i].transitions), {})
        self.assertEqual(
            [repr(i) for i in states[11].items], ["[T -> T * F •]"]
        )

    def test_states_are_unique(self):
        from slrparsing.tests.grammars import switch

        states = slrparsing.buildAutomaton(augmented(switch.GRAMMAR))
        keys = [s.items.key for s in states]
        self.assertEqual(len(keys), len(set(keys)))
        for s in states:
            for target in s.transitions.values():
                self.assertLess(target, len(states))

    def test_transitions_read_only(self):
        states = slrparsing.buildAutomaton(augmented("S -> a"))
        with self.assertRaises(TypeError):
            states[0].transitions["a"] = 0

    def test_requires_augmented(self):
        g = slrparsing.parseGrammar("S -> a")
        self.assertRaises(
            slrparsing.GrammarSyntaxError, slrparsing.buildAutomaton, g
        )

    def test_deterministic(self):
        from slrparsing.tests.grammars import expr

        a = slrparsing.buildAutomaton(augmented(expr.GRAMMAR))
        b = slrparsing.buildAutomaton(augmented(expr.GRAMMAR))
        self.assertEqual(a, b)


if __name__ == "__main__":
    unittest.main()
