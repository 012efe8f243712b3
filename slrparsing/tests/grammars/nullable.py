# Nullable sequence: FOLLOW(A) must see through the empty production.
GRAMMAR = """
S -> A B
A -> a A | ε
B -> b
"""

INPUT = "a b"

TREE = "(S (A a (A ε)) (B b))"
