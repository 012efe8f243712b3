# Not LR(0), but FOLLOW(A) = {a} and FOLLOW(B) = {b} keep the two
# reductions after "c" apart, so the grammar is SLR(1).
GRAMMAR = """
S -> A a | B b
A -> c
B -> c
"""

INPUT = "c a"

TREE = "(S (A c) a)"
