# Dangling else: shift/reduce conflict on "e" after "i S".
GRAMMAR = """
S -> i S e S | i S | a
"""
