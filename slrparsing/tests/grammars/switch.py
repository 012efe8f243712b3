# Left-recursive list with an empty base case.
GRAMMAR = """
S -> switch id { CaseList }
CaseList -> CaseList case id : S
CaseList -> ε
"""

INPUT = "switch id { case id : switch id { } }"

TREE = (
    "(S switch id { (CaseList (CaseList ε) case id : "
    "(S switch id { (CaseList ε) })) })"
)
