"""
Parse tree nodes built by the simulator.  Nodes live in an arena scoped to
one simulation run and refer to their children by integer id.  A node is
never mutated after creation: a reduction creates a new parent node that
takes ownership of the popped children, so every snapshot of the forest
taken during the run stays valid.
"""

from __future__ import annotations
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from mypy_extensions import mypyc_attr

from slrparsing.grammar import EPSILON


@mypyc_attr(serializable=True, allow_interpreted_subclasses=True)
class ParseTreeNode:
    """
    Leaves are created by shifts and carry the token as value.  Internal
    nodes are created by reductions; a node for an empty production has no
    children and the value EPSILON.
    """

    __slots__ = ("id", "label", "value", "children")

    def __init__(
        self,
        id: int,
        label: str,
        value: Optional[str] = None,
        children: Iterable[int] = (),
    ) -> None:
        self.id = id
        self.label = label
        self.value = value
        self.children: Tuple[int, ...] = tuple(children)

    @property
    def isLeaf(self) -> bool:
        return not self.children

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ParseTreeNode):
            return (
                self.id == other.id
                and self.label == other.label
                and self.value == other.value
                and self.children == other.children
            )
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash((self.id, self.label, self.value, self.children))

    def __repr__(self) -> str:
        if self.children:
            return "ParseTreeNode(%d, %r, children=%r)" % (
                self.id,
                self.label,
                self.children,
            )
        return "ParseTreeNode(%d, %r, value=%r)" % (
            self.id,
            self.label,
            self.value,
        )


class NodeArena:
    """
    Append-only store of the nodes created during one simulation run.
    """

    def __init__(self) -> None:
        self._nodes: List[ParseTreeNode] = []

    def leaf(self, label: str, value: Optional[str] = None) -> int:
        node = ParseTreeNode(len(self._nodes), label, value)
        self._nodes.append(node)
        return node.id

    def internal(
        self, label: str, children: Iterable[int], value: Optional[str] = None
    ) -> int:
        node = ParseTreeNode(len(self._nodes), label, value, children)
        for child in node.children:
            assert child < node.id
        self._nodes.append(node)
        return node.id

    def __getitem__(self, id: int) -> ParseTreeNode:
        return self._nodes[id]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[ParseTreeNode]:
        return iter(self._nodes)

    def _renderLeaf(self, node: ParseTreeNode) -> str:
        if node.value is not None and node.value != node.label:
            return "(%s %s)" % (node.label, node.value)
        return node.value if node.value is not None else node.label

    def render(self, id: int) -> str:
        """
        S-expression rendering of the subtree rooted at id, e.g.
        "(E (T (F id)))".  Leaves render as their value.  Deep trees are
        walked with an explicit stack."""
        parts: List[str] = []
        todo: List[Tuple[int, bool]] = [(id, False)]
        while todo:
            nodeId, expanded = todo.pop()
            node = self._nodes[nodeId]
            if not node.children:
                parts.append(self._renderLeaf(node))
            elif expanded:
                # The children's renderings are the topmost parts.
                first = len(parts) - len(node.children)
                inner = " ".join(parts[first:])
                del parts[first:]
                parts.append("(%s %s)" % (node.label, inner))
            else:
                todo.append((nodeId, True))
                todo.extend(
                    (child, False) for child in reversed(node.children)
                )
        assert len(parts) == 1
        return parts[0]

    def leaves(self, id: int) -> List[str]:
        """
        The tokens under the subtree rooted at id, left to right.  Empty
        productions contribute nothing."""
        result: List[str] = []
        todo = [id]
        while todo:
            node = self._nodes[todo.pop()]
            if node.children:
                todo.extend(reversed(node.children))
            elif node.value != EPSILON:
                result.append(
                    node.value if node.value is not None else node.label
                )
        return result
