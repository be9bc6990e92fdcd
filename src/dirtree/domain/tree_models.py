from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the multi-child tree used to mirror a scanned directory hierarchy.
Each node owns its children through an append-only Child List; siblings are
chained through a singly linked 'next_sibling' reference.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional

from dirtree.domain.errors import AllocationFailure

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class ChildList:
    """
    Ordered, append-only sequence of a node's direct children.

    Attributes:
        first: First appended child, or None when empty.
        last: Most recently appended child, or None when empty.
    """
    first: Optional["TreeNode"] = None
    last: Optional["TreeNode"] = None

    def __iter__(self) -> Iterator["TreeNode"]:
        current = self.first
        while current is not None:
            yield current
            current = current.next_sibling

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def is_empty(self) -> bool:
        return self.first is None

    def clear(self) -> None:
        self.first = None
        self.last = None


@dataclass(eq=False)
class TreeNode:
    """
    A single filesystem entry in the scanned tree.

    Attributes:
        path: Absolute path of the entry, including its name.
        level: Depth of the node (root = 1).
        next_sibling: Next child of the same parent, in read order.
        children: Owned list of direct children.
    """
    path: str
    level: int
    next_sibling: Optional["TreeNode"] = None
    children: ChildList = field(default_factory=ChildList)


# -----------------------------------------------------------------------------
# CONSTRUCTION API
# -----------------------------------------------------------------------------

def create_node(path: str, level: int) -> TreeNode:
    """
    Create a detached node with an empty Child List and no sibling.

    Raises:
        AllocationFailure: If the interpreter cannot allocate the node.
    """
    try:
        return TreeNode(path=path, level=level)
    except MemoryError as e:
        raise AllocationFailure(f"Unable to allocate tree node for '{path}'") from e


def append_child(parent: TreeNode, child: TreeNode) -> None:
    """Graft 'child' at the end of the parent's Child List in O(1)."""
    children = parent.children
    if children.first is None and children.last is None:
        children.first = child
        children.last = child
        return

    children.last.next_sibling = child
    children.last = child
