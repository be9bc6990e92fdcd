from __future__ import annotations

"""
FIFO Queue Data Models.

A singly linked, tail-referencing queue of tree node references. The queue
owns its QueueNode wrappers but never the TreeNode instances they point to;
the tree remains the single owner of every node.
"""

from dataclasses import dataclass
from typing import Optional

from dirtree.domain.errors import AllocationFailure, EmptyQueueUnderflow
from dirtree.domain.tree_models import TreeNode


@dataclass(eq=False)
class QueueNode:
    """
    Transient wrapper linking a tree node into a queue.

    Attributes:
        node: Borrowed reference to the wrapped tree node.
        next_out: Wrapper that leaves the queue right after this one.
    """
    node: TreeNode
    next_out: Optional["QueueNode"] = None


class FifoQueue:
    """First-in first-out queue with O(1) enqueue and dequeue."""

    def __init__(self) -> None:
        self.head: Optional[QueueNode] = None
        self.tail: Optional[QueueNode] = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"FifoQueue(size={self._size})"

    def is_empty(self) -> bool:
        return self.head is None

    def enqueue(self, node: TreeNode) -> None:
        """Wrap 'node' and append it at the tail."""
        try:
            q_node = QueueNode(node=node)
        except MemoryError as e:
            raise AllocationFailure("Unable to allocate queue node") from e

        if self.tail is None:
            self.head = q_node
            self.tail = q_node
        else:
            self.tail.next_out = q_node
            self.tail = q_node
        self._size += 1

    def dequeue(self) -> QueueNode:
        """
        Detach and return the head wrapper.

        Raises:
            EmptyQueueUnderflow: If the queue holds no elements.
        """
        if self.head is None:
            raise EmptyQueueUnderflow("dequeue from an empty queue")

        q_node = self.head
        if self.head is self.tail:
            # Final element: the queue becomes empty
            self.head = None
            self.tail = None
        else:
            self.head = q_node.next_out

        q_node.next_out = None
        self._size -= 1
        return q_node
