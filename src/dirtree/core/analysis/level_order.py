from __future__ import annotations

"""
Level-Order Linearizer.

Flattens a scanned tree into a single FIFO queue in breadth-first order using
two cooperating queues: the print queue receives every visited node, while
the work queue holds nodes discovered but not yet visited.
"""

import logging
from typing import Optional

from dirtree.domain.errors import EmptyQueueUnderflow
from dirtree.domain.queue_models import FifoQueue
from dirtree.domain.tree_models import TreeNode

logger = logging.getLogger(__name__)


def create_print_queue(root: Optional[TreeNode]) -> FifoQueue:
    """
    Traverse the tree level by level and enqueue each node.

    All nodes at depth d precede the nodes at depth d+1 and sibling order is
    kept within a depth.

    Args:
        root: Root of the tree to linearize. None yields an empty queue.

    Returns:
        FifoQueue: Queue holding every node in level order.
    """
    print_queue = FifoQueue()
    work_queue = FifoQueue()
    current = root

    while current is not None:
        print_queue.enqueue(current)
        for child in current.children:
            work_queue.enqueue(child)

        try:
            current = work_queue.dequeue().node
        except EmptyQueueUnderflow:
            current = None

    logger.debug(f"Linearized {len(print_queue)} nodes in level order")
    return print_queue
