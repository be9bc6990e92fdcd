from __future__ import annotations

"""
Tree Release.

Tears down a scanned tree once the listing has been produced. Release is
post-order over the first-child and next-sibling links: a node is cleared
only after its child subtree and its following siblings have been released.
"""

import logging
from typing import List, Optional, Tuple

from dirtree.domain.tree_models import TreeNode

logger = logging.getLogger(__name__)


def release_tree(root: Optional[TreeNode]) -> int:
    """
    Release every node reachable from 'root' exactly once.

    Each released node has its Child List, sibling link and path cleared,
    which leaves nothing reachable from the root afterwards. An explicit
    work list replaces recursion, so deep or wide trees cannot exhaust the
    interpreter stack.

    Args:
        root: Root node to release. None is a no-op.

    Returns:
        int: Number of nodes released.
    """
    if root is None:
        return 0

    released = 0
    # (node, expanded): expanded nodes have their first child and sibling queued
    stack: List[Tuple[TreeNode, bool]] = [(root, False)]

    while stack:
        node, expanded = stack.pop()
        if expanded:
            _clear_node(node)
            released += 1
            continue

        stack.append((node, True))
        # Pushed sibling first so the child subtree is released before it
        if node.next_sibling is not None:
            stack.append((node.next_sibling, False))
        if node.children.first is not None:
            stack.append((node.children.first, False))

    logger.debug(f"Released {released} tree nodes")
    return released


def _clear_node(node: TreeNode) -> None:
    node.children.clear()
    node.next_sibling = None
    node.path = ""
