from __future__ import annotations

"""
Level-Order Listing Renderer.

Drains a linearized print queue into 'level:ordinal:path' lines. The ordinal
is the rank of a node among the nodes printed at the same level and restarts
at 1 whenever the level changes.
"""

from typing import List, TextIO

from dirtree.domain.queue_models import FifoQueue

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def format_entry(level: int, ordinal: int, path: str) -> str:
    """Build a single listing line."""
    return f"{level}:{ordinal}:{path}"


def render_print_queue(print_queue: FifoQueue, lines: List[str]) -> int:
    """
    Drain 'print_queue' in FIFO order, appending one line per node.

    Levels arrive in non-decreasing order, so a single running ordinal that
    resets on each level change is enough.

    Args:
        print_queue: Queue produced by the level-order linearizer. Empty on return.
        lines: Accumulator list for output strings.

    Returns:
        int: Number of lines appended.
    """
    ordinal = 0
    previous_level = 0
    emitted = 0

    while not print_queue.is_empty():
        node = print_queue.dequeue().node
        if node.level != previous_level:
            ordinal = 0
        ordinal += 1

        lines.append(format_entry(node.level, ordinal, node.path))
        previous_level = node.level
        emitted += 1

    return emitted


def write_listing(lines: List[str], stream: TextIO) -> None:
    """Write rendered lines to a line-oriented text stream."""
    for line in lines:
        stream.write(line + "\n")
    stream.flush()
