from __future__ import annotations

"""
Error Taxonomy and Scan Diagnostics.

Defines the exception hierarchy raised by the tree and queue structures,
plus the immutable record used to collect recoverable filesystem failures
while a directory hierarchy is being scanned.
"""

from dataclasses import dataclass

# -----------------------------------------------------------------------------
# ISSUE KINDS
# -----------------------------------------------------------------------------

DIRECTORY_OPEN_FAILURE = "DirectoryOpenFailure"
STATUS_LOOKUP_FAILURE = "StatusLookupFailure"


# -----------------------------------------------------------------------------
# EXCEPTIONS
# -----------------------------------------------------------------------------

class DirTreeError(Exception):
    """Base class for every error raised by the dirtree core."""


class AllocationFailure(DirTreeError):
    """
    A structure could not be allocated.

    Fatal: the tree cannot be completed without the failed node, so callers
    never recover from it.
    """


class EmptyQueueUnderflow(DirTreeError):
    """Dequeue was attempted on a queue holding no elements."""


# -----------------------------------------------------------------------------
# RECOVERABLE DIAGNOSTICS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanIssue:
    """
    A recoverable filesystem failure absorbed during scanning.

    Attributes:
        kind: DIRECTORY_OPEN_FAILURE or STATUS_LOOKUP_FAILURE.
        path: Absolute path of the entry that failed.
        error: Text of the underlying OS error.
    """
    kind: str
    path: str
    error: str
