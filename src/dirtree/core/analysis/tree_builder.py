from __future__ import annotations

"""
Directory Tree Builder.

Constructs the in-memory tree mirroring a directory hierarchy. The scan is
depth-first: every subdirectory is populated as soon as its node is created,
before the remaining entries of the current directory are read. Hidden
entries (names starting with '.') and everything beneath them are excluded.
"""

import logging
import os
from typing import List, Optional

from dirtree.domain.errors import (
    DIRECTORY_OPEN_FAILURE,
    STATUS_LOOKUP_FAILURE,
    ScanIssue,
)
from dirtree.domain.tree_models import TreeNode, append_child, create_node
from dirtree.infra.fs import LocalFileSystem, normalize_path

logger = logging.getLogger(__name__)

ROOT_LEVEL = 1

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(
        start_path: str,
        fs: Optional[LocalFileSystem] = None,
        issues: Optional[List[ScanIssue]] = None,
) -> TreeNode:
    """
    Create the root node for 'start_path' and populate the whole tree.

    Args:
        start_path: Directory to scan. Normalized to an absolute path.
        fs: Filesystem collaborator. Defaults to the local filesystem.
        issues: Optional accumulator for recoverable scan failures.

    Returns:
        TreeNode: The populated root node (level 1).
    """
    root_path = normalize_path(start_path, fallback=os.getcwd())
    logger.info(f"Building directory tree for: {root_path}")

    root = create_node(root_path, ROOT_LEVEL)
    populate_tree(root, fs=fs, issues=issues)
    return root


def populate_tree(
        node: TreeNode,
        fs: Optional[LocalFileSystem] = None,
        issues: Optional[List[ScanIssue]] = None,
) -> None:
    """
    Read the direct entries of 'node.path' and graft a child per visible entry.

    Subdirectories are recursed into immediately. A directory that cannot be
    opened is reported and contributes no children; an entry whose status
    cannot be read becomes a leaf.

    Args:
        node: Node whose path names the directory to enumerate.
        fs: Filesystem collaborator. Defaults to the local filesystem.
        issues: Optional accumulator for recoverable scan failures.
    """
    fs = fs or LocalFileSystem()

    try:
        with fs.scan_names(node.path) as names:
            for name in names:
                if _is_skipped(name):
                    continue

                child_path = os.path.join(node.path, name)
                is_dir = _lookup_is_directory(fs, child_path, issues)

                child = create_node(child_path, node.level + 1)
                append_child(node, child)

                if is_dir:
                    populate_tree(child, fs=fs, issues=issues)
    except OSError as e:
        logger.error(f"Cannot open directory '{node.path}': {e}")
        _record(issues, DIRECTORY_OPEN_FAILURE, node.path, e)


# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _is_skipped(name: str) -> bool:
    """Exclude the '.'/'..' pseudo-entries and hidden entries."""
    if name in (".", ".."):
        return True
    return name.startswith(".")


def _lookup_is_directory(
        fs: LocalFileSystem,
        path: str,
        issues: Optional[List[ScanIssue]],
) -> bool:
    """Classify 'path', treating a failed lookup as a non-directory leaf."""
    try:
        return fs.is_directory(path)
    except OSError as e:
        logger.debug(f"Status lookup failed for '{path}': {e}")
        _record(issues, STATUS_LOOKUP_FAILURE, path, e)
        return False


def _record(
        issues: Optional[List[ScanIssue]],
        kind: str,
        path: str,
        error: OSError,
) -> None:
    if issues is not None:
        issues.append(ScanIssue(kind=kind, path=path, error=str(error)))
