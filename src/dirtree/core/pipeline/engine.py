from __future__ import annotations

"""
Pipeline Engine.

Runs the complete listing lifecycle: build the tree, linearize it in level
order, render and emit the listing, release the tree, and persist optional
artifacts. The tree is released on every exit path once built. A listing
that cannot be saved to the requested file fails the run.
"""

import logging
import os
import sys
from typing import Any, Dict, List, Optional, TextIO, Tuple

from dirtree.core.analysis.level_order import create_print_queue
from dirtree.core.analysis.listing_renderer import render_print_queue, write_listing
from dirtree.core.analysis.tree_builder import build_tree
from dirtree.core.analysis.tree_release import release_tree
from dirtree.core.pipeline.stages.validator import validate_config
from dirtree.domain.config import get_default_error_log_path
from dirtree.domain.errors import ScanIssue
from dirtree.domain.pipeline_models import PipelineResult, create_error_result, create_success_result
from dirtree.domain.tree_models import TreeNode
from dirtree.infra.fs import LocalFileSystem, safe_mkdir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def run_pipeline(
        config: Optional[Dict[str, Any]],
        fs: Optional[LocalFileSystem] = None,
        stream: Optional[TextIO] = None,
) -> PipelineResult:
    """
    Execute build, linearize, print and release for one start directory.

    Args:
        config: Raw configuration dictionary. Validated before use.
        fs: Filesystem collaborator. Defaults to the local filesystem.
        stream: Destination for the listing. Defaults to sys.stdout.

    Returns:
        PipelineResult: Listing, scan diagnostics and artifact paths.
    """
    cfg, warnings = validate_config(config or {}, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    base_path = cfg["input_path"]
    issues: List[ScanIssue] = []
    lines: List[str] = []
    root: Optional[TreeNode] = None
    released = 0
    max_level = 0

    try:
        # 1. Depth-first scan
        root = build_tree(base_path, fs=fs, issues=issues)

        # 2. Level-order linearization and rendering
        print_queue = create_print_queue(root)
        if print_queue.tail is not None:
            max_level = print_queue.tail.node.level
        render_print_queue(print_queue, lines)

        # 3. Emission
        if cfg["print_listing"]:
            write_listing(lines, stream or sys.stdout)
    finally:
        released = release_tree(root)
        root = None

    # 4. Persistence
    summary: Dict[str, Any] = {
        "nodes": len(lines),
        "issues": len(issues),
        "max_level": max_level,
    }

    error_log_path = ""
    if cfg["save_error_log"] and issues:
        target = cfg["error_log_path"] or get_default_error_log_path()
        error_log_path = finalize_error_reporting(target, issues)

    output_path = ""
    if cfg["output_file"]:
        output_path, save_error = _save_lines(cfg["output_file"], lines)
        if save_error:
            return create_error_result(
                f"Cannot save listing to '{cfg['output_file']}': {save_error}",
                base_path,
                lines=lines,
                released_count=released,
                issues=issues,
                error_log_path=error_log_path,
                summary_extra=summary,
            )

    logger.info(f"Listed {len(lines)} entries under {base_path} ({len(issues)} issues)")

    return create_success_result(
        base_path=base_path,
        lines=lines,
        released_count=released,
        issues=issues,
        output_path=output_path,
        error_log_path=error_log_path,
        summary_extra=summary,
    )


def finalize_error_reporting(error_output_path: str, issues: List[ScanIssue]) -> str:
    """
    Persist collected scan issues to a dedicated report file.

    Args:
        error_output_path: Target filesystem path for the report.
        issues: Recoverable failures collected during the scan.

    Returns:
        str: The path to the generated report, or an empty string if not saved.
    """
    created, err = safe_mkdir(os.path.dirname(os.path.abspath(error_output_path)))
    if not created:
        logger.error(f"Failed to create report directory for '{error_output_path}': {err}")
        return ""

    try:
        with open(error_output_path, "w", encoding="utf-8") as f:
            f.write("SCAN ISSUES REPORT:\n")
            f.write("=" * 80 + "\n")
            for issue in issues:
                f.write(f"KIND: {issue.kind}\n")
                f.write(f"PATH: {issue.path}\n")
                f.write(f"ERROR: {issue.error}\n")
                f.write("-" * 80 + "\n")
        return error_output_path
    except OSError as e:
        logger.error(f"Failed to persist scan report to '{error_output_path}': {e}")
        return ""

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _save_lines(save_path: str, lines: List[str]) -> Tuple[str, str]:
    """Persist listing lines, returning (saved path, error message)."""
    created, err = safe_mkdir(os.path.dirname(os.path.abspath(save_path)))
    if not created:
        logger.error(f"Failed to create directory for '{save_path}': {err}")
        return "", err or "directory could not be created"

    try:
        with open(save_path, "w", encoding="utf-8") as f:
            write_listing(lines, f)
        logger.info(f"Listing saved to file: {save_path}")
        return save_path, ""
    except OSError as e:
        logger.error(f"Failed to save listing to '{save_path}': {e}")
        return "", str(e)

