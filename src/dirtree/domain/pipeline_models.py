from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result structure and factory functions used to communicate a
build/print/release run between the pipeline engine and the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dirtree.domain.errors import ScanIssue

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result object of a complete pipeline execution.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        base_path: Normalized root directory scanned.
        lines: Rendered 'level:ordinal:path' listing.
        node_count: Number of nodes in the built tree, root included.
        released_count: Number of nodes released after printing.
        issues: Recoverable filesystem failures absorbed during the scan.
        output_path: File the listing was saved to, if any.
        error_log_path: File the issue report was saved to, if any.
        summary: Technical execution summary and statistics.
    """
    ok: bool
    error: str
    base_path: str

    lines: List[str] = field(default_factory=list)
    node_count: int = 0
    released_count: int = 0
    issues: List[ScanIssue] = field(default_factory=list)

    output_path: str = ""
    error_log_path: str = ""

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        base_path: str,
        lines: Optional[List[str]] = None,
        released_count: int = 0,
        issues: Optional[List[ScanIssue]] = None,
        error_log_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Create a failed pipeline result instance.

    A run can fail after the listing was printed, so whatever was produced
    before the failure is kept on the result.
    """
    lines = lines or []
    return PipelineResult(
        ok=False,
        error=error,
        base_path=base_path,
        lines=lines,
        node_count=len(lines),
        released_count=released_count,
        issues=issues or [],
        error_log_path=error_log_path,
        summary=summary_extra or {},
    )


def create_success_result(
        base_path: str,
        lines: List[str],
        released_count: int,
        issues: Optional[List[ScanIssue]] = None,
        output_path: str = "",
        error_log_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Create a successful pipeline result instance.

    The node count equals the number of rendered lines, one per node.
    """
    return PipelineResult(
        ok=True,
        error="",
        base_path=base_path,
        lines=lines,
        node_count=len(lines),
        released_count=released_count,
        issues=issues or [],
        output_path=output_path,
        error_log_path=error_log_path,
        summary=summary_extra or {},
    )
