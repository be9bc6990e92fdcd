from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of configuration
sources (defaults, persistent storage and CLI overrides), pipeline execution,
and result rendering.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from dirtree.core.pipeline.engine import run_pipeline
from dirtree.core.pipeline.stages.validator import validate_config
from dirtree.domain.config import get_config_file, get_default_config, load_config, save_config
from dirtree.domain.errors import DIRECTORY_OPEN_FAILURE, AllocationFailure
from dirtree.domain.pipeline_models import PipelineResult
from dirtree.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from dirtree.interface.cli import args as cli_args
from dirtree.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve base configuration (Default vs Persistent state)
    base_conf = get_default_config() if args.use_defaults else load_config()
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)

    # 3. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 4. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(LoggingConfig.from_app_config(clean_conf))

    try:
        for w in warnings:
            logger.warning(f"Configuration Constraint: {w}")

        if args.save_config:
            save_config(clean_conf)
            logger.info(i18n.t("cli.status.config_saved", path=get_config_file()))

        if args.dump_config:
            print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
            return EXIT_OK

        return _execute(clean_conf, json_output=bool(args.json_output))
    finally:
        shutdown_logging()

# -----------------------------------------------------------------------------
# EXECUTION
# -----------------------------------------------------------------------------

def _execute(conf: Dict[str, Any], json_output: bool) -> int:
    """Run the pipeline and map its outcome to an exit code."""
    logger.debug(f"Targeting input directory: {conf['input_path']}")
    try:
        result = run_pipeline(conf)
    except AllocationFailure as e:
        msg = i18n.t("cli.errors.allocation", error=str(e))
        logger.critical(msg)
        print(msg, file=sys.stderr)
        return EXIT_FATAL
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        msg = i18n.t("cli.errors.pipeline_fail", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FATAL

    if json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    elif not result.ok:
        print(f"ERROR: {i18n.t('cli.errors.pipeline_fail', error=result.error)}", file=sys.stderr)
    else:
        _report_issues(result, conf["log_file"])

    return EXIT_OK if result.ok else EXIT_FATAL

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged, preventing schema pollution from external
    sources.
    """
    out = dict(base)
    keys_to_merge = [
        "input_path", "output_file", "print_listing",
        "save_error_log", "error_log_path", "log_level", "log_file",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _report_issues(result: PipelineResult, log_file: str) -> None:
    """
    Summarize unopenable directories on stderr, leaving stdout untouched.

    Status lookup failures stay out of the summary: those entries are still
    listed, and they are only recorded in the log and the issue report.
    """
    unopened = [i for i in result.issues if i.kind == DIRECTORY_OPEN_FAILURE]
    if unopened:
        print(i18n.t("cli.status.issues", count=len(unopened)), file=sys.stderr)
        if log_file:
            print(i18n.t("cli.status.see_log", path=log_file), file=sys.stderr)
    if result.error_log_path:
        print(i18n.t("cli.status.error_log", path=result.error_log_path), file=sys.stderr)
