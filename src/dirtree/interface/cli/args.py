from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed argparse
namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

from dirtree.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the dirtree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="dirtree",
        description=i18n.t("app.description"),
    )

    # --- Path Management ---
    p.add_argument(
        "input_path",
        nargs="?",
        default=None,
        metavar="PATH",
        help=i18n.t("cli.args.path"),
    )
    p.add_argument(
        "-o", "--output-file",
        dest="output_file",
        default=None,
        help=i18n.t("cli.args.output_file"),
    )
    p.add_argument(
        "--no-print",
        action="store_true",
        help=i18n.t("cli.args.no_print"),
    )

    # --- Scan Diagnostics ---
    p.add_argument(
        "--save-error-log",
        action="store_true",
        help=i18n.t("cli.args.save_error_log"),
    )
    p.add_argument(
        "--error-log",
        dest="error_log_path",
        default=None,
        help=i18n.t("cli.args.error_log"),
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.defaults"),
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help=i18n.t("cli.args.save_config"),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help=i18n.t("cli.args.log_file"),
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json"),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Only options given on the command line appear in the result, so stored
    settings survive for everything else.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.input_path:
        overrides["input_path"] = args.input_path
    if args.output_file:
        overrides["output_file"] = args.output_file

    # JSON mode replaces the plain listing on stdout
    if args.no_print or args.json_output:
        overrides["print_listing"] = False

    if args.save_error_log:
        overrides["save_error_log"] = True
    if args.error_log_path:
        overrides["error_log_path"] = args.error_log_path
        overrides["save_error_log"] = True

    if args.debug:
        overrides["log_level"] = "DEBUG"
    if args.log_file:
        overrides["log_file"] = args.log_file

    return overrides
