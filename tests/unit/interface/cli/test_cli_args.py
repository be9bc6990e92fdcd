from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. Omission of options that were not given.
3. Implied flags (--error-log, --json).
"""

from dirtree.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_no_arguments_produce_no_overrides():
    overrides = args_to_overrides(parse_args([]))
    assert overrides == {}


def test_positional_path_captured():
    overrides = args_to_overrides(parse_args(["/srv/data"]))
    assert overrides["input_path"] == "/srv/data"


def test_output_and_print_flags():
    overrides = args_to_overrides(parse_args(["-o", "/tmp/out.txt", "--no-print"]))

    assert overrides["output_file"] == "/tmp/out.txt"
    assert overrides["print_listing"] is False


def test_error_log_implies_saving():
    overrides = args_to_overrides(parse_args(["--error-log", "/tmp/issues.txt"]))

    assert overrides["error_log_path"] == "/tmp/issues.txt"
    assert overrides["save_error_log"] is True


def test_json_suppresses_plain_listing():
    args = parse_args(["--json"])
    overrides = args_to_overrides(args)

    assert args.json_output is True
    assert overrides["print_listing"] is False


def test_debug_and_log_file():
    overrides = args_to_overrides(parse_args(["--debug", "--log-file", "/tmp/d.log"]))

    assert overrides["log_level"] == "DEBUG"
    assert overrides["log_file"] == "/tmp/d.log"


def test_tool_flags_parsed():
    args = parse_args(["--use-defaults", "--dump-config", "--save-config"])

    assert args.use_defaults is True
    assert args.dump_config is True
    assert args.save_config is True
