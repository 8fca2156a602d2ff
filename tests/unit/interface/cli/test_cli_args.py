from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. CSV string parsing logic.
3. Handling of boolean flags (store_true).
"""

import pytest

from assetindex.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_simple_flags_mapping():
    """Verify boolean flags are mapped correctly to config overrides."""
    args = parse_args(["--pretty", "--no-crc", "--debug"])

    overrides = args_to_overrides(args)

    assert overrides["pretty"] is True
    assert overrides["compute_crc"] is False
    assert overrides["debug"] is True


def test_cli_path_and_format_arguments():
    args = parse_args([
        "-i", "/input/res",
        "-o", "/tmp/manifest.csv",
        "-f", "csv",
        "--diff-dump", "/tmp/dump",
    ])

    overrides = args_to_overrides(args)

    assert overrides["input_path"] == "/input/res"
    assert overrides["output_file"] == "/tmp/manifest.csv"
    assert overrides["output_format"] == "csv"
    assert overrides["diff_dump_dir"] == "/tmp/dump"


def test_cli_exclude_csv_parsing():
    args = parse_args(["--exclude", r"\.tmp$, ^cache$,,"])
    assert args_to_overrides(args)["exclude_patterns"] == [r"\.tmp$", "^cache$"]


def test_cli_empty_exclude_disables_defaults():
    args = parse_args(["--exclude", ""])
    assert args_to_overrides(args)["exclude_patterns"] == []


def test_cli_rejects_unknown_format():
    with pytest.raises(SystemExit):
        parse_args(["-f", "xml"])


def test_cli_defaults_are_explicit_in_overrides():
    """Unset options map to None (or are absent) so the merge keeps base values."""
    overrides = args_to_overrides(parse_args([]))

    assert overrides["input_path"] is None
    assert overrides["output_format"] is None
    assert "pretty" not in overrides
    assert "exclude_patterns" not in overrides


def test_cli_json_flag_is_a_presentation_option():
    assert parse_args([]).json_output is False
    args = parse_args(["--json"])
    assert args.json_output is True
    assert "json_output" not in args_to_overrides(args)
