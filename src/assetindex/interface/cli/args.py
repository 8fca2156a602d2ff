from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the pipeline.
"""

import argparse
from typing import Any, Dict, List, Optional

from assetindex.domain.constants import OUTPUT_FORMATS

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the assetindex CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="assetindex",
        description=(
            "Index a directory of assets and write a path-sorted manifest with "
            "size, compression and CRC32 metadata for every entry."
        ),
    )

    # --- Paths ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Directory to index (default: last session or current directory).",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_file",
        default=None,
        help="Manifest destination file. '-' writes to stdout.",
    )
    p.add_argument(
        "--diff-dump",
        dest="diff_dump_dir",
        default=None,
        help="Also write one JSON metadata file per entry under this directory.",
    )

    # --- Manifest Format ---
    p.add_argument(
        "-f", "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Manifest format.",
    )
    p.add_argument(
        "--pretty",
        action="store_true",
        help="Indent JSON output.",
    )

    # --- Scanning ---
    p.add_argument(
        "--exclude",
        dest="exclude_patterns",
        default=None,
        help="Comma-separated regexes of entry names to skip.",
    )
    p.add_argument(
        "--no-crc",
        action="store_true",
        help="Skip reading file contents; CRC32 values are reported as 0.",
    )

    # --- Runtime ---
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Build the index and report counters without writing anything.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted session and start from defaults.",
    )
    p.add_argument(
        "--save-session",
        action="store_true",
        help="Persist the resolved configuration as the new session.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=(
            "Report the run outcome as JSON instead of the human summary. "
            "Goes to stdout unless the manifest itself is written there."
        ),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG and trace every exported record.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file (rotated).",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary subset.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides; None means 'not given'.
    """
    overrides: Dict[str, Any] = {}

    overrides["input_path"] = args.input_path
    overrides["output_file"] = args.output_file
    overrides["diff_dump_dir"] = args.diff_dump_dir
    overrides["output_format"] = args.output_format

    if args.pretty:
        overrides["pretty"] = True
    if args.no_crc:
        overrides["compute_crc"] = False
    if args.debug:
        overrides["debug"] = True

    if args.exclude_patterns is not None:
        overrides["exclude_patterns"] = _split_csv(args.exclude_patterns)

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of stripped strings."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
