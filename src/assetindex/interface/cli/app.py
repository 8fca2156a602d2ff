from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, resolution of the
configuration hierarchy (defaults, persisted session, CLI overrides),
pipeline execution and the final report. The manifest owns stdout, so
every status line goes to stderr.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from assetindex.core.export.debug import set_debug
from assetindex.core.pipeline.engine import run_pipeline
from assetindex.core.pipeline.validator import validate_config
from assetindex.domain.config import get_default_config, load_config, save_config
from assetindex.domain.pipeline_models import IndexResult
from assetindex.infra.fs import normalize_path
from assetindex.infra.logging import LoggingConfig, configure_logging, get_logger
from assetindex.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 bad input, 130 interrupted).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Logging bootstrap (console on stderr, optional rotating file)
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 2. Base configuration and overrides
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    set_debug(clean_conf["debug"])

    # 3. Pre-flight input verification
    input_path = normalize_path(clean_conf["input_path"], os.getcwd())
    if not os.path.isdir(input_path):
        msg = f"Input path does not exist or is not a directory: {input_path}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    if args.save_session:
        save_config(clean_conf)

    # 4. Pipeline execution
    try:
        result = run_pipeline(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        print("Indexing interrupted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.critical(f"Indexing failed: {e}", exc_info=True)
        print(f"ERROR: Indexing failed: {e}", file=sys.stderr)
        return 1

    if args.json_output:
        _print_json_summary(result)
    else:
        _print_human_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge known override keys into the base configuration.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject; None values are ignored.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = [
        "input_path", "output_file", "diff_dump_dir", "output_format",
        "pretty", "exclude_patterns", "compute_crc", "debug",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_json_summary(result: IndexResult) -> None:
    """
    Render the run outcome as JSON.

    Records are left out; they are the manifest. The report shares stdout
    only when the manifest does not.
    """
    payload = asdict(result)
    payload.pop("records", None)

    manifest_on_stdout = result.ok and not result.dry_run and result.output_file == "-"
    out = sys.stderr if manifest_on_stdout else sys.stdout
    print(json.dumps(payload, ensure_ascii=False, indent=2), file=out)


def _print_human_summary(result: IndexResult) -> None:
    """Render the run outcome on stderr."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    summary = result.summary
    out = sys.stderr

    print("Indexing completed.", file=out)
    if result.dry_run:
        print("Dry run: nothing was written.", file=out)
    elif result.output_file != "-":
        print(f"Manifest ({result.output_format}): {result.output_file}", file=out)

    labels = {
        "records": "Entries",
        "files": "Files",
        "directories": "Directories",
        "total_size": "Total size (bytes)",
        "total_unpacked_size": "Total unpacked size (bytes)",
        "metadata_files": "Metadata files dumped",
    }
    for key, label in labels.items():
        if key in summary:
            print(f"  {label}: {summary[key]:,}", file=out)


if __name__ == "__main__":
    sys.exit(main())
