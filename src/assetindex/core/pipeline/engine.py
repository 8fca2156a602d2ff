from __future__ import annotations

"""
Core indexing pipeline.

Coordinates one indexing run:
1. Validates configuration and normalizes the input path.
2. Scans the directory into an index tree.
3. Flattens the tree into path-sorted records.
4. Writes the manifest (skipped on dry runs).
5. Optionally dumps per-file metadata for build diffing.
"""

import logging
import os
from typing import Any, Dict, Optional

from assetindex.core.export.manifest_writer import dump_file_metadata, write_manifest
from assetindex.core.indexing.flattener import flatten
from assetindex.core.indexing.tree_builder import scan_directory
from assetindex.core.pipeline.validator import validate_config
from assetindex.domain.pipeline_models import (
    IndexResult,
    create_error_result,
    create_success_result,
)
from assetindex.infra.fs import normalize_path

logger = logging.getLogger(__name__)


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
) -> IndexResult:
    """
    Execute a full indexing run.

    Filesystem and format errors are reported through the returned result
    rather than raised.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, build and flatten the index without writing anything.

    Returns:
        IndexResult: Status, records and counters of the run.
    """
    logger.info("Indexing pipeline started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    input_path = normalize_path(cfg.get("input_path", ""), os.getcwd())

    # -------------------------------------------------------------------------
    # 2) Tree Construction & Flattening
    # -------------------------------------------------------------------------
    try:
        tree = scan_directory(
            input_path,
            exclude_patterns=cfg["exclude_patterns"],
            compute_crc=cfg["compute_crc"],
        )
    except OSError as e:
        msg = f"Failed to scan input directory: {e}"
        logger.error(msg)
        return create_error_result(msg, cfg, input_path)

    records = flatten(tree)
    logger.info(f"Index built: {len(records)} entries.")

    if dry_run:
        logger.info("Dry run: manifest and metadata dump skipped.")
        return create_success_result(cfg, input_path, records, dry_run=True)

    # -------------------------------------------------------------------------
    # 3) Persistence
    # -------------------------------------------------------------------------
    summary_extra: Dict[str, Any] = {}
    try:
        write_manifest(records, cfg["output_format"], cfg["output_file"], pretty=cfg["pretty"])

        if cfg["diff_dump_dir"]:
            dump_dir = normalize_path(cfg["diff_dump_dir"], input_path)
            summary_extra["metadata_files"] = dump_file_metadata(records, dump_dir)
    except (OSError, ValueError) as e:
        msg = f"Failed to write index output: {e}"
        logger.error(msg)
        return create_error_result(msg, cfg, input_path)

    logger.info("Indexing pipeline finished.")
    return create_success_result(cfg, input_path, records, summary_extra=summary_extra)
