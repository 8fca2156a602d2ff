from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result object exchanged between the indexing pipeline and the
interface layer, plus the factories that build it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from assetindex.domain.index_models import Record

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class IndexResult:
    """
    Outcome of a complete indexing run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        input_path: Normalized directory that was indexed.
        output_format: Manifest format used.
        output_file: Manifest destination ('-' for stdout).
        diff_dump_dir: Metadata dump directory, empty when disabled.
        dry_run: Whether persistence was skipped.
        records: Flattened records, in manifest order.
        summary: Counters describing the indexed content.
    """
    ok: bool
    error: str

    input_path: str
    output_format: str
    output_file: str
    diff_dump_dir: str = ""
    dry_run: bool = False

    records: List[Record] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        input_path: str,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> IndexResult:
    """
    Create a failed result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        input_path: The target input directory.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        IndexResult: An immutable error result object.
    """
    return IndexResult(
        ok=False,
        error=error,
        input_path=input_path,
        output_format=cfg.get("output_format", ""),
        output_file=cfg.get("output_file", ""),
        diff_dump_dir=cfg.get("diff_dump_dir", ""),
        summary=summary_extra or {},
    )


def create_success_result(
        cfg: Dict[str, Any],
        input_path: str,
        records: List[Record],
        dry_run: bool = False,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> IndexResult:
    """
    Create a successful result with content counters.

    Args:
        cfg: The validated configuration of the run.
        input_path: The indexed directory.
        records: Flattened records.
        dry_run: Whether persistence was skipped.
        summary_extra: Additional metadata merged into the summary.

    Returns:
        IndexResult: An immutable success result object.
    """
    files = [r for r in records if not r.is_directory]
    summary: Dict[str, Any] = {
        "records": len(records),
        "files": len(files),
        "directories": len(records) - len(files),
        "total_size": sum(r.compressed_size for r in files),
        "total_unpacked_size": sum(r.unpacked_size for r in files),
    }
    if summary_extra:
        summary.update(summary_extra)

    return IndexResult(
        ok=True,
        error="",
        input_path=input_path,
        output_format=cfg.get("output_format", ""),
        output_file=cfg.get("output_file", ""),
        diff_dump_dir=cfg.get("diff_dump_dir", ""),
        dry_run=dry_run,
        records=list(records),
        summary=summary,
    )
