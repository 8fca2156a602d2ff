from __future__ import annotations

"""
Manifest Encoding and Persistence.

Encodes flattened index records into the supported manifest formats and
writes them to a file or standard output. Also produces the per-file
metadata dump used to diff the contents of two archive builds.
"""

import csv
import io
import json
import logging
import os
import sys
from dataclasses import fields
from typing import List, Sequence

from assetindex.core.export.debug import debug_enabled
from assetindex.domain.constants import OUTPUT_FORMATS
from assetindex.domain.index_models import Record

logger = logging.getLogger(__name__)

STDOUT_TARGET = "-"
METADATA_SUFFIX = ".txt"

# Column order follows the Record declaration order
RECORD_FIELDS: List[str] = [f.name for f in fields(Record)]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def encode_records(records: Sequence[Record], fmt: str, pretty: bool = False) -> str:
    """
    Encode records into a manifest document.

    Args:
        records: Flattened records, already in manifest order.
        fmt: One of 'plain', 'json' or 'csv'.
        pretty: Indent JSON output (ignored by the other formats).

    Returns:
        str: The encoded document.

    Raises:
        ValueError: If the format is not supported.
    """
    if fmt == "plain":
        return "".join(f"{r.path}\n" for r in records)
    if fmt == "json":
        payload = [r.as_dict() for r in records]
        if pretty:
            return json.dumps(payload, ensure_ascii=False, indent=2)
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    if fmt == "csv":
        return _encode_csv(records)

    raise ValueError(f"Unsupported manifest format '{fmt}'. Expected one of: {', '.join(OUTPUT_FORMATS)}")


def write_manifest(
        records: Sequence[Record],
        fmt: str,
        out_file: str = STDOUT_TARGET,
        pretty: bool = False,
) -> None:
    """
    Encode records and persist them to a file or to stdout.

    Args:
        records: Flattened records.
        fmt: Manifest format identifier.
        out_file: Destination path, or '-' for standard output.
        pretty: Indent JSON output.

    Raises:
        ValueError: If the format is not supported.
        OSError: If the destination cannot be written.
    """
    document = encode_records(records, fmt, pretty=pretty)
    _trace_records(records)

    if out_file == STDOUT_TARGET:
        sys.stdout.write(document)
        if document and not document.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()
        return

    _ensure_parent_dir(out_file)
    with open(out_file, "w", encoding="utf-8", newline="") as f:
        f.write(document)
    logger.info(f"Manifest ({fmt}, {len(records)} records) written to: {out_file}")


def dump_file_metadata(records: Sequence[Record], out_dir: str) -> int:
    """
    Write one pretty JSON metadata file per archive file.

    The target for 'a/b.xml' is '<out_dir>/a/b.xml.txt'. Directory records
    are skipped.

    Args:
        records: Flattened records.
        out_dir: Root directory of the dump.

    Returns:
        int: Number of metadata files written.

    Raises:
        OSError: If a metadata file cannot be written.
        ValueError: If a record path resolves outside `out_dir`.
    """
    base = os.path.abspath(out_dir)
    written = 0
    for record in records:
        if record.is_directory:
            continue

        dest = os.path.abspath(os.path.join(base, record.path.lstrip("/\\") + METADATA_SUFFIX))
        if os.path.commonpath([base, dest]) != base:
            raise ValueError(f"Record path escapes the dump directory: {record.path}")
        _ensure_parent_dir(dest)
        with open(dest, "w", encoding="utf-8") as f:
            json.dump(record.as_dict(), f, ensure_ascii=False, indent=2)

        if debug_enabled():
            logger.debug(f"Metadata dump: {record.path} -> {dest}")
        written += 1

    logger.info(f"Dumped metadata for {written} files into: {out_dir}")
    return written

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _encode_csv(records: Sequence[Record]) -> str:
    """Render records as CSV with a header row and lowercase booleans."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(RECORD_FIELDS)
    for r in records:
        row = r.as_dict()
        row["is_directory"] = "true" if r.is_directory else "false"
        writer.writerow([row[name] for name in RECORD_FIELDS])
    return buffer.getvalue()


def _trace_records(records: Sequence[Record]) -> None:
    """Emit one DEBUG line per record when verbose export output is enabled."""
    if not debug_enabled():
        return
    for r in records:
        kind = "dir " if r.is_directory else "file"
        logger.debug(
            f"{kind} {r.path!r} size={r.compressed_size} comp=0x{r.compression_info:016x} "
            f"unpacked={r.unpacked_size} crc32=0x{r.crc32:08x}"
        )


def _ensure_parent_dir(path: str) -> None:
    """Safely create the parent directory hierarchy for a target file."""
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)
