from __future__ import annotations

"""
Archive Index Flattener.

Converts the hierarchical node tree of an archive index into a flat list of
records, one per entry, ordered by path so that the output is stable across
builds regardless of how the producer stored the children.
"""

import logging
import os
from typing import List, Tuple

from assetindex.domain.index_models import Node, Record

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def flatten(root: Node) -> List[Record]:
    """
    Flatten an index tree into path-sorted records.

    Walks the tree with an explicit work list instead of recursion so that
    arbitrarily deep trees are safe. The tree is only read, never modified.
    The root must head a finite, acyclic tree; this is not checked.

    Args:
        root: Head node of the index tree.

    Returns:
        List[Record]: One record per node, sorted by byte-wise path order.
    """
    out: List[Record] = []

    pending: List[Tuple[str, Node]] = [("", root)]
    while pending:
        parent_path, node = pending.pop()
        this_path = os.path.join(parent_path, node.filename)
        out.append(_to_record(this_path, node))

        # Siblings share the same parent path string
        for child in node.children.values():
            pending.append((this_path, child))

    # Traversal order depends on the children mappings, sort for stable output
    out.sort(key=_path_sort_key)

    logger.debug(f"Flattened index tree into {len(out)} records.")
    return out

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _to_record(path: str, node: Node) -> Record:
    """Build the record for a single node, zeroing metadata for directories."""
    info = node.file_info
    if info is None:
        return Record(path=path, is_directory=True)

    return Record(
        path=path,
        is_directory=False,
        compressed_size=info.size,
        compression_info=info.compression_info,
        unpacked_size=info.unpacked_size,
        crc32=info.crc32,
    )


def _path_sort_key(record: Record) -> bytes:
    """Byte-lexicographic ordering key for a record path."""
    return os.fsencode(record.path)
