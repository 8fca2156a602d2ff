from __future__ import annotations

"""
Index Tree Builders.

Produces Node trees for the flattener from sources other than the archive's
binary index: a flat mapping of full paths to storage metadata, or a plain
directory on disk. The resulting trees follow the same rules as the ones
produced by the index readers.
"""

import logging
import os
import re
import zlib
from typing import List, Mapping, Optional

from assetindex.core.indexing.filters import (
    compile_patterns,
    default_exclude_patterns,
    matches_any,
)
from assetindex.domain.index_models import FileInfo, Node

logger = logging.getLogger(__name__)

_CRC_CHUNK_SIZE = 1024 * 1024
_PATH_SPLIT_RX = re.compile(r"[/\\]" if os.sep == "\\" else "/")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(
        entries: Mapping[str, Optional[FileInfo]],
        root_name: str = "",
) -> Node:
    """
    Build an index tree from a flat mapping of full paths.

    Intermediate directories are created on demand. A None value declares an
    explicit (possibly empty) directory.

    Args:
        entries: Full entry paths mapped to their FileInfo (None for directories).
        root_name: Filename of the synthetic root node.

    Returns:
        Node: Root of the constructed tree.

    Raises:
        ValueError: If an entry collides with an existing file or directory,
            or contains a ".." segment.
    """
    root = Node(filename=root_name)

    for entry_path, file_info in entries.items():
        segments = [s for s in _PATH_SPLIT_RX.split(entry_path) if s not in ("", ".")]
        if ".." in segments:
            raise ValueError(f"Parent-directory segment in entry '{entry_path}'")
        if not segments:
            continue

        current = root
        for segment in segments[:-1]:
            current = _ensure_directory(current, segment, entry_path)

        name = segments[-1]
        existing = current.children.get(name)

        if file_info is None:
            _ensure_directory(current, name, entry_path)
            continue

        if existing is not None:
            raise ValueError(f"Duplicate entry for '{entry_path}'")
        current.add_child(Node(filename=name, file_info=file_info))

    return root


def scan_directory(
        input_path: str,
        exclude_patterns: Optional[List[str]] = None,
        compute_crc: bool = True,
) -> Node:
    """
    Execute a filesystem walk and build the equivalent index tree.

    Files are treated as stored uncompressed: compressed and unpacked sizes
    are both the on-disk size and the compression identifier is zero.

    Args:
        input_path: Directory to index.
        exclude_patterns: Regexes matched against entry names; defaults apply when None.
        compute_crc: Whether to read every file to compute its CRC32.

    Returns:
        Node: Root node (empty filename) so that record paths are relative.

    Raises:
        FileNotFoundError: If the directory does not exist.
        NotADirectoryError: If the path is not a directory.
    """
    if not os.path.exists(input_path):
        raise FileNotFoundError(f"Input directory not found: {input_path}")
    if not os.path.isdir(input_path):
        raise NotADirectoryError(f"Input path is not a directory: {input_path}")

    patterns = default_exclude_patterns() if exclude_patterns is None else exclude_patterns
    exclude_rx = compile_patterns(patterns)

    logger.info(f"Scanning directory for index: {input_path}")

    root = Node(filename="")
    file_count = 0

    # In-place modification of dirs prunes excluded branches during the walk
    for dir_path, dirs, files in os.walk(input_path):
        dirs[:] = sorted(d for d in dirs if not matches_any(d, exclude_rx))
        files.sort()

        rel_root = os.path.relpath(dir_path, input_path)
        current = root if rel_root == "." else root.find(rel_root)

        for d in dirs:
            current.add_child(Node(filename=d))

        for file_name in files:
            if matches_any(file_name, exclude_rx):
                continue
            full_path = os.path.join(dir_path, file_name)
            try:
                info = _file_info_for(full_path, compute_crc)
            except OSError as e:
                logger.warning(f"Skipping unreadable file '{full_path}': {e}")
                continue
            current.add_child(Node(filename=file_name, file_info=info))
            file_count += 1

    logger.debug(f"Directory scan complete: {file_count} files indexed.")
    return root

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _ensure_directory(parent: Node, name: str, entry_path: str) -> Node:
    """Return the child directory `name`, creating it when missing."""
    child = parent.children.get(name)
    if child is None:
        return parent.add_child(Node(filename=name))
    if child.is_file:
        raise ValueError(f"Entry '{entry_path}' descends through file '{name}'")
    return child


def _file_info_for(path: str, compute_crc: bool) -> FileInfo:
    """Collect size and checksum metadata for a file on disk."""
    size = os.path.getsize(path)
    checksum = _crc32_of(path) if compute_crc else 0
    return FileInfo(size=size, compression_info=0, unpacked_size=size, crc32=checksum)


def _crc32_of(path: str) -> int:
    """Stream a file through zlib.crc32 in fixed-size chunks."""
    crc = 0
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CRC_CHUNK_SIZE), b""):
            crc = zlib.crc32(chunk, crc)
    return crc & 0xFFFFFFFF
