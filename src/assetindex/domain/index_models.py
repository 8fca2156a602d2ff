from __future__ import annotations

"""
Archive Index Data Models.

Provides the hierarchical node types produced by the index readers and the
flat, serializable record emitted for every archive entry once the tree has
been flattened.
"""

import os
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

# Accept both the portable separator and the host one when splitting lookups
_SEGMENT_SPLIT_RX = re.compile(r"[/\\]" if os.sep == "\\" else "/")


class NodeNotFoundError(LookupError):
    """Raised when a path lookup descends into a missing child."""


# -----------------------------------------------------------------------------
# TREE COMPONENTS (INPUT)
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileInfo:
    """
    Storage metadata attached to a file entry of the archive.

    Attributes:
        size: Compressed byte count inside the package volume.
        compression_info: Opaque 64-bit compression scheme identifier.
        unpacked_size: Byte count after decompression.
        crc32: Checksum of the unpacked contents.
    """
    size: int
    compression_info: int
    unpacked_size: int
    crc32: int


@dataclass(eq=False)
class Node:
    """
    One entry (file or directory) of the archive index.

    Nodes are shared by reference between the producer and any reader. A node
    is a file iff it carries a FileInfo payload.

    Attributes:
        filename: Single path segment naming this entry.
        file_info: Storage metadata, None for directories.
        children: Child nodes keyed by their filename.
    """
    filename: str
    file_info: Optional[FileInfo] = None
    children: Dict[str, "Node"] = field(default_factory=dict)

    @property
    def is_file(self) -> bool:
        return self.file_info is not None

    @property
    def is_directory(self) -> bool:
        return self.file_info is None

    def add_child(self, child: Node) -> Node:
        """Attach a child keyed by its filename and return it."""
        self.children[child.filename] = child
        return child

    def find(self, path: str) -> Node:
        """
        Resolve a relative (or root-anchored) path below this node.

        Args:
            path: Segments separated by '/' (or the host separator).

        Returns:
            Node: The node addressed by the path.

        Raises:
            NodeNotFoundError: If any segment has no matching child.
        """
        current = self
        # Leading, doubled and '.' segments resolve to the current node
        for segment in _SEGMENT_SPLIT_RX.split(path):
            if segment in ("", "."):
                continue
            child = current.children.get(segment)
            if child is None:
                raise NodeNotFoundError(f"No entry named '{segment}' while resolving '{path}'")
            current = child

        return current


# -----------------------------------------------------------------------------
# FLATTENED OUTPUT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Record:
    """
    Serializable description of one archive entry.

    Field names and order are part of the manifest format; encoders rely on
    them. The four metadata fields are zero for directories.
    """
    path: str
    is_directory: bool
    compressed_size: int = 0
    compression_info: int = 0
    unpacked_size: int = 0
    crc32: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
