from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared index trees and configuration dictionaries used across tests.
"""

import os
import sys
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from assetindex.core.export.debug import set_debug  # noqa: E402
from assetindex.domain.index_models import FileInfo, Node  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_tree() -> Node:
    """
    Return a small index tree rooted at an unnamed directory.

    Structure:
    ""
      a          (file: size=5, comp=0, unpacked=5, crc=1)
      b/
        c        (file: size=2, comp=0, unpacked=2, crc=2)
    """
    root = Node(filename="")
    root.add_child(Node(filename="a", file_info=FileInfo(size=5, compression_info=0, unpacked_size=5, crc32=1)))
    b = root.add_child(Node(filename="b"))
    b.add_child(Node(filename="c", file_info=FileInfo(size=2, compression_info=0, unpacked_size=2, crc32=2)))
    return root


@pytest.fixture
def mock_config_dict(tmp_path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Mirrors the keys of 'assetindex.domain.config.get_default_config'.
    """
    return {
        "input_path": str(tmp_path / "input"),
        "output_file": str(tmp_path / "out" / "manifest.txt"),
        "diff_dump_dir": "",
        "output_format": "plain",
        "pretty": False,
        "exclude_patterns": [r"^\.git$"],
        "compute_crc": True,
        "debug": False,
    }


@pytest.fixture(autouse=True)
def reset_debug_flag():
    """Keep the process-wide debug flag from leaking between tests."""
    set_debug(False)
    yield
    set_debug(False)
