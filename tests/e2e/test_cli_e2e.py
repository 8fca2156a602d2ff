from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script in a subprocess and validates exit codes,
stream output and the manifest files written to disk. The user data
directory is redirected into the test's temporary directory.
"""

import csv
import io
import json
import os
import subprocess
import sys
import zlib
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "assetindex" / "main.py"


def run_cli(args: List[str], home: Path) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process with an isolated home directory.

    Args:
        args: Command line arguments (excluding interpreter and script path).
        home: Directory used as HOME / LOCALAPPDATA for persisted state.

    Returns:
        subprocess.CompletedProcess: Return code and captured streams.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["LOCALAPPDATA"] = str(home)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def sample_assets(tmp_path: Path) -> Path:
    """
    Create a small asset directory.

    Structure:
    /res
      /content
        GameParams.data
      /gui
        logo.png
    """
    root = tmp_path / "res"
    (root / "content").mkdir(parents=True)
    (root / "content" / "GameParams.data").write_bytes(b"params-bytes")
    (root / "gui").mkdir()
    (root / "gui" / "logo.png").write_bytes(b"\x89PNG")
    return root


def test_cli_plain_manifest_to_stdout(sample_assets: Path, home: Path) -> None:
    result = run_cli(["--use-defaults", "-i", str(sample_assets)], home)

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == [
        "",
        "content",
        os.path.join("content", "GameParams.data"),
        "gui",
        os.path.join("gui", "logo.png"),
    ]
    assert "Indexing completed." in result.stderr


def test_cli_json_manifest_to_file(tmp_path: Path, sample_assets: Path, home: Path) -> None:
    out_file = tmp_path / "out" / "manifest.json"

    result = run_cli(
        ["--use-defaults", "-i", str(sample_assets), "-f", "json", "-o", str(out_file)],
        home,
    )

    assert result.returncode == 0, result.stderr
    data = json.loads(out_file.read_text(encoding="utf-8"))
    params = next(e for e in data if e["path"].endswith("GameParams.data"))
    assert params["is_directory"] is False
    assert params["compressed_size"] == len(b"params-bytes")
    assert params["crc32"] == zlib.crc32(b"params-bytes")


def test_cli_csv_manifest(tmp_path: Path, sample_assets: Path, home: Path) -> None:
    out_file = tmp_path / "manifest.csv"

    result = run_cli(
        ["--use-defaults", "-i", str(sample_assets), "-f", "csv", "-o", str(out_file), "--no-crc"],
        home,
    )

    assert result.returncode == 0, result.stderr
    rows = list(csv.DictReader(io.StringIO(out_file.read_text(encoding="utf-8"))))
    assert len(rows) == 5
    assert all(row["crc32"] == "0" for row in rows)
    assert rows[1]["is_directory"] == "true"


def test_cli_diff_dump(tmp_path: Path, sample_assets: Path, home: Path) -> None:
    dump_dir = tmp_path / "dump"

    result = run_cli(
        ["--use-defaults", "-i", str(sample_assets), "-o", str(tmp_path / "m.txt"),
         "--diff-dump", str(dump_dir)],
        home,
    )

    assert result.returncode == 0, result.stderr
    assert (dump_dir / "gui" / "logo.png.txt").exists()
    assert "Metadata files dumped: 2" in result.stderr


def test_cli_handles_missing_input(tmp_path: Path, home: Path) -> None:
    result = run_cli(["--use-defaults", "-i", str(tmp_path / "missing")], home)

    assert result.returncode == 2
    assert "does not exist" in result.stderr


def test_cli_dry_run_writes_nothing(tmp_path: Path, sample_assets: Path, home: Path) -> None:
    out_file = tmp_path / "never.json"

    result = run_cli(
        ["--use-defaults", "-i", str(sample_assets), "-f", "json", "-o", str(out_file), "--dry-run"],
        home,
    )

    assert result.returncode == 0, result.stderr
    assert not out_file.exists()
    assert "Entries: 5" in result.stderr


def test_cli_json_report_on_stdout_for_dry_run(sample_assets: Path, home: Path) -> None:
    result = run_cli(["--use-defaults", "-i", str(sample_assets), "--dry-run", "--json"], home)

    assert result.returncode == 0, result.stderr
    report = json.loads(result.stdout)
    assert report["ok"] is True
    assert report["dry_run"] is True
    assert report["summary"]["records"] == 5
    assert report["summary"]["files"] == 2
    assert "records" not in report
    assert "Indexing completed." not in result.stderr


def test_cli_json_report_keeps_stdout_for_manifest(sample_assets: Path, home: Path) -> None:
    result = run_cli(["--use-defaults", "-i", str(sample_assets), "--json"], home)

    assert result.returncode == 0, result.stderr
    assert len(result.stdout.splitlines()) == 5
    assert '"ok": true' in result.stderr


def test_cli_dump_config_reflects_overrides(sample_assets: Path, home: Path) -> None:
    result = run_cli(
        ["--use-defaults", "-i", str(sample_assets), "-f", "csv", "--pretty", "--dump-config"],
        home,
    )

    assert result.returncode == 0, result.stderr
    data = json.loads(result.stdout)
    assert data["output_format"] == "csv"
    assert data["pretty"] is True
    assert data["input_path"] == str(sample_assets)


def test_cli_save_session_is_reused(tmp_path: Path, sample_assets: Path, home: Path) -> None:
    first = run_cli(
        ["-i", str(sample_assets), "-f", "json", "--save-session", "--dry-run"],
        home,
    )
    assert first.returncode == 0, first.stderr

    second = run_cli(["--dump-config"], home)
    data = json.loads(second.stdout)
    assert data["output_format"] == "json"
    assert data["input_path"] == str(sample_assets)


def test_cli_debug_traces_records(tmp_path: Path, sample_assets: Path, home: Path) -> None:
    result = run_cli(
        ["--use-defaults", "-i", str(sample_assets), "-o", str(tmp_path / "m.txt"), "--debug"],
        home,
    )

    assert result.returncode == 0, result.stderr
    assert "crc32=0x" in result.stderr


def test_cli_help_message(home: Path) -> None:
    result = run_cli(["--help"], home)

    assert result.returncode == 0
    assert "usage: assetindex" in result.stdout
    assert "--input" in result.stdout
