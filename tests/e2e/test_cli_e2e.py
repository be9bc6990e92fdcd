from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script in a subprocess and validates exit codes,
stdout listing, stderr diagnostics and file side effects.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "dirtree" / "main.py"


def run_cli(args: List[str], home: Path) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process.

    HOME points at a temporary folder so the user data directory is isolated.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)

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
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    /input
      /x
        f.txt
      /y
        f.txt
      .git/
        HEAD
    """
    root = tmp_path / "input"
    root.mkdir()
    for name in ("x", "y"):
        (root / name).mkdir()
        (root / name / "f.txt").write_text(name, encoding="utf-8")
    (root / ".git").mkdir()
    (root / ".git" / "HEAD").write_text("ref", encoding="utf-8")
    return root


def test_cli_lists_tree_in_level_order(sample_tree: Path, home: Path) -> None:
    result = run_cli([str(sample_tree), "--use-defaults"], home)

    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"
    lines = result.stdout.splitlines()
    assert len(lines) == 5
    assert lines[0] == f"1:1:{sample_tree}"
    # Enumeration order is filesystem dependent; levels and ordinals are not
    assert [line.split(":", 2)[:2] for line in lines[1:3]] == [["2", "1"], ["2", "2"]]
    assert {line.split(":", 2)[2] for line in lines[1:3]} == {str(sample_tree / "x"), str(sample_tree / "y")}
    assert [line.split(":", 2)[:2] for line in lines[3:]] == [["3", "1"], ["3", "2"]]
    assert ".git" not in result.stdout


def test_cli_saves_listing_file(sample_tree: Path, home: Path, tmp_path: Path) -> None:
    out_file = tmp_path / "out" / "listing.txt"

    result = run_cli([str(sample_tree), "--use-defaults", "--no-print", "-o", str(out_file)], home)

    assert result.returncode == 0
    assert result.stdout == ""
    assert len(out_file.read_text(encoding="utf-8").splitlines()) == 5


def test_cli_missing_input_lists_root_only(tmp_path: Path, home: Path) -> None:
    missing = tmp_path / "nope"

    result = run_cli([str(missing), "--use-defaults"], home)

    assert result.returncode == 0
    assert result.stdout.splitlines() == [f"1:1:{missing}"]
    assert "Cannot open directory" in result.stderr
