from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An in-memory filesystem whose enumeration order is pinned by the test.
"""

import errno
import os
import sys
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# In-Memory Filesystem
# -----------------------------------------------------------------------------
class FakeFileSystem:
    """
    Deterministic stand-in for LocalFileSystem.

    'layout' maps entry names to a nested dict (directory) or None (file).
    Entries are enumerated in dict order, preceded by the '.' and '..'
    pseudo-entries a real directory read returns.
    """

    def __init__(
            self,
            root_path: str,
            layout: Dict[str, Any],
            unreadable: Iterable[str] = (),
            unstatable: Iterable[str] = (),
    ) -> None:
        self.dirs: Dict[str, List[str]] = {}
        self.files: Set[str] = set()
        self.unreadable: Set[str] = set(unreadable)
        self.unstatable: Set[str] = set(unstatable)
        self.open_handles = 0
        self.scanned: List[str] = []
        self._register(root_path, layout)

    def _register(self, path: str, layout: Dict[str, Any]) -> None:
        self.dirs[path] = list(layout)
        for name, sub in layout.items():
            child = os.path.join(path, name)
            if isinstance(sub, dict):
                self._register(child, sub)
            else:
                self.files.add(child)

    @contextmanager
    def scan_names(self, path: str) -> Iterator[Iterator[str]]:
        if path in self.unreadable:
            raise PermissionError(errno.EACCES, "Permission denied", path)
        if path not in self.dirs:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)

        self.scanned.append(path)
        self.open_handles += 1
        try:
            yield iter([".", ".."] + self.dirs[path])
        finally:
            self.open_handles -= 1

    def is_directory(self, path: str) -> bool:
        if path in self.unstatable:
            raise PermissionError(errno.EACCES, "Permission denied", path)
        if path in self.dirs:
            return True
        if path in self.files:
            return False
        raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_fs():
    """Return a factory building FakeFileSystem instances."""
    def _factory(
            root_path: str,
            layout: Dict[str, Any],
            unreadable: Optional[Iterable[str]] = None,
            unstatable: Optional[Iterable[str]] = None,
    ) -> FakeFileSystem:
        return FakeFileSystem(root_path, layout, unreadable or (), unstatable or ())
    return _factory


@pytest.fixture
def simple_fs(make_fs) -> FakeFileSystem:
    """/root containing an empty directory 'a' followed by a file 'b.txt'."""
    return make_fs("/root", {"a": {}, "b.txt": None})


@pytest.fixture
def two_dirs_fs(make_fs) -> FakeFileSystem:
    """/root containing directories 'x' and 'y', each holding 'f.txt'."""
    return make_fs("/root", {"x": {"f.txt": None}, "y": {"f.txt": None}})


@pytest.fixture
def mock_config_dict(tmp_path) -> Dict[str, Any]:
    """Return a valid, complete configuration dictionary for testing."""
    return {
        "input_path": "/root",
        "output_file": "",
        "print_listing": True,
        "save_error_log": False,
        "error_log_path": str(tmp_path / "scan_errors.txt"),
        "log_level": "INFO",
        "log_file": "",
    }
