from __future__ import annotations

"""
Unit tests for the Directory Tree Builder.

Uses the in-memory filesystem to pin enumeration order and inject
failures, plus a real temporary directory for the local backend.
"""

from pathlib import Path
from typing import List

from dirtree.core.analysis.tree_builder import build_tree, populate_tree
from dirtree.domain.errors import DIRECTORY_OPEN_FAILURE, STATUS_LOOKUP_FAILURE, ScanIssue
from dirtree.domain.tree_models import TreeNode, create_node


def _walk(node: TreeNode) -> List[TreeNode]:
    """Pre-order list of every node under (and including) 'node'."""
    out = [node]
    for child in node.children:
        out.extend(_walk(child))
    return out


def test_build_tree_mirrors_layout_in_read_order(simple_fs) -> None:
    root = build_tree("/root", fs=simple_fs)

    assert root.path == "/root"
    assert root.level == 1
    assert root.next_sibling is None
    assert [c.path for c in root.children] == ["/root/a", "/root/b.txt"]
    assert root.children.first.children.is_empty()


def test_levels_increase_by_one_per_depth(make_fs) -> None:
    fs = make_fs("/root", {
        "src": {"pkg": {"mod.py": None}, "main.py": None},
        "README": None,
    })
    root = build_tree("/root", fs=fs)

    def check(node: TreeNode) -> None:
        for child in node.children:
            assert child.level == node.level + 1
            check(child)

    check(root)
    assert len(_walk(root)) == 6


def test_hidden_entries_and_descendants_excluded(make_fs) -> None:
    fs = make_fs("/root", {
        ".git": {"config": None, "objects": {"aa": None}},
        ".env": None,
        "visible": {".cache": {"blob": None}, "keep.txt": None},
    })
    root = build_tree("/root", fs=fs)

    paths = [n.path for n in _walk(root)]
    assert paths == ["/root", "/root/visible", "/root/visible/keep.txt"]
    # Hidden directories are never opened
    assert "/root/.git" not in fs.scanned


def test_only_hidden_entry_yields_lone_root(make_fs) -> None:
    fs = make_fs("/root", {".secret": None})
    root = build_tree("/root", fs=fs)

    assert root.children.is_empty()


def test_depth_first_discovery_order(make_fs) -> None:
    """A subdirectory is scanned before the rest of its parent is read."""
    fs = make_fs("/root", {
        "a": {"deep": {"leaf": None}},
        "b": {},
    })
    build_tree("/root", fs=fs)

    assert fs.scanned == ["/root", "/root/a", "/root/a/deep", "/root/b"]


def test_unreadable_directory_reported_and_siblings_continue(make_fs) -> None:
    fs = make_fs(
        "/root",
        {"locked": {"inner": None}, "open": {"f": None}},
        unreadable=["/root/locked"],
    )
    issues: List[ScanIssue] = []

    root = build_tree("/root", fs=fs, issues=issues)

    locked, opened = list(root.children)
    assert locked.path == "/root/locked"
    assert locked.children.is_empty()
    assert [c.path for c in opened.children] == ["/root/open/f"]
    assert issues == [
        ScanIssue(kind=DIRECTORY_OPEN_FAILURE, path="/root/locked", error=issues[0].error)
    ]
    assert "Permission denied" in issues[0].error


def test_unopenable_start_directory_gives_root_only(make_fs) -> None:
    fs = make_fs("/root", {"a": None})
    issues: List[ScanIssue] = []

    root = build_tree("/missing", fs=fs, issues=issues)

    assert root.path == "/missing"
    assert root.children.is_empty()
    assert issues[0].kind == DIRECTORY_OPEN_FAILURE


def test_status_lookup_failure_becomes_leaf(make_fs) -> None:
    fs = make_fs(
        "/root",
        {"mystery": {"hidden_child": None}, "plain.txt": None},
        unstatable=["/root/mystery"],
    )
    issues: List[ScanIssue] = []

    root = build_tree("/root", fs=fs, issues=issues)

    mystery = root.children.first
    assert mystery.path == "/root/mystery"
    assert mystery.children.is_empty()
    assert "/root/mystery" not in fs.scanned
    assert [i.kind for i in issues] == [STATUS_LOOKUP_FAILURE]


def test_issues_accumulator_is_optional(make_fs) -> None:
    fs = make_fs("/root", {"x": {}}, unreadable=["/root/x"], unstatable=[])
    root = build_tree("/root", fs=fs)
    assert root.children.first.path == "/root/x"


def test_directory_handles_closed_on_all_paths(make_fs) -> None:
    fs = make_fs(
        "/root",
        {"a": {"b": {"c": None}}, "bad": {}, "z": None},
        unreadable=["/root/bad"],
    )
    build_tree("/root", fs=fs)
    assert fs.open_handles == 0


def test_populate_tree_attaches_under_given_level(make_fs) -> None:
    fs = make_fs("/data", {"f": None})
    node = create_node("/data", 4)

    populate_tree(node, fs=fs)

    assert node.children.first.level == 5


def test_build_tree_trailing_separator_normalized(make_fs) -> None:
    fs = make_fs("/root", {"a": None})
    root = build_tree("/root/", fs=fs)

    assert root.path == "/root"
    assert root.children.first.path == "/root/a"


def test_build_tree_on_real_directory(tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "inner.txt").write_text("x", encoding="utf-8")
    (tmp_path / "top.txt").write_text("y", encoding="utf-8")
    (tmp_path / ".hidden").mkdir()
    (tmp_path / ".hidden" / "nope").write_text("z", encoding="utf-8")

    root = build_tree(str(tmp_path))

    by_path = {n.path: n for n in _walk(root)}
    assert set(by_path) == {
        str(tmp_path),
        str(tmp_path / "sub"),
        str(tmp_path / "sub" / "inner.txt"),
        str(tmp_path / "top.txt"),
    }
    assert by_path[str(tmp_path / "sub" / "inner.txt")].level == 3
    assert by_path[str(tmp_path / "top.txt")].children.is_empty()
