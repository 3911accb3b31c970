"""Directory/file tree with rolled-up statement counts.

The tree is built with mutable builder entries (directories own their
subdirectories and files by name), aggregated once bottom-up after every file
is inserted, then frozen into TreeNode values.

Files and directories are keyed separately, so a file and a directory may
share a name. When two profile identifiers resolve to the same path, the
later file is keyed by its identifier as well; both stay in the tree and in
the totals.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from coverview.core.logging import get_logger
from coverview.report.models import ResolvedFile, TreeNode

log = get_logger("report.tree")


@dataclass(slots=True)
class _TreeEntry:
    name: str
    path: str
    directories: dict[str, _TreeEntry] = field(default_factory=dict)
    files: dict[str, ResolvedFile] = field(default_factory=dict)
    covered: int = 0
    total: int = 0


def _join(parent: str, name: str) -> str:
    return f"{parent}/{name}" if parent else name


def tree_path(file: ResolvedFile) -> list[str]:
    """Non-empty slash-separated segments locating a file in the tree."""
    relative = (file.relative_path or file.name).replace("\\", "/")
    return [part for part in relative.split("/") if part]


def _insert(root: _TreeEntry, file: ResolvedFile) -> None:
    *parents, leaf = tree_path(file)
    current = root
    for part in parents:
        child = current.directories.get(part)
        if child is None:
            child = _TreeEntry(name=part, path=_join(current.path, part))
            current.directories[part] = child
        current = child

    key = leaf
    if key in current.files:
        key = f"{leaf} ({file.name})"
        log.warning(
            "tree_path_shared",
            path=_join(current.path, leaf),
            file=file.name,
            previous=current.files[leaf].name,
        )
    current.files[key] = file


def _aggregate(entry: _TreeEntry) -> tuple[int, int]:
    covered = sum(file.covered_statements for file in entry.files.values())
    total = sum(file.total_statements for file in entry.files.values())
    for child in entry.directories.values():
        child_covered, child_total = _aggregate(child)
        covered += child_covered
        total += child_total
    entry.covered = covered
    entry.total = total
    return covered, total


def _freeze(entry: _TreeEntry) -> tuple[TreeNode, ...]:
    directories = [
        TreeNode(
            name=child.name,
            path=child.path,
            is_dir=True,
            covered_statements=child.covered,
            total_statements=child.total,
            children=_freeze(child),
        )
        for _, child in sorted(entry.directories.items())
    ]

    files = []
    for key, file in sorted(entry.files.items()):
        path = _join(entry.path, key)
        files.append(
            TreeNode(
                name=key,
                path=path,
                is_dir=False,
                covered_statements=file.covered_statements,
                total_statements=file.total_statements,
                relative_path=file.relative_path or path,
                anchor=file.anchor,
            )
        )

    return (*directories, *files)


def build_tree(files: Iterable[ResolvedFile]) -> tuple[TreeNode, ...]:
    """Build the report tree; returns the root's children."""
    root = _TreeEntry(name="", path="")
    for file in files:
        if tree_path(file):
            _insert(root, file)

    _aggregate(root)
    return _freeze(root)
