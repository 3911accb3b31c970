"""Report data model handed to the renderer.

Everything here is immutable and fully derived: renderers read it as-is and
never recompute classes, percentages or ordering. Percentages and classes are
properties over the statement counts, so they cannot drift from them.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from coverview.annotate.lines import LineAnnotation
from coverview.report.stats import CoverageClass, coverage_class, format_percent, percent


class _CoverageCounts:
    """Derived coverage figures for anything with covered/total statements."""

    __slots__ = ()

    covered_statements: int
    total_statements: int

    @property
    def percent(self) -> float:
        return percent(self.covered_statements, self.total_statements)

    @property
    def coverage_class(self) -> CoverageClass:
        return coverage_class(self.percent)

    @property
    def percent_label(self) -> str:
        return format_percent(self.percent)

    def _counts_dict(self) -> dict[str, Any]:
        return {
            "covered_statements": self.covered_statements,
            "total_statements": self.total_statements,
            "coverage_percent": round(self.percent, 2),
            "coverage_label": self.percent_label,
            "coverage_class": self.coverage_class.value,
        }


@dataclass(frozen=True, slots=True)
class ResolvedFile(_CoverageCounts):
    """One profiled file with its resolved location and line annotations."""

    name: str  # identifier as recorded in the profile
    source_path: str
    relative_path: str
    covered_statements: int
    total_statements: int
    anchor: str
    lines: tuple[LineAnnotation, ...] = ()
    missing: bool = False
    missing_description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "source_path": self.source_path,
            "relative_path": self.relative_path,
            "anchor": self.anchor,
            **self._counts_dict(),
            "missing": self.missing,
            "missing_description": self.missing_description,
            "lines": [
                {
                    "number": line.number,
                    "code": line.code,
                    "class": line.line_class.value,
                    "ranges": line.ranges_attr,
                }
                for line in self.lines
            ],
        }


@dataclass(frozen=True, slots=True)
class TreeNode(_CoverageCounts):
    """File or directory entry in the report tree.

    Directory children are ordered directories first, then files, each
    alphabetically.
    """

    name: str
    path: str  # slash-joined segments from the tree root
    is_dir: bool
    covered_statements: int
    total_statements: int
    children: tuple[TreeNode, ...] = ()
    relative_path: str = ""  # file nodes only
    anchor: str = ""  # file nodes only

    def walk(self) -> Iterator[TreeNode]:
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "path": self.path,
            "is_dir": self.is_dir,
            **self._counts_dict(),
        }
        if self.is_dir:
            data["children"] = [child.to_dict() for child in self.children]
        else:
            data["relative_path"] = self.relative_path
            data["anchor"] = self.anchor
        return data


@dataclass(frozen=True, slots=True)
class Report(_CoverageCounts):
    """Whole-run aggregate. Files keep profile encounter order."""

    title: str
    generated_at: str
    covered_statements: int
    total_statements: int
    missing_files: int
    tree: tuple[TreeNode, ...]
    files: tuple[ResolvedFile, ...]

    @property
    def total_files(self) -> int:
        return len(self.files)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view of the full report."""
        return {
            "title": self.title,
            "generated_at": self.generated_at,
            **self._counts_dict(),
            "total_files": self.total_files,
            "missing_files": self.missing_files,
            "tree": [node.to_dict() for node in self.tree],
            "files": [file.to_dict() for file in self.files],
        }
