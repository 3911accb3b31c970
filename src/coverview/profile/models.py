"""Coverage profile data model.

One Profile per source file, holding the statement blocks recorded for it by
`go test -coverprofile`. Block coordinates are 1-based; end columns are
exclusive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class CountingMode(StrEnum):
    """How execution counts combine.

    SET is boolean (0/1); COUNT and ATOMIC are cumulative hit counts.
    """

    SET = "set"
    COUNT = "count"
    ATOMIC = "atomic"

    @property
    def is_boolean(self) -> bool:
        return self is CountingMode.SET


@dataclass(frozen=True, slots=True)
class CoverageBlock:
    """A contiguous source range with its statement and execution counts."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    num_stmt: int
    count: int

    @property
    def start(self) -> tuple[int, int]:
        return (self.start_line, self.start_col)

    @property
    def end(self) -> tuple[int, int]:
        return (self.end_line, self.end_col)

    def same_range(self, other: CoverageBlock) -> bool:
        """True when all four boundary coordinates match."""
        return self.start == other.start and self.end == other.end

    def range_label(self) -> str:
        """Range in profile notation, e.g. ``10.2,12.16``."""
        return f"{self.start_line}.{self.start_col},{self.end_line}.{self.end_col}"


@dataclass(slots=True)
class Profile:
    """Coverage data for one source file."""

    file_name: str  # identifier as recorded in the profile
    mode: CountingMode
    blocks: list[CoverageBlock] = field(default_factory=list)

    @property
    def total_statements(self) -> int:
        return sum(block.num_stmt for block in self.blocks)

    @property
    def covered_statements(self) -> int:
        return sum(block.num_stmt for block in self.blocks if block.count > 0)
