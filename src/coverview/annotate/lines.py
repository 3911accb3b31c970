"""Per-line coverage classification.

Each block contributes to every line it spans: COVERED when it executed,
MISSED otherwise. A line's class is an order-independent reduction over its
contributions:

    covered and missed  -> PARTIAL
    covered only        -> COVERED
    missed only         -> MISSED
    nothing             -> NOT_TRACKED

PARTIAL lines also carry the column spans that did not execute, merged into
a sorted disjoint list, so a renderer can underline exactly those tokens.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from coverview.profile.models import CoverageBlock


class LineClass(StrEnum):
    """Coverage classification of one source line."""

    NOT_TRACKED = "not-tracked"
    COVERED = "covered"
    MISSED = "missed"
    PARTIAL = "partial"


class Contribution(StrEnum):
    """What a single block says about a line it spans."""

    COVERED = "covered"
    MISSED = "missed"


@dataclass(frozen=True, slots=True, order=True)
class LineRange:
    """Half-open 1-based column span ``[start, end)``."""

    start: int
    end: int

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True, slots=True)
class LineAnnotation:
    """Classification of one physical source line."""

    number: int
    code: str
    line_class: LineClass
    ranges: tuple[LineRange, ...] = ()

    @property
    def ranges_attr(self) -> str:
        """Uncovered spans as ``"5-10,14-20"``; empty unless partial."""
        return ",".join(str(item) for item in self.ranges)


@dataclass(slots=True)
class _LineState:
    contributions: set[Contribution] = field(default_factory=set)
    missed_ranges: list[LineRange] = field(default_factory=list)


def classify(contributions: Iterable[Contribution]) -> LineClass:
    """Reduce block contributions for one line to its class."""
    seen = set(contributions)
    covered = Contribution.COVERED in seen
    missed = Contribution.MISSED in seen
    if covered and missed:
        return LineClass.PARTIAL
    if covered:
        return LineClass.COVERED
    if missed:
        return LineClass.MISSED
    return LineClass.NOT_TRACKED


def merge_ranges(ranges: Iterable[LineRange]) -> list[LineRange]:
    """Coalesce overlapping or touching ranges into a sorted disjoint list."""
    ordered = sorted(ranges)
    if not ordered:
        return []

    merged: list[LineRange] = []
    current = ordered[0]
    for item in ordered[1:]:
        if item.start <= current.end:
            if item.end > current.end:
                current = LineRange(current.start, item.end)
            continue
        merged.append(current)
        current = item
    merged.append(current)
    return merged


def split_source(text: str) -> list[str]:
    """Split source on newlines; a trailing newline yields a final empty line."""
    return text.split("\n")


def _column_span(block: CoverageBlock, line: int, text: str) -> LineRange:
    max_col = len(text) + 1
    start_col = block.start_col if line == block.start_line else 1
    end_col = block.end_col if line == block.end_line else max_col

    start_col = min(max(start_col, 1), max_col)
    end_col = min(max(end_col, start_col), max_col)
    return LineRange(start_col, end_col)


def annotate_lines(
    blocks: Iterable[CoverageBlock],
    source_lines: Sequence[str],
) -> list[LineAnnotation]:
    """Classify every source line against a file's merged blocks.

    Args:
        blocks: Merged blocks for the file.
        source_lines: The file split into lines (see split_source).

    Returns:
        One LineAnnotation per source line, in line order.
    """
    line_count = len(source_lines)
    states = [_LineState() for _ in range(line_count)]

    for block in blocks:
        start = max(block.start_line, 1)
        end = min(block.end_line, line_count)
        for line in range(start, end + 1):
            state = states[line - 1]
            if block.count > 0:
                state.contributions.add(Contribution.COVERED)
                continue

            state.contributions.add(Contribution.MISSED)
            span = _column_span(block, line, source_lines[line - 1])
            if span.end > span.start:
                state.missed_ranges.append(span)

    annotations: list[LineAnnotation] = []
    for index, (text, state) in enumerate(zip(source_lines, states, strict=True)):
        line_class = classify(state.contributions)
        ranges: tuple[LineRange, ...] = ()
        if line_class is LineClass.PARTIAL:
            ranges = tuple(merge_ranges(state.missed_ranges))
        annotations.append(
            LineAnnotation(number=index + 1, code=text, line_class=line_class, ranges=ranges)
        )
    return annotations
