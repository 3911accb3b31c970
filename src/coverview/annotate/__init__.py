"""Line-level coverage annotation."""

from coverview.annotate.lines import (
    Contribution,
    LineAnnotation,
    LineClass,
    LineRange,
    annotate_lines,
    classify,
    merge_ranges,
    split_source,
)

__all__ = [
    "Contribution",
    "LineAnnotation",
    "LineClass",
    "LineRange",
    "annotate_lines",
    "classify",
    "merge_ranges",
    "split_source",
]
