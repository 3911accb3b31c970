"""Report assembly, tree aggregation and summaries."""

from coverview.report.assemble import build_file_report, build_report, generate_report
from coverview.report.models import Report, ResolvedFile, TreeNode
from coverview.report.stats import (
    CoverageClass,
    compress_ranges,
    coverage_class,
    format_percent,
    percent,
    sanitize_anchor,
)
from coverview.report.summary import build_summary, build_text_summary
from coverview.report.tree import build_tree

__all__ = [
    # Models
    "Report",
    "ResolvedFile",
    "TreeNode",
    # Assembly
    "build_file_report",
    "build_report",
    "generate_report",
    "build_tree",
    # Stats
    "CoverageClass",
    "compress_ranges",
    "coverage_class",
    "format_percent",
    "percent",
    "sanitize_anchor",
    # Summaries
    "build_summary",
    "build_text_summary",
]
