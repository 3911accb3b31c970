"""Structured and text summaries of an assembled Report.

Output schema for build_summary:
{
    "summary": {
        "title": str,
        "total_files": int,
        "missing_files": int,
        "covered_statements": int,
        "total_statements": int,
        "coverage_percent": float,
        "coverage_class": str
    },
    "files": [
        {
            "path": str,
            "covered_statements": int,
            "total_statements": int,
            "coverage_percent": float,
            "coverage_class": str,
            "missing": bool,
            "missed_lines": str   # "3-5,9"; missed and partial lines
        },
        ...
    ]
}
"""

from typing import Any

from coverview.annotate.lines import LineClass
from coverview.core.progress import pluralize
from coverview.report.models import Report, ResolvedFile
from coverview.report.stats import compress_ranges

_UNCOVERED = (LineClass.MISSED, LineClass.PARTIAL)


def _file_stats(file: ResolvedFile) -> dict[str, Any]:
    missed = [line.number for line in file.lines if line.line_class in _UNCOVERED]
    return {
        "path": file.relative_path or file.name,
        "covered_statements": file.covered_statements,
        "total_statements": file.total_statements,
        "coverage_percent": round(file.percent, 2),
        "coverage_class": file.coverage_class.value,
        "missing": file.missing,
        "missed_lines": compress_ranges(missed),
    }


def build_summary(
    report: Report,
    *,
    include_files: bool = True,
    max_files: int | None = None,
) -> dict[str, Any]:
    """Build a JSON-ready coverage summary.

    Args:
        report: The assembled report.
        include_files: Whether to include per-file details.
        max_files: Limit number of files (lowest coverage first). None = all.
    """
    result: dict[str, Any] = {
        "summary": {
            "title": report.title,
            "total_files": report.total_files,
            "missing_files": report.missing_files,
            "covered_statements": report.covered_statements,
            "total_statements": report.total_statements,
            "coverage_percent": round(report.percent, 2),
            "coverage_class": report.coverage_class.value,
        },
    }

    if include_files:
        file_stats = [_file_stats(file) for file in report.files]
        # Lowest coverage first to surface problem areas
        file_stats.sort(key=lambda f: (f["coverage_percent"], f["path"]))
        if max_files is not None:
            file_stats = file_stats[:max_files]
        result["files"] = file_stats

    return result


def build_text_summary(report: Report) -> str:
    """One-line summary for terminal output."""
    if report.total_files == 0:
        return "No coverage data"

    text = (
        f"Coverage: {report.percent_label} "
        f"({report.covered_statements}/{report.total_statements} statements, "
        f"{pluralize(report.total_files, 'file')})"
    )
    if report.missing_files:
        text += f", {report.missing_files} missing"
    return text
