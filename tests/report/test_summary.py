"""Tests for structured and text report summaries."""

from coverview.annotate.lines import LineAnnotation, LineClass
from coverview.report.models import Report, ResolvedFile
from coverview.report.summary import build_summary, build_text_summary
from coverview.report.tree import build_tree


def _lines(*classes: LineClass) -> tuple[LineAnnotation, ...]:
    return tuple(
        LineAnnotation(number=i, code="x", line_class=cls) for i, cls in enumerate(classes, 1)
    )


def _report(*files: ResolvedFile) -> Report:
    return Report(
        title="Shop",
        generated_at="2026-01-01 00:00:00",
        covered_statements=sum(f.covered_statements for f in files),
        total_statements=sum(f.total_statements for f in files),
        missing_files=sum(1 for f in files if f.missing),
        tree=build_tree(files),
        files=files,
    )


GOOD = ResolvedFile(
    name="m/pkg/good.go",
    source_path="/src/pkg/good.go",
    relative_path="pkg/good.go",
    covered_statements=9,
    total_statements=10,
    anchor="m-pkg-good-go",
    lines=_lines(LineClass.COVERED, LineClass.COVERED, LineClass.MISSED),
)
BAD = ResolvedFile(
    name="m/pkg/bad.go",
    source_path="/src/pkg/bad.go",
    relative_path="pkg/bad.go",
    covered_statements=1,
    total_statements=4,
    anchor="m-pkg-bad-go",
    lines=_lines(
        LineClass.NOT_TRACKED,
        LineClass.MISSED,
        LineClass.PARTIAL,
        LineClass.MISSED,
        LineClass.COVERED,
        LineClass.MISSED,
    ),
)
GONE = ResolvedFile(
    name="m/gone.go",
    source_path="/src/gone.go",
    relative_path="gone.go",
    covered_statements=0,
    total_statements=2,
    anchor="m-gone-go",
    missing=True,
    missing_description="source not found at /src/gone.go",
)


class TestBuildSummary:
    def test_totals(self) -> None:
        summary = build_summary(_report(GOOD, BAD, GONE))["summary"]

        assert summary == {
            "title": "Shop",
            "total_files": 3,
            "missing_files": 1,
            "covered_statements": 10,
            "total_statements": 16,
            "coverage_percent": 62.5,
            "coverage_class": "low",
        }

    def test_files_lowest_coverage_first(self) -> None:
        files = build_summary(_report(GOOD, BAD, GONE))["files"]

        assert [f["path"] for f in files] == ["gone.go", "pkg/bad.go", "pkg/good.go"]

    def test_missed_lines_compressed(self) -> None:
        files = {f["path"]: f for f in build_summary(_report(GOOD, BAD))["files"]}

        assert files["pkg/bad.go"]["missed_lines"] == "2-4,6"
        assert files["pkg/good.go"]["missed_lines"] == "3"

    def test_missing_file_entry(self) -> None:
        entry = build_summary(_report(GONE))["files"][0]

        assert entry["missing"] is True
        assert entry["missed_lines"] == ""
        assert entry["coverage_class"] == "none"

    def test_max_files(self) -> None:
        files = build_summary(_report(GOOD, BAD, GONE), max_files=1)["files"]

        assert [f["path"] for f in files] == ["gone.go"]

    def test_without_files(self) -> None:
        assert "files" not in build_summary(_report(GOOD), include_files=False)


class TestBuildTextSummary:
    def test_no_files(self) -> None:
        assert build_text_summary(_report()) == "No coverage data"

    def test_single_file(self) -> None:
        assert build_text_summary(_report(GOOD)) == "Coverage: 90.0% (9/10 statements, 1 file)"

    def test_missing_files_reported(self) -> None:
        text = build_text_summary(_report(GOOD, BAD, GONE))

        assert text == "Coverage: 62.5% (10/16 statements, 3 files), 1 missing"
