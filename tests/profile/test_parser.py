"""Tests for Go coverage profile parsing."""

from pathlib import Path

import pytest

from coverview.core.errors import ConsistencyError, ErrorCode, FormatError
from coverview.profile import CountingMode, CoverageBlock, parse_profile, parse_profile_text
from coverview.profile.parser import parse_block_line


class TestParseBlockLine:
    """Tests for single data line parsing."""

    def test_parses_all_fields(self) -> None:
        file_name, block = parse_block_line("example.com/m/pkg/a.go:10.2,12.16 3 1", 2)

        assert file_name == "example.com/m/pkg/a.go"
        assert block == CoverageBlock(10, 2, 12, 16, 3, 1)

    def test_splits_on_last_colon(self) -> None:
        file_name, block = parse_block_line(r"C:\src\pkg\a.go:1.1,2.5 1 0", 1)

        assert file_name == r"C:\src\pkg\a.go"
        assert block.start_line == 1
        assert block.end_col == 5

    @pytest.mark.parametrize(
        "line",
        [
            "a.go:1.1,2.2 1",
            "a.go:1.1,2.2 1 1 extra",
            "a.go 1 1",
            "a.go:1.1 1 1",
            "a.go:1.1,2 1 1",
            "a.go:x.1,2.2 1 1",
            "a.go:1.1,2.2 one 1",
            "a.go:1.1,2.2 1 1.5",
            ":1.1,2.2 1 1",
            "a.go:3.1,2.2 1 1",
        ],
    )
    def test_malformed_lines_raise_with_line_number(self, line: str) -> None:
        with pytest.raises(FormatError) as exc_info:
            parse_block_line(line, 42)

        assert exc_info.value.code == ErrorCode.PROFILE_FORMAT_ERROR
        assert exc_info.value.details["line"] == 42


class TestParseProfileText:
    """Tests for whole-profile parsing."""

    def test_groups_blocks_by_file_in_first_seen_order(self) -> None:
        text = (
            "mode: count\n"
            "m/b.go:1.1,2.2 1 1\n"
            "m/a.go:1.1,2.2 1 0\n"
            "m/b.go:3.1,4.2 2 5\n"
        )

        profiles = parse_profile_text(text)

        assert [p.file_name for p in profiles] == ["m/b.go", "m/a.go"]
        assert profiles[0].mode is CountingMode.COUNT
        assert len(profiles[0].blocks) == 2
        assert profiles[0].total_statements == 3
        assert profiles[0].covered_statements == 3
        assert profiles[1].covered_statements == 0

    def test_blank_and_comment_lines_skipped(self) -> None:
        text = "\n# generated\nmode: set\n\n   \na.go:1.1,1.5 1 1\n"

        profiles = parse_profile_text(text)

        assert len(profiles) == 1
        assert profiles[0].mode is CountingMode.SET

    def test_missing_mode_before_data(self) -> None:
        with pytest.raises(FormatError) as exc_info:
            parse_profile_text("a.go:1.1,1.5 1 1\nmode: set\n")

        assert exc_info.value.code == ErrorCode.PROFILE_MISSING_MODE
        assert exc_info.value.message == "missing mode"
        assert exc_info.value.details["line"] == 1

    @pytest.mark.parametrize("text", ["", "\n\n", "# only a comment\n"])
    def test_no_mode_at_all(self, text: str) -> None:
        with pytest.raises(FormatError) as exc_info:
            parse_profile_text(text)

        assert exc_info.value.code == ErrorCode.PROFILE_MISSING_MODE

    def test_mode_only_yields_no_profiles(self) -> None:
        assert parse_profile_text("mode: atomic\n") == []

    def test_unknown_mode(self) -> None:
        with pytest.raises(FormatError) as exc_info:
            parse_profile_text("mode: sometimes\n")

        assert "unknown mode" in exc_info.value.message

    def test_repeated_identical_mode_accepted(self) -> None:
        text = "mode: set\na.go:1.1,1.5 1 1\nmode: set\na.go:2.1,2.5 1 0\n"

        profiles = parse_profile_text(text)

        assert len(profiles[0].blocks) == 2

    def test_conflicting_mode_rejected(self) -> None:
        text = "mode: set\na.go:1.1,1.5 1 1\nmode: count\n"

        with pytest.raises(FormatError) as exc_info:
            parse_profile_text(text)

        assert exc_info.value.details["line"] == 3

    def test_bad_data_line_reports_its_line_number(self) -> None:
        text = "mode: set\na.go:1.1,1.5 1 1\na.go:2.1,2.5 1\n"

        with pytest.raises(FormatError) as exc_info:
            parse_profile_text(text)

        assert exc_info.value.details["line"] == 3

    def test_duplicate_set_blocks_merge_to_hit(self) -> None:
        profiles = parse_profile_text("mode: set\na.go:1.1,3.2 2 1\na.go:1.1,3.2 2 0\n")

        assert profiles[0].blocks == [CoverageBlock(1, 1, 3, 2, 2, 1)]

    def test_inconsistent_duplicate_raises(self) -> None:
        with pytest.raises(ConsistencyError) as exc_info:
            parse_profile_text("mode: count\na.go:1.1,3.2 2 1\na.go:1.1,3.2 3 0\n")

        assert "2" in exc_info.value.message
        assert "3" in exc_info.value.message

    def test_merge_disabled_keeps_raw_blocks(self) -> None:
        profiles = parse_profile_text(
            "mode: count\na.go:1.1,3.2 2 1\na.go:1.1,3.2 2 4\n", merge=False
        )

        assert len(profiles[0].blocks) == 2


class TestParseProfile:
    """Tests for reading profiles from disk."""

    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "coverage.out"
        path.write_text("mode: count\na.go:1.1,1.5 1 2\n")

        profiles = parse_profile(path)

        assert profiles[0].blocks[0].count == 2

    def test_missing_file_raises_format_error(self, tmp_path: Path) -> None:
        with pytest.raises(FormatError) as exc_info:
            parse_profile(tmp_path / "nope.out")

        assert "cannot read profile" in exc_info.value.message
