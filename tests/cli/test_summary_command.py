"""Tests for coverview summary command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from coverview.cli.main import cli

runner = CliRunner()

MODULE_PATH = "example.com/acme/shop"

PROFILE = f"""\
mode: count
{MODULE_PATH}/cart/cart.go:3.29,5.24 2 4
{MODULE_PATH}/cart/cart.go:5.24,7.3 1 0
{MODULE_PATH}/cart/util.go:3.13,3.15 1 1
"""


def _write_profile(root: Path, content: str = PROFILE) -> Path:
    path = root / "cover.out"
    path.write_text(content)
    return path


class TestSummaryCommand:
    """coverview summary command tests."""

    def test_given_profile_when_summary_then_prints_totals(self, go_module: Path) -> None:
        """Text mode ends with the one-line summary on stdout."""
        profile = _write_profile(go_module)

        result = runner.invoke(cli, ["summary", str(profile), "--no-go-list"])

        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "Coverage: 75.0% (3/4 statements, 2 files)"
        assert "cart/cart.go" in result.stderr

    def test_given_json_flag_when_summary_then_prints_json(self, go_module: Path) -> None:
        """--json prints the structured summary."""
        profile = _write_profile(go_module)

        result = runner.invoke(cli, ["summary", str(profile), "--no-go-list", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["summary"]["coverage_percent"] == 75.0
        assert data["summary"]["coverage_class"] == "medium"
        assert [f["path"] for f in data["files"]] == ["cart/cart.go", "cart/util.go"]
        assert data["files"][0]["missed_lines"] == "5-7"

    def test_given_max_files_when_summary_then_limits_files(self, go_module: Path) -> None:
        """--max-files keeps only the least covered files."""
        profile = _write_profile(go_module)

        result = runner.invoke(
            cli, ["summary", str(profile), "--no-go-list", "--json", "--max-files", "1"]
        )

        assert result.exit_code == 0, result.output
        assert len(json.loads(result.stdout)["files"]) == 1

    def test_given_bad_config_when_summary_then_fails(self, go_module: Path) -> None:
        """Malformed project YAML is reported as a CLI error."""
        profile = _write_profile(go_module)
        (go_module / ".coverview.yaml").write_text("report: [unclosed\n")

        result = runner.invoke(cli, ["summary", str(profile), "--no-go-list"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_given_config_title_when_summary_then_used(self, go_module: Path) -> None:
        """Project YAML settings apply to the run."""
        profile = _write_profile(go_module)
        (go_module / ".coverview.yaml").write_text("report:\n  title: Shop coverage\n")

        result = runner.invoke(cli, ["summary", str(profile), "--no-go-list", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["summary"]["title"] == "Shop coverage"


class TestCliGroup:
    def test_version(self) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output
