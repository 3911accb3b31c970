"""coverview summary command - print coverage totals."""

import json
from pathlib import Path

import click
from rich.table import Table

from coverview.cli.utils import load_run_config, resolve_root, run_report
from coverview.core.progress import get_console
from coverview.report.summary import build_summary, build_text_summary

_CLASS_STYLES = {"high": "green", "medium": "yellow", "low": "red", "none": "red"}


@click.command()
@click.argument("profile", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Root for resolving source files (defaults to the profile directory)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--max-files", type=int, default=None, help="Show only the N least covered files")
@click.option("--no-go-list", is_flag=True, help="Skip the go list package lookup")
def summary_command(
    profile: Path,
    root: Path | None,
    as_json: bool,
    max_files: int | None,
    no_go_list: bool,
) -> None:
    """Summarize coverage of a Go coverage PROFILE."""
    root_path = resolve_root(profile, root)
    overrides = {"resolver": {"use_go_list": False}} if no_go_list else {}
    config = load_run_config(root_path, **overrides)

    report = run_report(profile, root_path, config)

    if as_json:
        click.echo(json.dumps(build_summary(report, max_files=max_files), indent=2))
        return

    summary = build_summary(report, max_files=max_files)
    table = Table(title=report.title, title_justify="left")
    table.add_column("File")
    table.add_column("Statements", justify="right")
    table.add_column("Coverage", justify="right")
    table.add_column("Missed lines")
    for file in summary["files"]:
        style = _CLASS_STYLES.get(file["coverage_class"], "")
        label = "missing" if file["missing"] else file["missed_lines"]
        table.add_row(
            file["path"],
            f"{file['covered_statements']}/{file['total_statements']}",
            f"[{style}]{file['coverage_percent']:.1f}%[/{style}]",
            label,
        )
    get_console().print(table)
    click.echo(build_text_summary(report))
