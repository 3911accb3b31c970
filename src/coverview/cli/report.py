"""coverview report command - build the full annotated report."""

import json
from pathlib import Path

import click

from coverview.cli.utils import load_run_config, resolve_root, run_report
from coverview.core.progress import status
from coverview.report.summary import build_text_summary


@click.command()
@click.argument("profile", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Root for resolving source files (defaults to the profile directory)",
)
@click.option("--title", default=None, help="Report title")
@click.option(
    "--out",
    "out_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write report JSON here instead of stdout",
)
@click.option("--no-go-list", is_flag=True, help="Skip the go list package lookup")
@click.option("--workers", type=int, default=None, help="Threads for per-file annotation")
def report_command(
    profile: Path,
    root: Path | None,
    title: str | None,
    out_path: Path | None,
    no_go_list: bool,
    workers: int | None,
) -> None:
    """Build an annotated coverage report from a Go coverage PROFILE.

    The report (files, line classes, uncovered ranges, directory tree) is
    written as JSON for a renderer to consume.
    """
    root_path = resolve_root(profile, root)

    overrides: dict[str, dict[str, object]] = {}
    if no_go_list:
        overrides["resolver"] = {"use_go_list": False}
    if workers is not None:
        overrides["report"] = {"workers": workers}
    config = load_run_config(root_path, **overrides)

    report = run_report(profile, root_path, config, title=title)
    payload = json.dumps(report.to_dict(), indent=2)

    if out_path is None:
        click.echo(payload)
    else:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(payload + "\n")
        status(f"Report written to {out_path}", style="success")

    style = "warning" if report.missing_files else "success"
    status(build_text_summary(report), style=style)
