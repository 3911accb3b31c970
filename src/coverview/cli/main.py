"""Coverview CLI - coverview command."""

import click

from coverview.cli.report import report_command
from coverview.cli.summary import summary_command
from coverview.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="coverview")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Coverview - annotated Go coverage reports."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(report_command, name="report")
cli.add_command(summary_command, name="summary")


if __name__ == "__main__":
    cli()
