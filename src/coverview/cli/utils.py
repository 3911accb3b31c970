"""CLI utilities."""

from pathlib import Path
from typing import Any

import click

from coverview.config.loader import load_config
from coverview.config.models import CoverviewConfig
from coverview.core.errors import CoverviewError
from coverview.core.logging import configure_logging
from coverview.core.progress import spinner
from coverview.report.assemble import generate_report
from coverview.report.models import Report


def resolve_root(profile: Path, root: Path | None) -> Path:
    """Source root: explicit --root, else the profile's directory."""
    return (root if root is not None else profile.parent).resolve()


def _verbose() -> bool:
    ctx = click.get_current_context(silent=True)
    obj = ctx.find_root().obj if ctx is not None else None
    return bool(obj and obj.get("verbose"))


def load_run_config(root: Path, **overrides: Any) -> CoverviewConfig:
    """Load config for a run and apply its logging section.

    ``-v`` on the command group forces DEBUG over the configured level.
    Config errors become CLI errors.
    """
    try:
        config = load_config(root, **overrides)
    except CoverviewError as e:
        raise click.ClickException(e.message) from e

    logging_config = config.logging
    if _verbose():
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    return config


def run_report(
    profile: Path,
    root: Path,
    config: CoverviewConfig,
    *,
    title: str | None = None,
) -> Report:
    """Generate a report with a spinner, mapping failures to ClickException."""
    try:
        with spinner(f"Building coverage report for {profile.name}"):
            return generate_report(profile, root, title=title, config=config)
    except CoverviewError as e:
        raise click.ClickException(e.message) from e
