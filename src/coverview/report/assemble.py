"""Report assembly: parse, merge, resolve, annotate, aggregate.

Per-file work (resolve, read, annotate) has no cross-file dependency and can
run on a thread pool. The package lookup happens once before it starts, and
results are collected in profile order.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path

from coverview.annotate.lines import annotate_lines, split_source
from coverview.config.models import CoverviewConfig
from coverview.core.errors import SourceMissing
from coverview.core.logging import get_logger, set_run_id
from coverview.profile.models import Profile
from coverview.profile.parser import parse_profile
from coverview.report.models import Report, ResolvedFile
from coverview.report.stats import sanitize_anchor
from coverview.report.tree import build_tree
from coverview.resolve.resolver import FileResolver

log = get_logger("report.assemble")

GENERATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


def _read_source(profile: Profile, source_path: str) -> str:
    try:
        return Path(source_path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        raise SourceMissing.not_found(profile.file_name, source_path) from None


def build_file_report(profile: Profile, resolver: FileResolver) -> ResolvedFile:
    """Resolve, read and annotate one profiled file.

    A file that cannot be read is returned flagged missing; its statement
    counts still contribute to totals.
    """
    source_path, relative_path = resolver.resolve(profile.file_name)

    base = {
        "name": profile.file_name,
        "source_path": source_path,
        "relative_path": relative_path,
        "covered_statements": profile.covered_statements,
        "total_statements": profile.total_statements,
        "anchor": sanitize_anchor(profile.file_name),
    }

    try:
        content = _read_source(profile, source_path)
    except SourceMissing as e:
        log.warning("source_missing", file=profile.file_name, path=source_path)
        return ResolvedFile(**base, missing=True, missing_description=e.message)

    lines = annotate_lines(profile.blocks, split_source(content))
    log.debug("file_resolved", file=profile.file_name, path=source_path, lines=len(lines))
    return ResolvedFile(**base, lines=tuple(lines))


def build_report(
    profiles: Sequence[Profile],
    root: Path,
    *,
    title: str | None = None,
    config: CoverviewConfig | None = None,
    resolver: FileResolver | None = None,
) -> Report:
    """Assemble a Report from already-merged profiles.

    Args:
        profiles: Merged profiles, in profile encounter order.
        root: Directory source files are resolved against.
        title: Report title; defaults to the configured title.
        config: Run configuration; defaults apply when None.
        resolver: Pre-built resolver; created (one package lookup) when None.

    Raises:
        ResolverUnavailable: The package lookup was needed and failed.
    """
    config = config or CoverviewConfig()
    start = time.monotonic()

    if resolver is None:
        resolver = FileResolver.create(root, profiles, config.resolver)

    workers = min(config.report.workers, max(len(profiles), 1))
    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="coverview") as pool:
            files = tuple(pool.map(lambda p: build_file_report(p, resolver), profiles))
    else:
        files = tuple(build_file_report(profile, resolver) for profile in profiles)

    report = Report(
        title=title if title is not None else config.report.title,
        generated_at=datetime.now().strftime(GENERATED_AT_FORMAT),
        covered_statements=sum(f.covered_statements for f in files),
        total_statements=sum(f.total_statements for f in files),
        missing_files=sum(1 for f in files if f.missing),
        tree=build_tree(files),
        files=files,
    )

    log.info(
        "report_assembled",
        files=report.total_files,
        missing=report.missing_files,
        covered=report.covered_statements,
        total=report.total_statements,
        duration_ms=int((time.monotonic() - start) * 1000),
    )
    return report


def generate_report(
    profile_path: Path,
    root: Path | None = None,
    *,
    title: str | None = None,
    config: CoverviewConfig | None = None,
) -> Report:
    """Parse a profile file and assemble its Report.

    Args:
        profile_path: Coverage profile written by ``go test -coverprofile``.
        root: Source root; defaults to the profile's directory.
        title: Report title; defaults to the configured title.
        config: Run configuration; defaults apply when None.

    Raises:
        FormatError: The profile is malformed.
        ConsistencyError: Duplicate blocks disagree on statement count.
        ResolverUnavailable: The package lookup was needed and failed.
    """
    set_run_id()
    root = root if root is not None else profile_path.parent
    profiles = parse_profile(profile_path)
    log.info("profile_loaded", path=str(profile_path), files=len(profiles))
    return build_report(profiles, root, title=title, config=config)
