"""Duplicate block merging.

Instrumentation can record the same source range more than once (for example
when a package is compiled into several test binaries). Merging collapses each
unique range into one block:

- identical ranges must agree on statement count, else ConsistencyError
- SET mode: counts clamp to 0/1 and combine with OR ("hit in any run")
- COUNT/ATOMIC mode: counts add up

The result is independent of input order, and merging a merged list is a
no-op.
"""

from collections.abc import Iterable
from dataclasses import replace

from coverview.core.errors import ConsistencyError
from coverview.core.logging import get_logger
from coverview.profile.models import CountingMode, CoverageBlock, Profile

log = get_logger("profile.merge")


def _sort_key(block: CoverageBlock) -> tuple[int, int, int, int]:
    # End coordinates break ties so identical ranges always end up adjacent.
    return (block.start_line, block.start_col, block.end_line, block.end_col)


def _combine(left: int, right: int, mode: CountingMode) -> int:
    if mode.is_boolean:
        return int(left > 0) | int(right > 0)
    return left + right


def merge_blocks(
    blocks: Iterable[CoverageBlock],
    mode: CountingMode,
    *,
    file_name: str = "",
) -> list[CoverageBlock]:
    """Collapse blocks with identical ranges into one block per range.

    Args:
        blocks: Raw blocks for one file, in any order.
        mode: Counting mode declared by the profile.
        file_name: Profile identifier, used in error messages.

    Returns:
        Blocks sorted by start position, one per unique range.

    Raises:
        ConsistencyError: Two identical ranges carry different statement counts.
    """
    merged: list[CoverageBlock] = []

    for block in sorted(blocks, key=_sort_key):
        if mode.is_boolean and block.count > 1:
            block = replace(block, count=1)

        if merged and merged[-1].same_range(block):
            last = merged[-1]
            if last.num_stmt != block.num_stmt:
                raise ConsistencyError.statement_mismatch(
                    file_name, block.range_label(), last.num_stmt, block.num_stmt
                )
            merged[-1] = replace(last, count=_combine(last.count, block.count, mode))
            continue

        merged.append(block)

    return merged


def merge_profiles(profiles: list[Profile]) -> list[Profile]:
    """Merge each profile's blocks in place and return the same list."""
    for profile in profiles:
        raw = len(profile.blocks)
        profile.blocks = merge_blocks(profile.blocks, profile.mode, file_name=profile.file_name)
        if raw != len(profile.blocks):
            log.debug(
                "blocks_merged",
                file=profile.file_name,
                raw=raw,
                merged=len(profile.blocks),
            )
    return profiles
