"""Go coverage profile parser.

Go test produces coverage profiles with format:
mode: set|count|atomic
<package>/<file>:<startline>.<startcol>,<endline>.<endcol> <numstmt> <count>

Example:
mode: set
github.com/user/pkg/main.go:10.2,12.16 3 1
github.com/user/pkg/main.go:15.2,20.16 5 0

- mode: set (0/1), count (hit count), atomic (thread-safe count)
- numstmt: number of statements in block
- count: execution count (0 = not covered)

Profiles concatenated from several runs repeat the mode line; that is
accepted as long as the mode stays the same. Any malformed line aborts the
parse, since a corrupt profile cannot be trusted for any file.
"""

from pathlib import Path

from coverview.core.errors import FormatError
from coverview.core.logging import get_logger
from coverview.profile.merge import merge_profiles
from coverview.profile.models import CountingMode, CoverageBlock, Profile

log = get_logger("profile.parser")

MODE_PREFIX = "mode:"


def _parse_mode(line: str, line_number: int) -> CountingMode:
    name = line[len(MODE_PREFIX) :].strip()
    try:
        return CountingMode(name)
    except ValueError:
        raise FormatError.invalid_line(line_number, f"unknown mode {name!r}") from None


def _parse_position(value: str, line_number: int, which: str) -> tuple[int, int]:
    parts = value.split(".")
    if len(parts) != 2:
        raise FormatError.invalid_line(line_number, f"{which} position {value!r} is not line.col")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise FormatError.invalid_line(
            line_number, f"{which} position {value!r} is not numeric"
        ) from None


def _parse_int(value: str, line_number: int, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise FormatError.invalid_line(line_number, f"{what} {value!r} is not an integer") from None


def parse_block_line(line: str, line_number: int) -> tuple[str, CoverageBlock]:
    """Parse one data line into its file identifier and block.

    Raises:
        FormatError: Wrong field count, bad range, or non-integer counts.
    """
    fields = line.split()
    if len(fields) != 3:
        raise FormatError.invalid_line(line_number, f"expected 3 fields, got {len(fields)}")

    path_range, num_stmt_field, count_field = fields

    # File paths never contain ':', but Windows drive letters do: split on the last one.
    colon_idx = path_range.rfind(":")
    if colon_idx <= 0:
        raise FormatError.invalid_line(line_number, "missing ':' between file and range")

    file_name = path_range[:colon_idx]
    range_parts = path_range[colon_idx + 1 :].split(",")
    if len(range_parts) != 2:
        raise FormatError.invalid_line(line_number, "range is not start,end")

    start_line, start_col = _parse_position(range_parts[0], line_number, "start")
    end_line, end_col = _parse_position(range_parts[1], line_number, "end")
    if (start_line, start_col) > (end_line, end_col):
        raise FormatError.invalid_line(line_number, "range ends before it starts")

    block = CoverageBlock(
        start_line=start_line,
        start_col=start_col,
        end_line=end_line,
        end_col=end_col,
        num_stmt=_parse_int(num_stmt_field, line_number, "statement count"),
        count=_parse_int(count_field, line_number, "execution count"),
    )
    return file_name, block


def parse_profile_text(text: str, *, merge: bool = True) -> list[Profile]:
    """Parse profile text into per-file Profiles, in first-seen order.

    Args:
        text: Raw profile content.
        merge: Collapse duplicate blocks after parsing.

    Raises:
        FormatError: Missing/unknown mode line or malformed data line.
        ConsistencyError: Duplicate ranges disagree on statement count.
    """
    profiles: dict[str, Profile] = {}
    mode: CountingMode | None = None

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith(MODE_PREFIX):
            line_mode = _parse_mode(line, line_number)
            if mode is not None and line_mode is not mode:
                raise FormatError.invalid_line(
                    line_number, f"mode changed from {mode.value} to {line_mode.value}"
                )
            mode = line_mode
            continue

        if mode is None:
            raise FormatError.missing_mode(line_number)

        file_name, block = parse_block_line(line, line_number)

        profile = profiles.get(file_name)
        if profile is None:
            profile = Profile(file_name=file_name, mode=mode)
            profiles[file_name] = profile
        profile.blocks.append(block)

    if mode is None:
        raise FormatError.missing_mode()

    result = list(profiles.values())
    log.debug(
        "profile_parsed",
        mode=mode.value,
        files=len(result),
        blocks=sum(len(p.blocks) for p in result),
    )

    if merge:
        merge_profiles(result)
    return result


def parse_profile(path: Path, *, merge: bool = True) -> list[Profile]:
    """Read and parse a coverage profile file.

    Raises:
        FormatError: File unreadable or malformed.
        ConsistencyError: Duplicate ranges disagree on statement count.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FormatError.unreadable(str(path), str(e)) from e

    return parse_profile_text(content, merge=merge)
