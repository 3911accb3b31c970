"""Batched Go package metadata lookup.

Runs ``go list -e -json`` once for every distinct package directory named in
the profile, so cost scales with packages rather than files. ``-e`` makes go
report per-package errors inline instead of failing the whole command.
"""

from __future__ import annotations

import json
import subprocess
import time
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from coverview.core.errors import ResolverUnavailable
from coverview.core.logging import get_logger

log = get_logger("resolve.packages")


@dataclass(frozen=True, slots=True)
class PackageInfo:
    """One package as reported by ``go list``."""

    import_path: str
    dir: str = ""
    error: str | None = None

    @property
    def usable(self) -> bool:
        return bool(self.dir) and self.error is None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> PackageInfo:
        error = data.get("Error")
        message = None
        if error:
            message = error.get("Err", "unknown error") if isinstance(error, dict) else str(error)
        return cls(
            import_path=data.get("ImportPath", ""),
            dir=data.get("Dir", ""),
            error=message,
        )


def decode_package_stream(output: str) -> list[PackageInfo]:
    """Decode the concatenated JSON objects that ``go list -json`` prints.

    Raises:
        ValueError: Output is not a sequence of JSON objects.
    """
    decoder = json.JSONDecoder()
    packages: list[PackageInfo] = []
    index = 0
    length = len(output)

    while True:
        while index < length and output[index].isspace():
            index += 1
        if index >= length:
            break
        data, index = decoder.raw_decode(output, index)
        if not isinstance(data, dict):
            raise ValueError(f"expected JSON object, got {type(data).__name__}")
        packages.append(PackageInfo.from_json(data))

    return packages


def lookup_packages(
    root: Path,
    import_paths: Iterable[str],
    *,
    go_binary: str = "go",
    timeout: float = 60.0,
) -> dict[str, PackageInfo]:
    """Resolve import paths to package directories with a single ``go list`` call.

    Args:
        root: Directory to run go in (the module root).
        import_paths: Package import paths; duplicates are ignored.
        go_binary: Go executable.
        timeout: Seconds before the lookup is abandoned.

    Returns:
        Mapping of import path to PackageInfo for every package go reported.

    Raises:
        ResolverUnavailable: go missing, failed, timed out, or printed garbage.
    """
    paths = list(dict.fromkeys(import_paths))
    if not paths:
        return {}

    cmd = [go_binary, "list", "-e", "-json", *paths]
    command_name = f"{go_binary} list"
    start = time.monotonic()

    try:
        result = subprocess.run(
            cmd,
            cwd=root,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise ResolverUnavailable.timed_out(command_name, timeout) from None
    except OSError as e:
        raise ResolverUnavailable.command_failed(command_name, str(e)) from e

    duration_ms = int((time.monotonic() - start) * 1000)

    if result.returncode != 0:
        message = result.stderr.strip() or f"exit status {result.returncode}"
        raise ResolverUnavailable.command_failed(command_name, message)

    try:
        packages = decode_package_stream(result.stdout)
    except ValueError as e:
        raise ResolverUnavailable.command_failed(command_name, f"decoding go list json: {e}") from e

    log.debug(
        "packages_resolved",
        requested=len(paths),
        returned=len(packages),
        errors=sum(1 for p in packages if p.error),
        duration_ms=duration_ms,
    )
    return {package.import_path: package for package in packages}
