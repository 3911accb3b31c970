"""Map profile file identifiers to source files on disk.

Profiles name files by import path (``example.com/mod/pkg/file.go``), by a
path relative to the module (``./pkg/file.go``), or absolutely. Strategies,
in order:

1. absolute identifier: used as-is
2. ``.``-prefixed identifier: joined to the root
3. package metadata: ``go list`` directory for the identifier's package
4. fallback: root join, go.mod prefix stripping, then shorter and shorter
   path suffixes

Resolution never raises; an unresolved identifier yields a best-guess path
that the caller will fail to read and flag as missing.
"""

from __future__ import annotations

import os
import posixpath
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from coverview.config.models import ResolverConfig
from coverview.core.logging import get_logger
from coverview.profile.models import Profile
from coverview.resolve.module import ModuleInfo
from coverview.resolve.packages import PackageInfo, lookup_packages

log = get_logger("resolve.resolver")


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def _is_absolute(file_name: str) -> bool:
    return os.path.isabs(file_name) or PurePosixPath(file_name).is_absolute()


def _is_relative(file_name: str) -> bool:
    return file_name.startswith(".")


def package_paths(file_names: Iterable[str]) -> list[str]:
    """Distinct package import paths needing a metadata lookup, first-seen order.

    Absolute and ``.``-relative identifiers resolve without package metadata,
    and bare file names have no package component.
    """
    seen: dict[str, None] = {}
    for file_name in file_names:
        if _is_absolute(file_name) or _is_relative(file_name):
            continue
        directory = posixpath.dirname(file_name)
        if directory:
            seen.setdefault(directory, None)
    return list(seen)


@dataclass(slots=True)
class FileResolver:
    """Resolves identifiers against a root, a go.mod and pre-fetched packages."""

    root: Path
    module: ModuleInfo = field(default_factory=ModuleInfo)
    packages: dict[str, PackageInfo] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        root: Path,
        profiles: Iterable[Profile],
        config: ResolverConfig | None = None,
    ) -> FileResolver:
        """Build a resolver, fetching package metadata in one batched call.

        Raises:
            ResolverUnavailable: The package lookup was needed and failed.
        """
        config = config or ResolverConfig()
        root = root.resolve()
        packages: dict[str, PackageInfo] = {}

        if config.use_go_list:
            paths = package_paths(profile.file_name for profile in profiles)
            packages = lookup_packages(
                root,
                paths,
                go_binary=config.go_binary,
                timeout=config.timeout_sec,
            )

        return cls(root=root, module=ModuleInfo.load(root), packages=packages)

    def resolve(self, file_name: str) -> tuple[str, str]:
        """Return ``(source_path, relative_path)`` for a profile identifier.

        The relative path uses ``/`` separators.
        """
        if _is_absolute(file_name):
            return file_name, file_name

        if _is_relative(file_name):
            relative = posixpath.normpath(file_name)
            candidate = self.root / relative
            if _is_file(candidate):
                return str(candidate), relative

        resolved = self._resolve_from_packages(file_name)
        if resolved is not None:
            return resolved

        return self._resolve_fallback(file_name)

    def _resolve_from_packages(self, file_name: str) -> tuple[str, str] | None:
        package = self.packages.get(posixpath.dirname(file_name))
        if package is None or not package.usable:
            return None

        candidate = Path(package.dir) / posixpath.basename(file_name)
        if not _is_file(candidate):
            return None

        return str(candidate), self._relative_to_root(candidate)

    def _relative_to_root(self, candidate: Path) -> str:
        try:
            return Path(os.path.relpath(candidate, self.root)).as_posix()
        except ValueError:
            # Different drive on Windows
            return candidate.as_posix()

    def _resolve_fallback(self, file_name: str) -> tuple[str, str]:
        candidate = self.root / file_name
        if _is_file(candidate):
            return str(candidate), file_name

        for prefix in self.module.prefixes:
            if file_name.startswith(prefix):
                trimmed = file_name[len(prefix) :]
                trimmed_candidate = self.root / trimmed
                if _is_file(trimmed_candidate):
                    return str(trimmed_candidate), trimmed

        suffix_match = self._resolve_by_suffix(file_name)
        if suffix_match is not None:
            return suffix_match

        log.debug("file_unresolved", file=file_name, guess=str(candidate))
        return str(candidate), file_name

    def _resolve_by_suffix(self, file_name: str) -> tuple[str, str] | None:
        parts = file_name.split("/")
        for index in range(1, len(parts)):
            trimmed = "/".join(part for part in parts[index:] if part)
            if not trimmed:
                continue
            candidate = self.root / trimmed
            if _is_file(candidate):
                return str(candidate), trimmed
        return None
