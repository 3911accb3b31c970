"""go.mod module descriptor."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ModuleInfo:
    """Module path declared in go.mod and its last segment.

    Both are empty when the root has no readable go.mod.
    """

    path: str = ""
    base: str = ""

    @classmethod
    def load(cls, root: Path) -> ModuleInfo:
        try:
            content = (root / "go.mod").read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return cls()
        return cls.parse(content)

    @classmethod
    def parse(cls, content: str) -> ModuleInfo:
        for line in content.splitlines():
            parts = line.strip().split()
            if len(parts) >= 2 and parts[0] == "module":
                module_path = parts[1].strip('"')
                return cls(path=module_path, base=posixpath.basename(module_path))
        return cls()

    @property
    def prefixes(self) -> tuple[str, ...]:
        """Identifier prefixes to strip, longest first."""
        return tuple(f"{value}/" for value in (self.path, self.base) if value)
