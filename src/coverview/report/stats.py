"""Coverage percentages, severity classes and display helpers."""

import re
from enum import StrEnum

HIGH_THRESHOLD = 90.0
MEDIUM_THRESHOLD = 75.0


class CoverageClass(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


def percent(covered: int, total: int) -> float:
    """Covered share as 0-100. Nothing to cover counts as fully covered."""
    if total == 0:
        return 100.0
    return covered / total * 100.0


def coverage_class(value: float) -> CoverageClass:
    if value >= HIGH_THRESHOLD:
        return CoverageClass.HIGH
    if value >= MEDIUM_THRESHOLD:
        return CoverageClass.MEDIUM
    if value > 0:
        return CoverageClass.LOW
    return CoverageClass.NONE


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


_ANCHOR_PATTERN = re.compile(r"[^a-zA-Z0-9_-]+")


def sanitize_anchor(value: str) -> str:
    """HTML-safe anchor id: ``pkg/a.go`` -> ``pkg-a-go``."""
    sanitized = _ANCHOR_PATTERN.sub("-", value).strip("-")
    return sanitized or "file"


def compress_ranges(numbers: list[int]) -> str:
    """Compress sorted line numbers: [1, 2, 3, 5] -> "1-3,5"."""
    if not numbers:
        return ""

    parts: list[str] = []
    start = prev = numbers[0]
    for number in numbers[1:]:
        if number == prev + 1:
            prev = number
            continue
        parts.append(str(start) if start == prev else f"{start}-{prev}")
        start = prev = number
    parts.append(str(start) if start == prev else f"{start}-{prev}")
    return ",".join(parts)
