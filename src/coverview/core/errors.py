"""Coverview error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Profile
- 4xxx: Resolution
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Profile (3xxx)
    PROFILE_FORMAT_ERROR = 3001
    PROFILE_MISSING_MODE = 3002
    PROFILE_INCONSISTENT_BLOCK = 3003

    # Resolution (4xxx)
    RESOLVER_UNAVAILABLE = 4001
    RESOLVER_TIMEOUT = 4002
    SOURCE_MISSING = 4003


@dataclass(frozen=True)
class CoverviewError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PROFILE_FORMAT_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CoverviewError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class FormatError(CoverviewError):
    """Malformed coverage profile. Fatal for the whole run."""

    @classmethod
    def invalid_line(cls, line_number: int, reason: str) -> "FormatError":
        return cls(
            code=ErrorCode.PROFILE_FORMAT_ERROR,
            message=f"invalid profile line {line_number}: {reason}",
            details={"line": line_number, "reason": reason},
        )

    @classmethod
    def missing_mode(cls, line_number: int | None = None) -> "FormatError":
        details: dict[str, Any] = {}
        if line_number is not None:
            details["line"] = line_number
        return cls(
            code=ErrorCode.PROFILE_MISSING_MODE,
            message="missing mode",
            details=details,
        )

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "FormatError":
        return cls(
            code=ErrorCode.PROFILE_FORMAT_ERROR,
            message=f"cannot read profile {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ConsistencyError(CoverviewError):
    """Two occurrences of one source range disagree on statement count."""

    @classmethod
    def statement_mismatch(
        cls, file_name: str, block_range: str, previous: int, current: int
    ) -> "ConsistencyError":
        return cls(
            code=ErrorCode.PROFILE_INCONSISTENT_BLOCK,
            message=(
                f"inconsistent statement count for {file_name}:{block_range}: "
                f"changed from {previous} to {current}"
            ),
            details={
                "file": file_name,
                "range": block_range,
                "previous": previous,
                "current": current,
            },
        )


class ResolverUnavailable(CoverviewError):
    """Package metadata lookup failed or timed out."""

    @classmethod
    def command_failed(cls, command: str, reason: str) -> "ResolverUnavailable":
        return cls(
            code=ErrorCode.RESOLVER_UNAVAILABLE,
            message=f"cannot run {command}: {reason}",
            details={"command": command, "reason": reason},
        )

    @classmethod
    def timed_out(cls, command: str, timeout: float) -> "ResolverUnavailable":
        return cls(
            code=ErrorCode.RESOLVER_TIMEOUT,
            message=f"{command} timed out after {timeout}s",
            details={"command": command, "timeout": timeout},
        )


class SourceMissing(CoverviewError):
    """A profiled file could not be read after all resolution strategies.

    Recovered per file: the file is flagged missing in the report.
    """

    @classmethod
    def not_found(cls, file_name: str, path: str) -> "SourceMissing":
        return cls(
            code=ErrorCode.SOURCE_MISSING,
            message=f"source not found at {path}",
            details={"file": file_name, "path": path},
        )

