"""Core module exports."""

from coverview.core.errors import (
    ConfigError,
    ConsistencyError,
    CoverviewError,
    ErrorCode,
    FormatError,
    ResolverUnavailable,
    SourceMissing,
)
from coverview.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from coverview.core.progress import pluralize, spinner, status

__all__ = [
    # Errors
    "ConfigError",
    "ConsistencyError",
    "CoverviewError",
    "ErrorCode",
    "FormatError",
    "ResolverUnavailable",
    "SourceMissing",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "pluralize",
    "spinner",
    "status",
]
