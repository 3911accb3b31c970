"""Config module exports."""

from coverview.config.loader import load_config
from coverview.config.models import (
    CoverviewConfig,
    LoggingConfig,
    LogOutputConfig,
    ReportConfig,
    ResolverConfig,
)

__all__ = [
    "load_config",
    "CoverviewConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ReportConfig",
    "ResolverConfig",
]
