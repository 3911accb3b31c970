"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COVERVIEW__SECTION__KEY)
3. Project YAML (<root>/.coverview.yaml)
4. Built-in defaults (this file)

Examples:
    COVERVIEW__LOGGING__LEVEL=DEBUG
    COVERVIEW__RESOLVER__TIMEOUT_SEC=120
    COVERVIEW__REPORT__WORKERS=4
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVERVIEW__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. Progress events are INFO, per-file detail DEBUG.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ResolverConfig(BaseModel):
    """Source file resolution.

    Env vars:
        COVERVIEW__RESOLVER__USE_GO_LIST: Query package metadata with `go list`
        COVERVIEW__RESOLVER__GO_BINARY: Go toolchain executable
        COVERVIEW__RESOLVER__TIMEOUT_SEC: Max wait for the package lookup
    """

    use_go_list: bool = Field(
        default=True,
        description="Resolve import paths to directories with one batched `go list` call. "
        "When disabled only direct, go.mod prefix and suffix matching are used.",
    )
    go_binary: str = Field(
        default="go",
        description="Go executable used for the package lookup.",
    )
    timeout_sec: float = Field(
        default=60.0,
        description="Timeout for the package lookup. Expiry aborts the run.",
    )

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class ReportConfig(BaseModel):
    """Report assembly.

    Env vars:
        COVERVIEW__REPORT__TITLE: Report title
        COVERVIEW__REPORT__WORKERS: Threads used to read and annotate files
    """

    title: str = Field(
        default="Go Coverage Report",
        description="Report title handed to the renderer.",
    )
    workers: int = Field(
        default=1,
        description="Worker threads for per-file annotation. 1 runs sequentially.",
    )

    @field_validator("workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Workers must be >= 1, got {v}")
        return v


class CoverviewConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
