"""Pydantic models for book-search configuration."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class OutputFormat(str, Enum):
    """Supported output formats."""

    RICH = "rich"
    PLAIN = "plain"
    JSON = "json"


class SearchConfig(BaseModel):
    """Search engine configuration."""

    max_results: int = Field(default=200, ge=1)
    min_query_length: int = Field(default=2, ge=1)
    snippet_window: int = Field(default=80, ge=0)
    case_sensitive: bool = False
    whole_word: bool = False


class LoadingConfig(BaseModel):
    """Chapter loading configuration."""

    retry_attempts: int = Field(default=1, ge=1)  # 1 = no retry
    retry_min_wait: float = Field(default=0.5, ge=0.0)
    retry_max_wait: float = Field(default=4.0, ge=0.0)


class OutputConfig(BaseModel):
    """Output configuration."""

    default_format: OutputFormat = OutputFormat.RICH
    color: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False


class BookSearchConfig(BaseModel):
    """Root configuration for book-search."""

    model_config = ConfigDict(use_enum_values=True)

    search: SearchConfig = Field(default_factory=SearchConfig)
    loading: LoadingConfig = Field(default_factory=LoadingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
