"""dbdump configuration management.

This module centralizes all configuration loading from environment variables
and provides sensible defaults. All modules should import configuration
values from here rather than reading environment variables directly.

Environment Variables:
    DBDUMP_DATABASE_URL: SQLAlchemy URL of the database to dump or load
                         Default: unset (must be given on the command line)

    DBDUMP_SCHEMA: Database schema holding the tables (engines with schemas)
                   Default: unset (engine default schema)

    DBDUMP_FORMAT: Serialization format for dump files
                   Options: yaml, csv
                   Default: yaml

    DBDUMP_INCLUDE: Tables to process, separated by ':' or ','
                    Default: unset (all tables). Falls back to ``include``.

    DBDUMP_EXCLUDE: Tables to skip, separated by ':' or ','
                    Default: unset. Falls back to ``exclude``.

    DBDUMP_PAGE_SIZE: Records read per query while dumping
                      Default: 1000

    DBDUMP_BATCH_SIZE: Records sent per bulk insert while loading
                       Default: 1000

    DBDUMP_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
                      Default: INFO

    DBDUMP_LOG_FORMAT: Log output format (text, json)
                       Default: text
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from dbdump.exceptions import ConfigurationError

VALID_FORMATS = ("yaml", "csv")


def _get_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.environ.get(key, "")
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str(key: str, default: str) -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


def _get_optional(*keys: str) -> Optional[str]:
    """Get the first non-empty value among several environment variables."""
    for key in keys:
        value = os.environ.get(key, "").strip()
        if value:
            return value
    return None


@dataclass
class DBDumpConfig:
    """dbdump configuration container.

    All configuration values are loaded from environment variables
    with sensible defaults.

    Usage:
        from dbdump.core.config import load_config

        config = load_config()
        page_size = config.page_size
    """

    # Connection
    database_url: Optional[str] = field(default_factory=lambda: _get_optional("DBDUMP_DATABASE_URL"))
    schema: Optional[str] = field(default_factory=lambda: _get_optional("DBDUMP_SCHEMA"))

    # Table selection (raw delimited strings, parsed by the selector)
    include: Optional[str] = field(default_factory=lambda: _get_optional("DBDUMP_INCLUDE", "include"))
    exclude: Optional[str] = field(default_factory=lambda: _get_optional("DBDUMP_EXCLUDE", "exclude"))

    # Dump/load behaviour
    format: str = field(default_factory=lambda: _get_str("DBDUMP_FORMAT", "yaml").lower())
    page_size: int = field(default_factory=lambda: _get_int("DBDUMP_PAGE_SIZE", 1000))
    batch_size: int = field(default_factory=lambda: _get_int("DBDUMP_BATCH_SIZE", 1000))

    # Logging
    log_level: str = field(default_factory=lambda: _get_str("DBDUMP_LOG_LEVEL", "INFO").upper())
    log_format: str = field(default_factory=lambda: _get_str("DBDUMP_LOG_FORMAT", "text"))

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.format not in VALID_FORMATS:
            raise ConfigurationError(
                f"Invalid DBDUMP_FORMAT: {self.format}. Must be one of: {VALID_FORMATS}"
            )

        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_levels:
            raise ConfigurationError(
                f"Invalid DBDUMP_LOG_LEVEL: {self.log_level}. Must be one of: {valid_levels}"
            )

        valid_log_formats = {"text", "json"}
        if self.log_format not in valid_log_formats:
            raise ConfigurationError(
                f"Invalid DBDUMP_LOG_FORMAT: {self.log_format}. "
                f"Must be one of: {valid_log_formats}"
            )

        if self.page_size < 1:
            raise ConfigurationError(f"DBDUMP_PAGE_SIZE must be >= 1, got {self.page_size}")

        if self.batch_size < 1:
            raise ConfigurationError(f"DBDUMP_BATCH_SIZE must be >= 1, got {self.batch_size}")

    def as_dict(self) -> dict:
        """Export configuration as dictionary.

        Returns:
            Dictionary of all configuration values
        """
        return {
            "database_url": self.database_url,
            "schema": self.schema,
            "include": self.include,
            "exclude": self.exclude,
            "format": self.format,
            "page_size": self.page_size,
            "batch_size": self.batch_size,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


def load_config() -> DBDumpConfig:
    """Load configuration from environment.

    Call this to refresh config if the environment has changed.

    Returns:
        New DBDumpConfig instance
    """
    return DBDumpConfig()
