"""dbdump exception hierarchy."""

from __future__ import annotations


class DBDumpError(Exception):
    """Base exception for all dbdump errors."""

    pass


class ConfigurationError(DBDumpError):
    """Raised when configuration is invalid or missing."""

    pass


class AdapterError(DBDumpError):
    """Raised when an operation on the underlying database engine fails."""

    pass


class ConnectionError(AdapterError):
    """Raised when connection to a database fails."""

    pass


class FormatError(DBDumpError):
    """Raised when serialized input is malformed or inconsistent."""

    pass
