"""Base TypeMapper class.

This module defines the TypeMapper used by adapters to turn
engine-reported column types into dbdump type tags.
"""

from __future__ import annotations

from dbdump.models.table import BOOLEAN


class TypeMapper:
    """Converts engine column types into dbdump type tags.

    dbdump distinguishes exactly one type: ``boolean``. Engines disagree on
    how booleans are declared and stored, so each adapter can provide a
    mapper that recognizes its own spellings. Every other type maps to its
    normalized name and is treated as opaque.

    Examples:
        >>> mapper = TypeMapper()
        >>> mapper.from_source("BOOLEAN")
        'boolean'
        >>> mapper.from_source("VARCHAR(255)")
        'varchar'
    """

    # Normalized type names that denote a boolean column
    BOOLEAN_TYPES: frozenset[str] = frozenset({"boolean", "bool"})

    def from_source(self, source_type: str) -> str:
        """Convert an engine type string to a type tag.

        Args:
            source_type: Engine type string (e.g., "BOOLEAN", "INTEGER", "VARCHAR(255)")

        Returns:
            ``"boolean"`` for boolean columns, otherwise the normalized type name
        """
        if self.is_boolean(source_type):
            return BOOLEAN
        return self.normalize_source_type(source_type)

    def is_boolean(self, source_type: str) -> bool:
        """Whether the engine type denotes a boolean column."""
        return self.normalize_source_type(source_type) in self.BOOLEAN_TYPES

    def normalize_source_type(self, source_type: str) -> str:
        """Normalize source type string for consistent mapping.

        Removes parameters and converts to lowercase.

        Examples:
            "VARCHAR(255)" -> "varchar"
            "NUMERIC(10,2)" -> "numeric"
        """
        normalized = source_type.lower().strip()

        # Remove parameters like (255) or (10,2)
        if "(" in normalized:
            normalized = normalized.split("(")[0].strip()

        return normalized
