"""MySQL type mapper implementation."""

from __future__ import annotations

from dbdump.core.type_mapper import TypeMapper


class MySQLTypeMapper(TypeMapper):
    """Type mapper for MySQL and MariaDB.

    MySQL has no native boolean storage: ``BOOLEAN`` columns are created as
    ``TINYINT(1)`` and reflected that way, so the display width is what
    identifies them.

    Examples:
        >>> MySQLTypeMapper().from_source("TINYINT(1)")
        'boolean'
        >>> MySQLTypeMapper().from_source("TINYINT(4)")
        'tinyint'
    """

    def is_boolean(self, source_type: str) -> bool:
        """Treat ``TINYINT(1)`` as boolean in addition to the standard names."""
        compact = source_type.lower().replace(" ", "")
        if compact.startswith("tinyint(1)"):
            return True
        return super().is_boolean(source_type)
