"""Serialization container implementations."""

from __future__ import annotations

from dbdump.containers.csv_container import CsvContainer
from dbdump.containers.memory import MemoryContainer
from dbdump.containers.yaml_container import YamlContainer
from dbdump.core.container import Container
from dbdump.exceptions import ConfigurationError

# Format name → container class
CONTAINERS: dict[str, type[Container]] = {
    "yaml": YamlContainer,
    "yml": YamlContainer,
    "csv": CsvContainer,
}


def get_container_class(format: str) -> type[Container]:
    """Look up the container class for a format name.

    Raises:
        ConfigurationError: If the format is unknown
    """
    try:
        return CONTAINERS[format.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown format: {format}. Must be one of: {sorted(set(CONTAINERS))}"
        ) from None


__all__ = [
    "CONTAINERS",
    "CsvContainer",
    "MemoryContainer",
    "YamlContainer",
    "get_container_class",
]
