"""File-level orchestration of dumps and loads.

Ties an adapter, a container format and the dump/load engines together
for whole files and per-table directories.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from dbdump.containers.yaml_container import YamlContainer
from dbdump.core.adapter import DatabaseAdapter
from dbdump.core.container import Container
from dbdump.core.dumper import DEFAULT_PAGE_SIZE, Dumper
from dbdump.core.loader import DEFAULT_BATCH_SIZE, Loader
from dbdump.core.selector import TableSelector
from dbdump.models.results import DumpResult, LoadResult
from dbdump.utils.log import quiet_logging

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SerializationHelper:
    """Dumps a database to files and loads files back.

    SQLAlchemy statement logging, including an engine's ``echo`` output,
    is silenced while an operation runs.

    Examples:
        >>> with create_adapter("sqlite:///app.db") as adapter:
        ...     helper = SerializationHelper(adapter, CsvContainer)
        ...     helper.dump_to_dir("backup/")
        ...     helper.load_from_dir("backup/", truncate=True)
    """

    def __init__(
        self,
        adapter: DatabaseAdapter,
        container_class: type[Container] = YamlContainer,
        selector: Optional[TableSelector] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        """Initialize helper.

        Args:
            adapter: Connected adapter
            container_class: Serialization format
            selector: Table selection policy (default: every non-bookkeeping table)
            page_size: Rows per page query while dumping
            batch_size: Records per bulk insert while loading
        """
        self.adapter = adapter
        self.container_class = container_class
        self.selector = selector or TableSelector(adapter)
        self.dumper = Dumper(adapter, self.selector, page_size=page_size)
        self.loader = Loader(adapter, batch_size=batch_size)

    @property
    def extension(self) -> str:
        return self.container_class.extension

    def _quiet(self):
        return quiet_logging(engine=getattr(self.adapter, "engine", None))

    def dump(self, path: PathLike) -> DumpResult:
        """Dump every selected table into one file."""
        path = Path(path)
        with self._quiet(), self.container_class.open(path, "w") as container:
            result = self.dumper.dump(container)
        result.target = str(path)
        return result

    def dump_to_dir(self, dirname: PathLike) -> DumpResult:
        """Dump each selected table into ``<dirname>/<table>.<ext>``.

        The directory is created if missing. Empty tables still get a file.
        """
        directory = Path(dirname)
        directory.mkdir(parents=True, exist_ok=True)
        result = DumpResult(started_at=datetime.now(), target=str(directory))
        with self._quiet():
            for table in self.selector.tables():
                path = directory / f"{table}.{self.extension}"
                with self.container_class.open(path, "w") as container:
                    result.merge(self.dumper.dump(container, tables=[table]))
        result.finish()
        return result

    def load(self, path: PathLike, truncate: bool = True) -> LoadResult:
        """Load one file in one transaction."""
        path = Path(path)
        with self._quiet(), self.container_class.open(path, "r") as container:
            result = self.loader.load(container, truncate=truncate)
        result.source = str(path)
        return result

    def load_from_dir(self, dirname: PathLike, truncate: bool = True) -> LoadResult:
        """Load every regular, non-hidden file of a directory, sorted by name.

        Each file is its own transaction. The first failure propagates;
        files loaded before it stay committed.
        """
        directory = Path(dirname)
        files = sorted(
            (p for p in directory.iterdir() if p.is_file() and not p.name.startswith(".")),
            key=lambda p: p.name,
        )
        result = LoadResult(started_at=datetime.now(), source=str(directory), truncate=truncate)
        for path in files:
            logger.debug("Loading %s", path)
            result.merge(self.load(path, truncate=truncate))
        result.finish()
        return result
